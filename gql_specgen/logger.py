"""Console logging for the gql-specgen CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "gql_specgen"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Library code only logs through ``logging.getLogger(__name__)``; handlers
    are installed here, by the CLI, and only once.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
