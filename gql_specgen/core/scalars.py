"""Mapping of GraphQL scalars to Python types for generated code.

Built-in GraphQL scalars always map to Python builtins. Common custom scalars
have defaults, and a config file can override or extend them with dotted
paths:

    registry = ScalarRegistry.from_config({"Money": "decimal.Decimal"})
    registry.get("Money").python_type        # "_decimal.Decimal"
    registry.get("Money").import_statement   # "import decimal as _decimal"

Generated modules import through underscore aliases so a GraphQL field named
``date`` or ``decimal`` can never shadow the annotation of its own type.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar mappings.

    Attributes:
        python_type: The annotation used in generated code (e.g., "_datetime.datetime")
        import_statement: The import the annotation needs, or "" for builtins
    """

    python_type: str
    import_statement: str


@dataclass(frozen=True)
class PythonType:
    """A scalar mapped to a Python type."""
    python_type: str
    import_statement: str = ""

    @classmethod
    def from_path(cls, path: str) -> "PythonType":
        """Build a mapping from ``package.module.Name`` or a bare builtin name."""
        module, _, name = path.rpartition(".")
        if not module:
            return cls(python_type=name)
        alias = "_" + module.replace(".", "_")
        return cls(python_type=f"{alias}.{name}", import_statement=f"import {module} as {alias}")


BUILTIN_SCALARS: dict[str, PythonType] = {
    "String": PythonType("str"),
    "Int": PythonType("int"),
    "Float": PythonType("float"),
    "Boolean": PythonType("bool"),
    "ID": PythonType("str"),
}

DEFAULT_SCALARS: dict[str, PythonType] = {
    "DateTime": PythonType.from_path("datetime.datetime"),
    "Date": PythonType.from_path("datetime.date"),
    "Time": PythonType.from_path("datetime.time"),
    "UUID": PythonType.from_path("uuid.UUID"),
    "Decimal": PythonType.from_path("decimal.Decimal"),
    "JSON": PythonType.from_path("typing.Any"),
    "JSONObject": PythonType.from_path("typing.Any"),
}

FALLBACK = PythonType.from_path("typing.Any")


class ScalarRegistry:
    """Registry of scalar mappings used while rendering annotations.

    Example:
        registry = ScalarRegistry()
        registry.register("Cursor", PythonType("str"))
        registry.resolve("Cursor").python_type  # "str"
    """

    def __init__(self):
        self._handlers: dict[str, ScalarHandler] = {}
        self._handlers.update(BUILTIN_SCALARS)
        self._handlers.update(DEFAULT_SCALARS)
        self._warned: set[str] = set()

    @classmethod
    def from_config(cls, scalars: Mapping[str, str]) -> "ScalarRegistry":
        """Create a registry with config entries layered over the defaults."""
        registry = cls()
        for scalar_name, path in scalars.items():
            registry.register(scalar_name, PythonType.from_path(path))
        return registry

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        if scalar_name in BUILTIN_SCALARS:
            logger.warning("Overriding the mapping of built-in scalar '%s'", scalar_name)
        self._handlers[scalar_name] = handler

    def get(self, scalar_name: str) -> ScalarHandler | None:
        """Get the handler for a scalar type, or None if not registered."""
        return self._handlers.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        return scalar_name in self._handlers

    def resolve(self, scalar_name: str) -> ScalarHandler:
        """Get the handler for a scalar, falling back to ``Any`` for unknown ones."""
        handler = self._handlers.get(scalar_name)
        if handler is None:
            if scalar_name not in self._warned:
                logger.warning("No Python type for scalar '%s', using Any", scalar_name)
                self._warned.add(scalar_name)
            return FALLBACK
        return handler

    def imports_for(self, scalar_names: Iterable[str]) -> list[str]:
        """Import statements needed by the given scalars, sorted."""
        statements = {self.resolve(name).import_statement for name in scalar_names}
        statements.discard("")
        return sorted(statements)
