"""Generation config.

A config file is JSON:

    {
        "scalars": {"DateTime": "datetime.datetime", "Money": "decimal.Decimal"},
        "selections": {"User": ["id", "name"]},
        "header": "# Generated by gql-specgen. Do not edit."
    }

``scalars`` maps custom GraphQL scalars to Python types. ``selections`` lists
the fields a type's fragment requests; a type not listed requests all of its
fields.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .scalars import ScalarRegistry


class CodegenConfig(BaseModel):
    """Options for one generation run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    scalars: dict[str, str] = Field(default_factory=dict)
    selections: dict[str, list[str]] = Field(default_factory=dict)
    header: str | None = None

    def scalar_registry(self) -> ScalarRegistry:
        return ScalarRegistry.from_config(self.scalars)

    def selection_for(self, type_name: str) -> list[str] | None:
        """Configured field names for a type, or None when all fields are selected."""
        return self.selections.get(type_name)


def load_config(path: str | Path) -> CodegenConfig:
    """Load a config file.

    Raises:
        ConfigError: if the file cannot be read or does not match the schema
    """
    config_path = Path(path)
    try:
        content = config_path.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    try:
        return CodegenConfig.model_validate_json(content)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}:\n{e}") from e
