"""Schema loading from introspection results or SDL.

Turns the JSON an introspection query returns into a ``Schema``. SDL files are
first built into a graphql-core schema and introspected locally, so both
sources go through the same path.

Example:
    schema = load_schema("schema.json")
    schema = load_schema("schema.graphql")
    schema = schema_from_introspection(response["data"])
"""

import json
import logging
from pathlib import Path
from typing import Any

from graphql import GraphQLError, build_client_schema, build_schema, introspection_from_schema

from .errors import SchemaLoadError
from .schema import (
    EnumType,
    EnumValue,
    Field,
    InputObjectType,
    InputValue,
    InterfaceType,
    NamedRef,
    NamedType,
    ObjectType,
    ScalarType,
    Schema,
    TypeKind,
    UnionType,
)
from .typeref import ListType, Named, NonNull, TypeRef

logger = logging.getLogger(__name__)

SDL_SUFFIXES = (".graphql", ".graphqls", ".gql")


class IntrospectionParser:
    """Parses an introspection result into a ``Schema``."""

    def __init__(self, data: dict[str, Any]):
        """Initialize with an introspection result.

        Accepts the full response (``{"data": {"__schema": ...}}``), its data
        (``{"__schema": ...}``) or the bare ``__schema`` object.
        """
        if "data" in data and isinstance(data["data"], dict):
            data = data["data"]
        if "__schema" in data:
            data = data["__schema"]
        self.data = data

    def parse(self) -> Schema:
        """Parse the introspection result.

        Raises:
            SchemaLoadError: if the data is not a well-formed introspection result
        """
        try:
            types = [self._process_type(t) for t in self.data["types"]]
            schema = Schema(
                types,
                query=self._root_name("queryType"),
                mutation=self._root_name("mutationType"),
                subscription=self._root_name("subscriptionType"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise SchemaLoadError(f"Malformed introspection result: {e!r}") from e

        logger.debug(
            "Loaded schema: %d objects, %d enums, %d input objects, %d operation root(s)",
            len(schema.objects), len(schema.enums), len(schema.input_objects), len(schema.operations),
        )
        return schema

    def _root_name(self, key: str) -> str | None:
        root = self.data.get(key)
        return root["name"] if root else None

    def _process_type(self, data: dict[str, Any]) -> NamedType:
        kind = TypeKind(data["kind"])
        name = data["name"]
        description = data.get("description")

        if kind is TypeKind.OBJECT:
            return ObjectType(
                name=name,
                description=description,
                fields=self._process_fields(name, data.get("fields") or []),
                interfaces=tuple(i["name"] for i in data.get("interfaces") or []),
            )
        if kind is TypeKind.INTERFACE:
            return InterfaceType(
                name=name,
                description=description,
                fields=self._process_fields(name, data.get("fields") or []),
                interfaces=tuple(i["name"] for i in data.get("interfaces") or []),
                possible_types=tuple(p["name"] for p in data.get("possibleTypes") or []),
            )
        if kind is TypeKind.UNION:
            return UnionType(
                name=name,
                description=description,
                possible_types=tuple(p["name"] for p in data.get("possibleTypes") or []),
            )
        if kind is TypeKind.ENUM:
            return EnumType(
                name=name,
                description=description,
                values=tuple(
                    EnumValue(
                        name=v["name"],
                        description=v.get("description"),
                        is_deprecated=v.get("isDeprecated", False),
                        deprecation_reason=v.get("deprecationReason"),
                    )
                    for v in data.get("enumValues") or []
                ),
            )
        if kind is TypeKind.INPUT_OBJECT:
            return InputObjectType(
                name=name,
                description=description,
                input_fields=self._process_input_values(data.get("inputFields") or []),
            )
        return ScalarType(name=name, description=description)

    def _process_fields(self, owner: str, fields: list[dict[str, Any]]) -> tuple[Field, ...]:
        result = []
        for data in fields:
            type_ref = self._type_ref(data["type"])
            if not type_ref.named_type.is_output:
                raise ValueError(f"Field {owner}.{data['name']} returns an input type")
            result.append(
                Field(
                    name=data["name"],
                    type=type_ref,
                    arguments=self._process_input_values(data.get("args") or []),
                    description=data.get("description"),
                    is_deprecated=data.get("isDeprecated", False),
                    deprecation_reason=data.get("deprecationReason"),
                )
            )
        return tuple(result)

    def _process_input_values(self, values: list[dict[str, Any]]) -> tuple[InputValue, ...]:
        result = []
        for data in values:
            type_ref = self._type_ref(data["type"])
            if not type_ref.named_type.is_input:
                raise ValueError(f"Input value '{data['name']}' has an output type")
            result.append(
                InputValue(
                    name=data["name"],
                    type=type_ref,
                    description=data.get("description"),
                    default_value=data.get("defaultValue"),
                )
            )
        return tuple(result)

    def _type_ref(self, data: dict[str, Any]) -> TypeRef[NamedRef]:
        """Convert an introspection ``__Type`` reference into a ``TypeRef``."""
        kind = data["kind"]
        if kind == "NON_NULL":
            return NonNull(self._type_ref(data["ofType"]))
        if kind == "LIST":
            return ListType(self._type_ref(data["ofType"]))
        return Named(NamedRef(kind=TypeKind(kind), name=data["name"]))


def schema_from_introspection(data: dict[str, Any], validate: bool = True) -> Schema:
    """Build a ``Schema`` from an introspection result.

    With ``validate`` the data is also checked by graphql-core, which reports
    dangling type references and similar problems with precise messages.
    """
    parser = IntrospectionParser(data)
    schema = parser.parse()
    if validate:
        try:
            build_client_schema({"__schema": parser.data})
        except (GraphQLError, TypeError, KeyError, ValueError) as e:
            raise SchemaLoadError(f"Invalid introspection result: {e}") from e
    return schema


def schema_from_sdl(sdl: str) -> Schema:
    """Build a ``Schema`` from SDL text."""
    try:
        graphql_schema = build_schema(sdl)
    except GraphQLError as e:
        raise SchemaLoadError(f"Invalid SDL: {e}") from e
    return IntrospectionParser(introspection_from_schema(graphql_schema)).parse()


def load_schema(path: str | Path) -> Schema:
    """Load a schema from an introspection JSON file or an SDL file."""
    schema_path = Path(path)
    try:
        content = schema_path.read_text()
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema file {schema_path}: {e}") from e

    if schema_path.suffix in SDL_SUFFIXES:
        return schema_from_sdl(content)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"{schema_path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SchemaLoadError(f"{schema_path} does not hold an introspection result")
    return schema_from_introspection(data)
