"""Nested object discovery for an operation field.

Starting from one field, walk the return-type graph and collect every object
type a selection on that field can reach, with one representative field per
type. The representative only matters for its shape: it tells the fragment
builder which type the fragment is for.

Example:
    # type Query { hero: Character! }
    # type Character { friends: [Character!]!  ship: Starship }
    # type Starship { name: String }
    nested_object_fields(schema, query.field("hero"))
    # {"Character": <Field friends>, "Starship": <Field ship>}
"""

import logging

from .errors import MissingReturnType, TraversalNotImplemented
from .schema import Field, InterfaceType, NamedType, ObjectType, Schema, UnionType

logger = logging.getLogger(__name__)

# Canonical type name -> representative field returning that type
FieldMap = dict[str, Field]


def resolve_return_type(schema: Schema, field: Field) -> NamedType:
    """Return the named type a field resolves to once wrappers are stripped.

    Raises:
        MissingReturnType: if the schema has no type with that name
        TraversalNotImplemented: if the type is an interface or a union
    """
    name = field.type.named_type.name
    named = schema.type(name)
    if named is None:
        raise MissingReturnType(f"No type named '{name}' found for field '{field.name}'")
    if isinstance(named, (InterfaceType, UnionType)):
        raise TraversalNotImplemented(
            f"{named.kind.value.lower()} '{name}' for field '{field.name}'"
        )
    return named


def nested_object_fields(schema: Schema, field: Field) -> FieldMap:
    """Collect every object type reachable from ``field``.

    Each object type is expanded at most once, so cyclic schemas terminate.
    On a name collision the field discovered last wins.
    """
    expanded: set[str] = set()
    field_map = _walk(schema, field, expanded)
    logger.debug(
        "Field '%s' reaches %d object type(s): %s",
        field.name, len(field_map), ", ".join(sorted(field_map)),
    )
    return field_map


def _walk(schema: Schema, field: Field, expanded: set[str]) -> FieldMap:
    named = resolve_return_type(schema, field)
    if not isinstance(named, ObjectType):
        # Scalars and enums end the walk
        return {}

    field_map: FieldMap = {named.name: field}
    if named.name in expanded:
        return field_map
    expanded.add(named.name)

    for sub_field in named.fields:
        field_map.update(_walk(schema, sub_field, expanded))
    return field_map
