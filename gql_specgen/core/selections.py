"""Selection sets: which fields of an object type a fragment requests.

The selectable fields of a type are exactly the fields the schema declares
for it. A selection set either takes all of them (the default) or a subset,
and always renders in schema declaration order.

Example:
    SelectionSet.all(user).fragment()
    # fragment UserFragment on User {
    #   id
    #   name
    #   friends {
    #     ...UserFragment
    #   }
    # }

    SelectionSet.select(user, "name", "id").fragment()
    # fragment UserFragment on User {
    #   id
    #   name
    # }
"""

from collections.abc import Iterable

from .errors import TraversalNotImplemented
from .fragments import fragment_key, reference_marker
from .schema import Field, ObjectType

INDENT = "  "


class SelectionSet:
    """The selected fields of one object type."""

    def __init__(self, object_type: ObjectType, fields: Iterable[str] | None = None):
        """Initialize a selection.

        Args:
            object_type: The type whose fields are selected
            fields: Field names to select; None or an empty collection selects all

        Raises:
            ValueError: if a name is not a field of ``object_type``
        """
        self.object_type = object_type
        domain = object_type.field_names

        if fields is None:
            chosen = set(domain)
        else:
            requested = list(fields)
            unknown = [name for name in requested if name not in domain]
            if unknown:
                raise ValueError(
                    f"Unknown field(s) for type '{object_type.name}': {', '.join(unknown)}"
                )
            chosen = set(requested) or set(domain)

        self._selected = tuple(name for name in domain if name in chosen)

    @classmethod
    def all(cls, object_type: ObjectType) -> "SelectionSet":
        """Select every field of the type."""
        return cls(object_type)

    @classmethod
    def select(cls, object_type: ObjectType, *fields: str) -> "SelectionSet":
        """Select the named fields only."""
        return cls(object_type, fields)

    @property
    def domain(self) -> tuple[str, ...]:
        """All selectable field names, in declaration order."""
        return self.object_type.field_names

    @property
    def selected(self) -> tuple[str, ...]:
        return self._selected

    @property
    def is_all(self) -> bool:
        return self._selected == self.domain

    @property
    def key(self) -> str:
        return fragment_key(self.object_type.name)

    def __contains__(self, name: str) -> bool:
        return name in self._selected

    def __eq__(self, other) -> bool:
        if not isinstance(other, SelectionSet):
            return NotImplemented
        return self.object_type == other.object_type and self._selected == other._selected

    def __hash__(self) -> int:
        return hash((self.object_type.name, self._selected))

    def __repr__(self) -> str:
        return f"SelectionSet({self.object_type.name!r}, {list(self._selected)!r})"

    def render_fields(self) -> list[str]:
        """Render the selected fields, one entry per field."""
        return [
            _render_field(self.object_type.field(name))
            for name in self._selected
        ]

    def fragment(self) -> str:
        """Render the full fragment definition for this selection."""
        lines = [f"fragment {self.key} on {self.object_type.name} {{"]
        for rendered in self.render_fields():
            lines.extend(f"{INDENT}{line}" for line in rendered.split("\n"))
        lines.append("}")
        return "\n".join(lines)


def _render_field(field: Field) -> str:
    named = field.type.named_type
    if named.is_leaf:
        return field.name
    if named.is_abstract:
        raise TraversalNotImplemented(
            f"{named.kind.value.lower()} '{named.name}' for field '{field.name}'"
        )
    return "\n".join([
        f"{field.name} {{",
        f"{INDENT}{reference_marker(fragment_key(named.name))}",
        "}",
    ])
