"""Schema model for code generation.

This module defines immutable dataclasses that represent an introspected
GraphQL schema. Types reference each other by name only: a ``Field`` carries a
``TypeRef[NamedRef]`` and the ``Schema`` resolves the name on demand, so a
logically cyclic schema is still a flat, name-indexed sequence of values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Iterable

from .errors import DuplicateTypeName, InvalidSchemaRoot
from .typeref import ListType, NonNull, TypeRef

INTERNAL_PREFIX = "__"


class TypeKind(Enum):
    """Kinds of named types, spelled as introspection reports them."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"


@dataclass(frozen=True)
class NamedRef:
    """The innermost part of a type reference: a kind and a type name."""
    kind: TypeKind
    name: str

    @property
    def is_leaf(self) -> bool:
        return self.kind in (TypeKind.SCALAR, TypeKind.ENUM)

    @property
    def is_abstract(self) -> bool:
        return self.kind in (TypeKind.INTERFACE, TypeKind.UNION)

    @property
    def is_output(self) -> bool:
        return self.kind is not TypeKind.INPUT_OBJECT

    @property
    def is_input(self) -> bool:
        return self.kind in (TypeKind.SCALAR, TypeKind.ENUM, TypeKind.INPUT_OBJECT)


def type_notation(ref: TypeRef[NamedRef]) -> str:
    """Render a reference in GraphQL notation, e.g. ``[User!]!``."""
    if isinstance(ref, NonNull):
        return f"{type_notation(ref.of_type)}!"
    if isinstance(ref, ListType):
        return f"[{type_notation(ref.of_type)}]"
    return ref.type.name


@dataclass(frozen=True)
class InputValue:
    """An argument of a field or a field of an input object."""
    name: str
    type: TypeRef[NamedRef]
    description: str | None = None
    # Raw GraphQL literal, e.g. '10' or '"asc"'
    default_value: str | None = None


@dataclass(frozen=True)
class Field:
    """A field of an object or interface type."""
    name: str
    type: TypeRef[NamedRef]
    arguments: tuple[InputValue, ...] = ()
    description: str | None = None
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass(frozen=True)
class EnumValue:
    name: str
    description: str | None = None
    is_deprecated: bool = False
    deprecation_reason: str | None = None


@dataclass(frozen=True)
class NamedType:
    """Base for every named schema type."""
    kind: ClassVar[TypeKind]

    name: str
    description: str | None = None

    @property
    def is_internal(self) -> bool:
        """True for introspection types such as ``__Schema`` or ``__Type``."""
        return self.name.startswith(INTERNAL_PREFIX)


@dataclass(frozen=True)
class ScalarType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.SCALAR


@dataclass(frozen=True)
class ObjectType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.OBJECT

    fields: tuple[Field, ...] = ()
    interfaces: tuple[str, ...] = ()

    def field(self, name: str) -> Field | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class InterfaceType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.INTERFACE

    fields: tuple[Field, ...] = ()
    interfaces: tuple[str, ...] = ()
    possible_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnionType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.UNION

    possible_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class EnumType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.ENUM

    values: tuple[EnumValue, ...] = ()


@dataclass(frozen=True)
class InputObjectType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.INPUT_OBJECT

    input_fields: tuple[InputValue, ...] = ()


class OperationKind(Enum):
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


@dataclass(frozen=True)
class Operation:
    """An operation root paired with the object type that declares its fields."""
    kind: OperationKind
    type: ObjectType

    @property
    def fields(self) -> tuple[Field, ...]:
        return self.type.fields


@dataclass(frozen=True)
class _Roots:
    query: str
    mutation: str | None = None
    subscription: str | None = None


class Schema:
    """An immutable, name-indexed collection of named types.

    Example:
        schema = Schema(types, query="Query", mutation="Mutation")
        schema.object("User")        # ObjectType or None
        schema.operations            # [Operation(QUERY, ...), Operation(MUTATION, ...)]

    Raises:
        InvalidSchemaRoot: if the query root is missing or a declared root does
            not name an object type
        DuplicateTypeName: if two types share a name
    """

    def __init__(
        self,
        types: Iterable[NamedType],
        query: str = "Query",
        mutation: str | None = None,
        subscription: str | None = None,
    ):
        self._types: tuple[NamedType, ...] = tuple(types)
        self._roots = _Roots(query=query, mutation=mutation, subscription=subscription)

        self._index: dict[str, NamedType] = {}
        for named in self._types:
            if named.name in self._index:
                raise DuplicateTypeName(f"Type '{named.name}' is defined more than once")
            self._index[named.name] = named

        if query is None:
            raise InvalidSchemaRoot("The schema declares no query root")
        self._query = self._resolve_root(OperationKind.QUERY, query)
        self._mutation = self._resolve_root(OperationKind.MUTATION, mutation)
        self._subscription = self._resolve_root(OperationKind.SUBSCRIPTION, subscription)

    def _resolve_root(self, kind: OperationKind, name: str | None) -> Operation | None:
        if name is None:
            return None
        root = self._index.get(name)
        if not isinstance(root, ObjectType):
            raise InvalidSchemaRoot(
                f"The {kind.value} root '{name}' does not resolve to an object type"
            )
        return Operation(kind=kind, type=root)

    def __repr__(self) -> str:
        return f"Schema(types={len(self._types)}, query={self._roots.query!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self._types == other._types and self._roots == other._roots

    @property
    def types(self) -> tuple[NamedType, ...]:
        return self._types

    @property
    def query_name(self) -> str:
        return self._roots.query

    @property
    def mutation_name(self) -> str | None:
        return self._roots.mutation

    @property
    def subscription_name(self) -> str | None:
        return self._roots.subscription

    def type(self, name: str) -> NamedType | None:
        """Look up a named type."""
        return self._index.get(name)

    def object(self, name: str) -> ObjectType | None:
        """Look up an object type; other kinds of type yield None."""
        named = self._index.get(name)
        return named if isinstance(named, ObjectType) else None

    # Operations

    @property
    def query(self) -> Operation:
        return self._query

    @property
    def mutation(self) -> Operation | None:
        return self._mutation

    @property
    def subscription(self) -> Operation | None:
        return self._subscription

    @property
    def operations(self) -> list[Operation]:
        """Query first, then mutation and subscription when the schema declares them."""
        return [op for op in (self._query, self._mutation, self._subscription) if op is not None]

    # Named types, without introspection types

    def _public(self, cls) -> list:
        return [t for t in self._types if isinstance(t, cls) and not t.is_internal]

    @property
    def objects(self) -> list[ObjectType]:
        return self._public(ObjectType)

    @property
    def interfaces(self) -> list[InterfaceType]:
        return self._public(InterfaceType)

    @property
    def unions(self) -> list[UnionType]:
        return self._public(UnionType)

    @property
    def enums(self) -> list[EnumType]:
        return self._public(EnumType)

    @property
    def scalars(self) -> list[ScalarType]:
        return self._public(ScalarType)

    @property
    def input_objects(self) -> list[InputObjectType]:
        return self._public(InputObjectType)

    def filter_types(self, predicate: Callable[[NamedType], bool]) -> "Schema":
        """Return a new schema holding the types accepted by ``predicate``.

        Operation root types are always kept.
        """
        roots = {name for name in (self.query_name, self.mutation_name, self.subscription_name) if name}
        kept = [t for t in self._types if t.name in roots or predicate(t)]
        return Schema(
            kept,
            query=self.query_name,
            mutation=self.mutation_name,
            subscription=self.subscription_name,
        )
