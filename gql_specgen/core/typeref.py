"""Type references and their nullability algebra.

GraphQL introspection describes a field type as a chain of wrappers in which
nullability is the default and ``NON_NULL`` marks the exception. Generated
Python works the other way around: a type is required unless it is wrapped in
``Optional``. Two families of references model both views:

    TypeRef:          Named(T) | ListType(TypeRef) | NonNull(TypeRef)
    InvertedTypeRef:  InvertedNamed(T) | InvertedList(InvertedTypeRef) | Nullable(InvertedTypeRef)

``invert`` converts between the two. For any reference without two adjacent
``NonNull`` layers, ``invert(invert(ref)) == ref``.

Example:
    ref = NonNull(ListType(NonNull(Named("User"))))   # [User!]!
    invert(ref)                                        # InvertedList(InvertedNamed("User"))
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class TypeRef(Generic[T]):
    """Wire-facing reference: nullable unless wrapped in ``NonNull``."""

    __slots__ = ()

    @property
    def named_type(self) -> T:
        """Return the innermost named type, whatever the wrapping depth."""
        ref = self
        while not isinstance(ref, Named):
            ref = ref.of_type
        return ref.type

    @property
    def is_nullable(self) -> bool:
        return not isinstance(self, NonNull)

    @property
    def nullable(self) -> "TypeRef[T]":
        """Strip one outer ``NonNull`` layer, if present."""
        if isinstance(self, NonNull):
            return self.of_type
        return self

    @property
    def non_nullable(self) -> "TypeRef[T]":
        """Add one outer ``NonNull`` layer, unless already present."""
        if isinstance(self, NonNull):
            return self
        return NonNull(self)

    def inverted(self) -> "InvertedTypeRef[T]":
        if isinstance(self, Named):
            return Nullable(InvertedNamed(self.type))
        if isinstance(self, ListType):
            return Nullable(InvertedList(self.of_type.inverted()))
        # NonNull: drop the Nullable wrapper the inner reference would get
        inner = self.of_type.inverted()
        if isinstance(inner, Nullable):
            return inner.of_type
        return inner


@dataclass(frozen=True)
class Named(TypeRef[T]):
    type: T


@dataclass(frozen=True)
class ListType(TypeRef[T]):
    of_type: TypeRef[T]


@dataclass(frozen=True)
class NonNull(TypeRef[T]):
    of_type: TypeRef[T]


class InvertedTypeRef(Generic[T]):
    """Code-facing reference: required unless wrapped in ``Nullable``."""

    __slots__ = ()

    @property
    def named_type(self) -> T:
        """Return the innermost named type, whatever the wrapping depth."""
        ref = self
        while not isinstance(ref, InvertedNamed):
            ref = ref.of_type
        return ref.type

    @property
    def is_nullable(self) -> bool:
        return isinstance(self, Nullable)

    @property
    def nullable(self) -> "InvertedTypeRef[T]":
        """Add one outer ``Nullable`` layer, unless already present."""
        if isinstance(self, Nullable):
            return self
        return Nullable(self)

    @property
    def non_nullable(self) -> "InvertedTypeRef[T]":
        """Strip one outer ``Nullable`` layer, if present."""
        if isinstance(self, Nullable):
            return self.of_type
        return self

    def inverted(self) -> TypeRef[T]:
        if isinstance(self, InvertedNamed):
            return NonNull(Named(self.type))
        if isinstance(self, InvertedList):
            return NonNull(ListType(self.of_type.inverted()))
        # Nullable: drop the NonNull wrapper the inner reference would get
        inner = self.of_type.inverted()
        if isinstance(inner, NonNull):
            return inner.of_type
        return inner


@dataclass(frozen=True)
class InvertedNamed(InvertedTypeRef[T]):
    type: T


@dataclass(frozen=True)
class InvertedList(InvertedTypeRef[T]):
    of_type: InvertedTypeRef[T]


@dataclass(frozen=True)
class Nullable(InvertedTypeRef[T]):
    of_type: InvertedTypeRef[T]

    def __post_init__(self):
        if isinstance(self.of_type, Nullable):
            raise ValueError("Nullable cannot directly wrap Nullable")


def invert(ref: TypeRef[T] | InvertedTypeRef[T]) -> InvertedTypeRef[T] | TypeRef[T]:
    """Convert a reference to the other representation."""
    if isinstance(ref, (TypeRef, InvertedTypeRef)):
        return ref.inverted()
    raise TypeError(f"Expected a type reference, got {type(ref).__name__}")
