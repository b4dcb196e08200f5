"""Tests for selection sets."""

import pytest

from gql_specgen.core.errors import TraversalNotImplemented
from gql_specgen.core.schema import Field, NamedRef, ObjectType, TypeKind
from gql_specgen.core.selections import SelectionSet
from gql_specgen.core.typeref import ListType, Named, NonNull


def ref(name, kind=TypeKind.OBJECT):
    return Named(NamedRef(kind, name))


@pytest.fixture
def user():
    return ObjectType(
        name="User",
        fields=(
            Field(name="id", type=NonNull(ref("ID", TypeKind.SCALAR))),
            Field(name="name", type=ref("String", TypeKind.SCALAR)),
            Field(name="role", type=ref("Role", TypeKind.ENUM)),
            Field(name="friends", type=NonNull(ListType(NonNull(ref("User"))))),
        ),
    )


class TestDomain:
    """Tests for the selectable fields of a type."""

    def test_domain_is_schema_declared(self, user):
        assert SelectionSet.all(user).domain == ("id", "name", "role", "friends")

    def test_default_selects_all(self, user):
        selection = SelectionSet(user)
        assert selection.is_all
        assert selection.selected == ("id", "name", "role", "friends")

    def test_empty_selection_means_all(self, user):
        assert SelectionSet(user, []) == SelectionSet.all(user)

    def test_unknown_field_rejected(self, user):
        with pytest.raises(ValueError, match="email"):
            SelectionSet.select(user, "id", "email")

    def test_contains(self, user):
        selection = SelectionSet.select(user, "name")
        assert "name" in selection
        assert "id" not in selection


class TestRendering:
    """Tests for fragment rendering."""

    def test_full_domain_renders_like_default(self, user):
        explicit = SelectionSet.select(user, "friends", "role", "name", "id")
        assert explicit.fragment() == SelectionSet.all(user).fragment()
        assert explicit == SelectionSet.all(user)
        assert hash(explicit) == hash(SelectionSet.all(user))

    def test_subset_keeps_declaration_order(self, user):
        selection = SelectionSet.select(user, "role", "id")
        assert selection.selected == ("id", "role")
        assert not selection.is_all

    def test_fragment_text(self, user):
        assert SelectionSet.all(user).fragment() == (
            "fragment UserFragment on User {\n"
            "  id\n"
            "  name\n"
            "  role\n"
            "  friends {\n"
            "    ...UserFragment\n"
            "  }\n"
            "}"
        )

    def test_subset_fragment(self, user):
        assert SelectionSet.select(user, "name").fragment() == "fragment UserFragment on User {\n  name\n}"

    def test_key(self, user):
        assert SelectionSet.all(user).key == "UserFragment"

    def test_abstract_field_not_rendered(self):
        node_holder = ObjectType(
            name="Edge",
            fields=(Field(name="node", type=ref("Node", TypeKind.INTERFACE)),),
        )
        with pytest.raises(TraversalNotImplemented):
            SelectionSet.all(node_holder).fragment()

    def test_abstract_field_can_be_left_out(self):
        node_holder = ObjectType(
            name="Edge",
            fields=(
                Field(name="cursor", type=ref("String", TypeKind.SCALAR)),
                Field(name="node", type=ref("Node", TypeKind.UNION)),
            ),
        )
        fragment = SelectionSet.select(node_holder, "cursor").fragment()
        assert "node" not in fragment
