"""Tests for type references and their nullability algebra."""

import pytest

from gql_specgen.core.typeref import (
    InvertedList,
    InvertedNamed,
    ListType,
    Named,
    NonNull,
    Nullable,
    invert,
)


class TestInvert:
    """Tests for converting between the two representations."""

    def test_named_becomes_nullable(self):
        assert invert(Named("X")) == Nullable(InvertedNamed("X"))

    def test_non_null_named_becomes_plain(self):
        assert invert(NonNull(Named("X"))) == InvertedNamed("X")

    def test_list_of_nullable(self):
        assert invert(ListType(Named("X"))) == Nullable(InvertedList(Nullable(InvertedNamed("X"))))

    def test_required_list_of_required(self):
        assert invert(NonNull(ListType(NonNull(Named("X"))))) == InvertedList(InvertedNamed("X"))

    def test_inverted_named_becomes_non_null(self):
        assert invert(InvertedNamed("X")) == NonNull(Named("X"))

    def test_nullable_strips_non_null(self):
        assert invert(Nullable(InvertedNamed("X"))) == Named("X")

    def test_inverted_list(self):
        assert invert(InvertedList(Nullable(InvertedNamed("X")))) == NonNull(ListType(Named("X")))

    @pytest.mark.parametrize(
        "ref",
        [
            Named("X"),
            NonNull(Named("X")),
            ListType(Named("X")),
            ListType(NonNull(Named("X"))),
            NonNull(ListType(Named("X"))),
            NonNull(ListType(NonNull(Named("X")))),
            ListType(ListType(NonNull(Named("X")))),
            NonNull(ListType(NonNull(ListType(Named("X"))))),
        ],
    )
    def test_double_inversion_is_identity(self, ref):
        assert invert(invert(ref)) == ref

    def test_double_inversion_from_inverted_side(self):
        ref = InvertedList(Nullable(InvertedList(InvertedNamed("X"))))
        assert invert(invert(ref)) == ref

    def test_invert_rejects_other_values(self):
        with pytest.raises(TypeError):
            invert("X")


class TestNamedType:
    """Tests for reaching the innermost named type."""

    @pytest.mark.parametrize(
        "ref",
        [
            Named("X"),
            NonNull(Named("X")),
            ListType(ListType(NonNull(Named("X")))),
            NonNull(ListType(NonNull(ListType(NonNull(Named("X")))))),
        ],
    )
    def test_type_ref(self, ref):
        assert ref.named_type == "X"

    def test_inverted_ref(self):
        ref = Nullable(InvertedList(InvertedList(Nullable(InvertedNamed("X")))))
        assert ref.named_type == "X"


class TestNullability:
    """Tests for adding and stripping one optionality layer."""

    def test_type_ref_is_nullable(self):
        assert Named("X").is_nullable
        assert ListType(NonNull(Named("X"))).is_nullable
        assert not NonNull(Named("X")).is_nullable

    def test_inverted_is_nullable(self):
        assert Nullable(InvertedNamed("X")).is_nullable
        assert not InvertedList(Nullable(InvertedNamed("X"))).is_nullable

    def test_type_ref_nullable_strips_one_layer(self):
        assert NonNull(Named("X")).nullable == Named("X")
        assert Named("X").nullable == Named("X")

    def test_type_ref_non_nullable_adds_one_layer(self):
        assert Named("X").non_nullable == NonNull(Named("X"))
        assert NonNull(Named("X")).non_nullable == NonNull(Named("X"))

    def test_accessors_do_not_recurse_into_lists(self):
        ref = NonNull(ListType(NonNull(Named("X"))))
        assert ref.nullable == ListType(NonNull(Named("X")))

    def test_inverted_nullable_adds_one_layer(self):
        assert InvertedNamed("X").nullable == Nullable(InvertedNamed("X"))
        assert Nullable(InvertedNamed("X")).nullable == Nullable(InvertedNamed("X"))

    def test_inverted_non_nullable_strips_one_layer(self):
        assert Nullable(InvertedNamed("X")).non_nullable == InvertedNamed("X")
        assert InvertedNamed("X").non_nullable == InvertedNamed("X")

    def test_nullable_never_wraps_nullable(self):
        with pytest.raises(ValueError):
            Nullable(Nullable(InvertedNamed("X")))

    def test_refs_are_hashable_values(self):
        assert {NonNull(Named("X")), NonNull(Named("X"))} == {NonNull(Named("X"))}
