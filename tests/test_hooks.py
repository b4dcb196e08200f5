"""Tests for generation hooks."""

import pytest

from gql_specgen.core.hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from gql_specgen.core.schema import EnumType, InputObjectType, ObjectType, Schema


@pytest.fixture
def sample_schema():
    """Create a sample schema for testing."""
    return Schema(
        [
            ObjectType(name="Query"),
            EnumType(name="Status"),
            EnumType(name="LegacyStatus"),
            ObjectType(name="User"),
            ObjectType(name="LegacyMeta"),
            ObjectType(name="Product"),
            InputObjectType(name="CreateUserInput"),
            InputObjectType(name="DebugInput"),
        ],
        query="Query",
    )


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("# Auto-generated")
        result = hook.post_generate("requests.py", "class UserQueryRequest:\n    pass")
        assert result.startswith("# Auto-generated\n\n")

    def test_preserves_content(self):
        hook = AddHeaderHook("# Header")
        content = "class UserQueryRequest:\n    pass"
        result = hook.post_generate("requests.py", content)
        assert content in result

    def test_handles_header_with_newline(self):
        hook = AddHeaderHook("# Header\n")
        result = hook.post_generate("test.py", "code")
        # Should not double-up newlines
        assert result == "# Header\n\ncode"


class TestFilterTypesHook:
    """Tests for FilterTypesHook."""

    def test_exclude_prefix(self, sample_schema):
        hook = FilterTypesHook(exclude_prefix="Legacy")
        result = hook.pre_generate(sample_schema)

        object_names = [t.name for t in result.objects]
        assert "User" in object_names
        assert "Product" in object_names
        assert "LegacyMeta" not in object_names

    def test_exclude_suffix(self, sample_schema):
        hook = FilterTypesHook(exclude_suffix="Input")
        result = hook.pre_generate(sample_schema)

        assert result.input_objects == []

    def test_filters_enums(self, sample_schema):
        hook = FilterTypesHook(exclude_prefix="Legacy")
        result = hook.pre_generate(sample_schema)

        enum_names = [e.name for e in result.enums]
        assert enum_names == ["Status"]

    def test_keeps_root_types(self, sample_schema):
        hook = FilterTypesHook(exclude_prefix="Q")
        result = hook.pre_generate(sample_schema)
        assert result.query.type.name == "Query"

    def test_no_filters_keeps_everything(self, sample_schema):
        assert FilterTypesHook().pre_generate(sample_schema) == sample_schema


class TestHookRunner:
    """Tests for HookRunner."""

    def test_run_pre_hooks(self, sample_schema):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="Legacy"))

        result = runner.run_pre_hooks(sample_schema)
        assert result.type("LegacyMeta") is None

    def test_run_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Header"))

        result = runner.run_post_hooks("test.py", "code")
        assert result.startswith("# Header")

    def test_multiple_pre_hooks(self, sample_schema):
        runner = HookRunner()
        runner.add_pre_hook(FilterTypesHook(exclude_prefix="Legacy"))
        runner.add_pre_hook(FilterTypesHook(exclude_suffix="Input"))

        result = runner.run_pre_hooks(sample_schema)
        assert [t.name for t in result.types] == ["Query", "Status", "User", "Product"]

    def test_multiple_post_hooks(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Line 1"))
        runner.add_post_hook(AddHeaderHook("# Line 0"))

        result = runner.run_post_hooks("test.py", "code")
        # Second hook wraps the output of the first
        assert result == "# Line 0\n\n# Line 1\n\ncode"


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_add_header_is_post_hook(self):
        assert isinstance(AddHeaderHook("header"), PostGenerateHook)

    def test_filter_types_is_pre_hook(self):
        assert isinstance(FilterTypesHook(), PreGenerateHook)

    def test_custom_pre_hook(self):
        class CustomPreHook:
            def pre_generate(self, schema):
                return schema

        assert isinstance(CustomPreHook(), PreGenerateHook)

    def test_custom_post_hook(self):
        class CustomPostHook:
            def post_generate(self, filename, content):
                return content

        assert isinstance(CustomPostHook(), PostGenerateHook)
