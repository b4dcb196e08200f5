"""Generation hooks.

Pre-generation hooks receive the schema before planning and return the schema
to plan with. Post-generation hooks receive the rendered module and return the
text to write.

Example usage:
    from gql_specgen.core.hooks import HookRunner, FilterTypesHook, AddHeaderHook

    runner = HookRunner()
    runner.add_pre_hook(FilterTypesHook(exclude_prefix="Internal"))
    runner.add_post_hook(AddHeaderHook("# Generated - do not edit"))
"""

from typing import Protocol, runtime_checkable

from .schema import NamedType, Schema


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    The schema is immutable, so a hook that changes it returns a new one,
    e.g. via ``Schema.filter_types``.
    """

    def pre_generate(self, schema: Schema) -> Schema:
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Example:
        class FormatWithBlack:
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Built-in hook that prepends a header to generated files."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        header = self.header.rstrip("\n")
        return f"{header}\n\n{content}"


class FilterTypesHook:
    """Built-in hook that drops named types by name prefix or suffix.

    Operation root types are never dropped. Fields that still reference a
    dropped type fail at planning time with ``MissingReturnType``.

    Example:
        # Keep everything except types starting with "Legacy"
        hook = FilterTypesHook(exclude_prefix="Legacy")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix

    def _should_include(self, named: NamedType) -> bool:
        if self.exclude_prefix and named.name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and named.name.endswith(self.exclude_suffix):
            return False
        return True

    def pre_generate(self, schema: Schema) -> Schema:
        return schema.filter_types(self._should_include)


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, schema: Schema) -> Schema:
        for hook in self.pre_hooks:
            schema = hook.pre_generate(schema)
        return schema

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
