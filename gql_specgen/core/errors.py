"""Exceptions raised while loading a schema or generating code."""


class CodegenError(Exception):
    """Base class for all gql-specgen errors."""


class SchemaLoadError(CodegenError):
    """Raised when introspection data or SDL cannot be turned into a schema."""


class ConfigError(CodegenError):
    """Raised when a generation config file is missing or malformed."""


class InvalidSchemaRoot(CodegenError):
    """Raised when an operation root name does not resolve to an object type."""


class DuplicateTypeName(CodegenError):
    """Raised when two named types in a schema share a name."""


class MissingReturnType(CodegenError):
    """Raised when a field's return type name does not resolve to any type."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(context)


class MissingFragment(CodegenError):
    """Raised when an operation needs a fragment the fragment table lacks."""

    def __init__(self, context: str):
        self.context = context
        super().__init__(context)


class TraversalNotImplemented(CodegenError, NotImplementedError):
    """Raised when a type graph passes through an interface or union.

    Selections over abstract types need inline fragments per possible type,
    which the generator does not produce yet.
    """

    def __init__(self, context: str):
        self.context = context
        super().__init__(context)


class GenerationError(CodegenError):
    """Raised after planning every operation field when any of them failed."""

    def __init__(self, message: str, errors: list[CodegenError]):
        self.message = message
        self.errors = errors
        super().__init__(message)

    def __str__(self) -> str:
        lines = [self.message]
        lines.extend(f"  - {error}" for error in self.errors)
        return "\n".join(lines)
