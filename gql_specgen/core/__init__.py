"""Core modules for GraphQL request generation."""

from .config import CodegenConfig, load_config
from .errors import (
    CodegenError,
    ConfigError,
    DuplicateTypeName,
    GenerationError,
    InvalidSchemaRoot,
    MissingFragment,
    MissingReturnType,
    SchemaLoadError,
    TraversalNotImplemented,
)
from .fetch import SchemaFetcher
from .fragments import FragmentTable, fragment_key, reference_marker, resolve_closure
from .generator import CodeGenerator, OperationFieldPlan
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .introspection import IntrospectionParser, load_schema, schema_from_introspection, schema_from_sdl
from .reachability import FieldMap, nested_object_fields
from .scalars import PythonType, ScalarHandler, ScalarRegistry
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
    Operation,
    OperationKind,
    ScalarType,
    Schema,
    TypeKind,
    UnionType,
)
from .selections import SelectionSet
from .typeref import (
    InvertedList,
    InvertedNamed,
    InvertedTypeRef,
    ListType,
    Named,
    NonNull,
    Nullable,
    TypeRef,
    invert,
)

__all__ = [
    # Type references
    "TypeRef",
    "Named",
    "ListType",
    "NonNull",
    "InvertedTypeRef",
    "InvertedNamed",
    "InvertedList",
    "Nullable",
    "invert",
    # Schema
    "Schema",
    "NamedType",
    "NamedRef",
    "TypeKind",
    "ObjectType",
    "InterfaceType",
    "UnionType",
    "EnumType",
    "EnumValue",
    "ScalarType",
    "InputObjectType",
    "InputValue",
    "Field",
    "Operation",
    "OperationKind",
    # Loading
    "IntrospectionParser",
    "SchemaFetcher",
    "load_schema",
    "schema_from_introspection",
    "schema_from_sdl",
    # Analysis
    "FieldMap",
    "nested_object_fields",
    "FragmentTable",
    "fragment_key",
    "reference_marker",
    "resolve_closure",
    "SelectionSet",
    # Generation
    "CodeGenerator",
    "OperationFieldPlan",
    "CodegenConfig",
    "load_config",
    "PythonType",
    "ScalarHandler",
    "ScalarRegistry",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # Errors
    "CodegenError",
    "ConfigError",
    "DuplicateTypeName",
    "GenerationError",
    "InvalidSchemaRoot",
    "MissingFragment",
    "MissingReturnType",
    "SchemaLoadError",
    "TraversalNotImplemented",
]
