"""Code generator for GraphQL operations.

Plans every field of every operation root, then renders the plans into one
Python module with a Jinja2 template.

Planning a field produces an ``OperationFieldPlan``: the operation, the field,
every object type the field's selection can reach, the fragment table for
those types and the closure of fragments the field's document needs. Planning
never stops at the first failing field; all failures are reported together.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(schema, config, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .config import CodegenConfig
from .errors import CodegenError, ConfigError, GenerationError
from .fragments import FragmentTable, fragment_key, reference_marker, render_fragments, resolve_closure
from .hooks import HookRunner
from .naming import (
    attribute_name,
    enum_member_name,
    pascal_case,
    safe_comment,
    safe_docstring,
    snake_case,
)
from .reachability import FieldMap, nested_object_fields, resolve_return_type
from .schema import (
    Field,
    InputValue,
    NamedRef,
    ObjectType,
    Operation,
    Schema,
    TypeKind,
    type_notation,
)
from .selections import INDENT, SelectionSet
from .typeref import InvertedList, InvertedTypeRef, Nullable

logger = logging.getLogger(__name__)

STDLIB_IMPORTS = [
    "import enum as _enum",
    "import typing as _typing",
]

# ClassVar is imported by name so pydantic recognizes it in postponed annotations
CLASSVAR_IMPORT = "from typing import ClassVar"

# Members every generated model defines; attributes must not shadow them
MODEL_MEMBERS = frozenset({"model_config"})

# Members the request template adds on top of MODEL_MEMBERS
REQUEST_MEMBERS = MODEL_MEMBERS | {
    "operation_type",
    "operation_name",
    "root_selection_keys",
    "document",
    "payload",
    "parse_result",
}


@dataclass
class OperationFieldPlan:
    """Everything emission needs for one field of an operation root."""
    operation: Operation
    field: Field
    # Object types reachable from the field, with a representative field each
    reachable: FieldMap = field(default_factory=dict)
    # Fragments for every reachable type
    fragment_table: FragmentTable = field(default_factory=dict)
    # The fragments the field's document carries, in discovery order
    fragments: FragmentTable = field(default_factory=dict)
    root_keys: list[str] = field(default_factory=list)

    @property
    def operation_name(self) -> str:
        """Operation name for the document, e.g. ``HeroQuery``."""
        return pascal_case(self.field.name) + pascal_case(self.operation.kind.value)

    @property
    def class_name(self) -> str:
        return f"{self.operation_name}Request"

    def variable_definitions(self) -> list[str]:
        """Variable definitions, e.g. ``$episode: Episode = NEWHOPE``."""
        definitions = []
        for argument in self.field.arguments:
            definition = f"${argument.name}: {type_notation(argument.type)}"
            if argument.default_value is not None:
                definition += f" = {argument.default_value}"
            definitions.append(definition)
        return definitions

    def document(self) -> str:
        """Render the operation document followed by its fragments."""
        variables = self.variable_definitions()
        header = self.operation.kind.value + " " + self.operation_name
        if variables:
            header += f"({', '.join(variables)})"

        call = self.field.name
        if self.field.arguments:
            arguments = ", ".join(f"{a.name}: ${a.name}" for a in self.field.arguments)
            call += f"({arguments})"

        lines = [f"{header} {{"]
        if self.root_keys:
            lines.append(f"{INDENT}{call} {{")
            lines.extend(f"{INDENT * 2}{reference_marker(key)}" for key in self.root_keys)
            lines.append(f"{INDENT}}}")
        else:
            lines.append(f"{INDENT}{call}")
        lines.append("}")

        document = "\n".join(lines)
        if self.fragments:
            document += "\n\n" + render_fragments(self.fragments)
        return document


# View models handed to the template


@dataclass
class AttributeView:
    name: str
    alias: str
    annotation: str
    required: bool
    description: str | None = None


@dataclass
class ClassView:
    name: str
    attributes: list[AttributeView]
    description: str | None = None


@dataclass
class EnumMemberView:
    name: str
    value: str
    description: str | None = None


@dataclass
class EnumView:
    name: str
    members: list[EnumMemberView]
    description: str | None = None


@dataclass
class RequestView:
    class_name: str
    operation_type: str
    operation_name: str
    field_name: str
    root_keys: list[str]
    document: str
    result_annotation: str
    attributes: list[AttributeView]
    description: str | None = None


def dedupe_attributes(attributes: list[AttributeView], reserved: frozenset[str]) -> list[AttributeView]:
    """Rename attributes that clash with a reserved member or an earlier attribute.

    A clashing name gets underscores appended until it is free; the alias keeps
    the GraphQL name.
    """
    taken = set(reserved)
    for attr in attributes:
        while attr.name in taken:
            attr.name += "_"
        taken.add(attr.name)
    return attributes


class CodeGenerator:
    """Generates a Python module of request classes from a schema.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - module.py.j2 - the whole generated module

    Example:
        generator = CodeGenerator(schema, load_config("codegen.json"))
        plans = generator.plan()
        generator.generate("client/requests.py")
    """

    def __init__(
        self,
        schema: Schema,
        config: CodegenConfig | None = None,
        hooks: HookRunner | None = None,
        template_dir: str | None = None,
    ):
        """Initialize the code generator.

        Args:
            schema: The schema to generate for
            config: Scalar and selection configuration; defaults select all fields
            hooks: Hooks run before planning and after rendering
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.config = config or CodegenConfig()
        self.hooks = hooks or HookRunner()
        self.schema = self.hooks.run_pre_hooks(schema)
        self.scalars = self.config.scalar_registry()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_specgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["snake_case"] = snake_case
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring
        self.env.filters["safe_comment"] = safe_comment

    # Planning

    def selection_set(self, object_type: ObjectType) -> SelectionSet:
        """The configured selection for a type; all fields when unconfigured."""
        try:
            return SelectionSet(object_type, self.config.selection_for(object_type.name))
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def fragment_table(self, reachable: FieldMap) -> FragmentTable:
        """Render one fragment per reachable object type, keyed by fragment key."""
        table: FragmentTable = {}
        for type_name in sorted(reachable):
            selection = self.selection_set(self.schema.object(type_name))
            table[selection.key] = selection.fragment()
        return table

    def plan_field(self, operation: Operation, root_field: Field) -> OperationFieldPlan:
        """Plan one operation field.

        Raises:
            MissingReturnType: if a type on the field's path is not in the schema
            TraversalNotImplemented: if the path passes through an interface or union
            ConfigError: if a configured selection names unknown fields
        """
        named = resolve_return_type(self.schema, root_field)
        plan = OperationFieldPlan(operation=operation, field=root_field)
        if not isinstance(named, ObjectType):
            return plan

        plan.reachable = nested_object_fields(self.schema, root_field)
        plan.fragment_table = self.fragment_table(plan.reachable)
        plan.root_keys = [fragment_key(named.name)]
        plan.fragments = resolve_closure(plan.fragment_table, plan.root_keys)
        logger.debug(
            "Planned %s.%s: %d fragment(s) of %d reachable",
            operation.type.name, root_field.name, len(plan.fragments), len(plan.fragment_table),
        )
        return plan

    def _check_selection_config(self) -> list[CodegenError]:
        errors: list[CodegenError] = []
        for type_name in self.config.selections:
            object_type = self.schema.object(type_name)
            if object_type is None:
                errors.append(ConfigError(f"Selections configured for unknown object type '{type_name}'"))
                continue
            try:
                self.selection_set(object_type)
            except ConfigError as e:
                errors.append(e)
        return errors

    def plan(self) -> list[OperationFieldPlan]:
        """Plan every field of every operation root.

        Raises:
            GenerationError: listing every selection config error and every field
                that failed, after all fields were tried
        """
        errors = self._check_selection_config()
        plans: list[OperationFieldPlan] = []

        for operation in self.schema.operations:
            for root_field in operation.fields:
                try:
                    plans.append(self.plan_field(operation, root_field))
                except ConfigError:
                    # Already listed by the selection config check
                    continue
                except CodegenError as e:
                    logger.debug("Failed to plan %s.%s: %s", operation.type.name, root_field.name, e)
                    errors.append(e)

        if errors:
            raise GenerationError(f"Generation failed with {len(errors)} error(s)", errors)
        return plans

    # Rendering

    def annotation(self, ref: InvertedTypeRef[NamedRef]) -> str:
        """Python annotation for an inverted reference."""
        if isinstance(ref, Nullable):
            return f"_typing.Optional[{self.annotation(ref.of_type)}]"
        if isinstance(ref, InvertedList):
            return f"_typing.List[{self.annotation(ref.of_type)}]"
        named = ref.type
        if named.kind is TypeKind.SCALAR:
            return self.scalars.resolve(named.name).python_type
        if named.is_abstract:
            return "_typing.Any"
        return named.name

    def _attribute(self, value: Field | InputValue, may_omit: bool = False) -> AttributeView:
        inverted = value.type.inverted()
        if may_omit:
            inverted = inverted.nullable
        return AttributeView(
            name=attribute_name(value.name),
            alias=value.name,
            annotation=self.annotation(inverted),
            required=not inverted.is_nullable,
            description=value.description,
        )

    def _input_attribute(self, value: InputValue) -> AttributeView:
        # A value with a default may be omitted even when non-null
        return self._attribute(value, may_omit=value.default_value is not None)

    def _enum_views(self) -> list[EnumView]:
        return [
            EnumView(
                name=enum_type.name,
                description=enum_type.description,
                members=[
                    EnumMemberView(
                        name=enum_member_name(value.name),
                        value=value.name,
                        description=value.description,
                    )
                    for value in enum_type.values
                ],
            )
            for enum_type in self.schema.enums
        ]

    def _input_views(self) -> list[ClassView]:
        return [
            ClassView(
                name=input_type.name,
                description=input_type.description,
                attributes=dedupe_attributes(
                    [self._input_attribute(v) for v in input_type.input_fields],
                    MODEL_MEMBERS,
                ),
            )
            for input_type in self.schema.input_objects
        ]

    def _model_views(self, plans: list[OperationFieldPlan]) -> list[ClassView]:
        """Response models for every object type some plan reaches.

        Fields left out of a type's selection are optional in its model.
        """
        reached = {name for plan in plans for name in plan.reachable}
        views = []
        for object_type in self.schema.objects:
            if object_type.name not in reached:
                continue
            selection = self.selection_set(object_type)
            views.append(
                ClassView(
                    name=object_type.name,
                    description=object_type.description,
                    attributes=dedupe_attributes(
                        [
                            self._attribute(f, may_omit=f.name not in selection)
                            for f in object_type.fields
                        ],
                        MODEL_MEMBERS,
                    ),
                )
            )
        return views

    def _request_view(self, plan: OperationFieldPlan) -> RequestView:
        return RequestView(
            class_name=plan.class_name,
            operation_type=plan.operation.kind.value,
            operation_name=plan.operation_name,
            field_name=plan.field.name,
            root_keys=plan.root_keys,
            document=plan.document(),
            result_annotation=self.annotation(plan.field.type.inverted()),
            attributes=dedupe_attributes(
                [self._input_attribute(a) for a in plan.field.arguments],
                REQUEST_MEMBERS,
            ),
            description=plan.field.description,
        )

    def _imports(self) -> list[str]:
        scalar_imports = self.scalars.imports_for(s.name for s in self.schema.scalars)
        stdlib = sorted(set(STDLIB_IMPORTS + scalar_imports))
        return stdlib + [CLASSVAR_IMPORT, "", "import pydantic as _pydantic"]

    def render(self, plans: list[OperationFieldPlan]) -> str:
        """Render plans into module source."""
        models = self._model_views(plans)
        inputs = self._input_views()
        requests = [self._request_view(plan) for plan in plans]
        context: dict[str, Any] = {
            "imports": self._imports(),
            "enums": self._enum_views(),
            "inputs": inputs,
            "models": models,
            "requests": requests,
            "rebuild": [v.name for v in inputs + models] + [r.class_name for r in requests],
        }
        template = self.env.get_template("module.py.j2")
        return template.render(context)

    def generate_code(self, filename: str = "requests.py") -> str:
        """Plan, render and post-process the module.

        Raises:
            GenerationError: if any operation field failed to plan
            ValueError: if the rendered module is not valid Python
        """
        content = self.render(self.plan())

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise ValueError(f"Generated invalid Python for {filename}: {e}") from e

        return self.hooks.run_post_hooks(filename, content)

    def generate(self, output_path: str | Path) -> Path:
        """Generate the module and write it to ``output_path``."""
        path = Path(output_path)
        content = self.generate_code(path.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
