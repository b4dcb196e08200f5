"""Tests for loading schemas from introspection results and SDL."""

import json

import pytest
from graphql import build_schema, introspection_from_schema

from gql_specgen.core.errors import InvalidSchemaRoot, SchemaLoadError
from gql_specgen.core.introspection import (
    IntrospectionParser,
    load_schema,
    schema_from_introspection,
    schema_from_sdl,
)
from gql_specgen.core.schema import EnumType, InputObjectType, OperationKind, TypeKind
from gql_specgen.core.typeref import ListType, Named, NonNull

SDL = '''
"""A person using the service."""
type User {
  id: ID!
  name: String
  friends: [User!]!
  role: Role @deprecated(reason: "Use roles")
}

enum Role {
  ADMIN
  "Regular member"
  MEMBER
}

input UserFilter {
  name: String
  limit: Int = 10
}

type Query {
  user(id: ID!): User
  users(filter: UserFilter): [User!]!
}

type Mutation {
  rename(id: ID!, name: String!): User
}
'''


@pytest.fixture
def introspection():
    return introspection_from_schema(build_schema(SDL))


@pytest.fixture
def schema(introspection):
    return schema_from_introspection(introspection)


class TestIntrospectionParser:
    """Tests for IntrospectionParser."""

    def test_roots(self, schema):
        assert schema.query_name == "Query"
        assert schema.mutation_name == "Mutation"
        assert schema.subscription is None
        assert [op.kind for op in schema.operations] == [OperationKind.QUERY, OperationKind.MUTATION]

    def test_accepts_every_envelope(self, introspection):
        bare = IntrospectionParser(introspection["__schema"]).parse()
        wrapped = IntrospectionParser({"data": introspection}).parse()
        assert bare == wrapped == IntrospectionParser(introspection).parse()

    def test_field_types(self, schema):
        user = schema.object("User")
        assert user.field("id").type == NonNull(Named(user.field("id").type.named_type))
        assert user.field("id").type.named_type.kind is TypeKind.SCALAR

        friends = user.field("friends").type
        assert isinstance(friends, NonNull)
        assert isinstance(friends.of_type, ListType)
        assert friends.named_type.name == "User"

    def test_descriptions_and_deprecation(self, schema):
        user = schema.object("User")
        assert user.description == "A person using the service."
        role = user.field("role")
        assert role.is_deprecated
        assert role.deprecation_reason == "Use roles"

    def test_arguments(self, schema):
        user_field = schema.query.type.field("user")
        assert [a.name for a in user_field.arguments] == ["id"]
        assert user_field.arguments[0].type.named_type.name == "ID"

    def test_enum_values(self, schema):
        role = schema.type("Role")
        assert isinstance(role, EnumType)
        assert [v.name for v in role.values] == ["ADMIN", "MEMBER"]
        assert role.values[1].description == "Regular member"

    def test_input_defaults(self, schema):
        user_filter = schema.type("UserFilter")
        assert isinstance(user_filter, InputObjectType)
        limit = user_filter.input_fields[1]
        assert limit.name == "limit"
        assert limit.default_value == "10"

    def test_introspection_types_are_internal(self, schema):
        assert schema.type("__Schema") is not None
        assert all(not t.name.startswith("__") for t in schema.objects)

    def test_missing_types_key(self):
        with pytest.raises(SchemaLoadError):
            IntrospectionParser({"__schema": {"queryType": {"name": "Query"}}}).parse()

    def test_unknown_kind(self, introspection):
        introspection["__schema"]["types"].append({"kind": "WIDGET", "name": "Broken"})
        with pytest.raises(SchemaLoadError):
            IntrospectionParser(introspection).parse()

    def test_invalid_root(self, introspection):
        introspection["__schema"]["queryType"] = {"name": "Role"}
        with pytest.raises(InvalidSchemaRoot):
            schema_from_introspection(introspection)

    @pytest.mark.parametrize("query_type", [None, "missing"])
    def test_missing_query_root(self, introspection, query_type):
        if query_type is None:
            introspection["__schema"]["queryType"] = None
        else:
            del introspection["__schema"]["queryType"]
        with pytest.raises(InvalidSchemaRoot):
            schema_from_introspection(introspection)


class TestValidation:
    """Tests for graphql-core validation of introspection results."""

    def test_dangling_reference(self, introspection):
        user = next(t for t in introspection["__schema"]["types"] if t["name"] == "User")
        user["fields"].append(
            {
                "name": "ghost",
                "description": None,
                "args": [],
                "type": {"kind": "OBJECT", "name": "Ghost", "ofType": None},
                "isDeprecated": False,
                "deprecationReason": None,
            }
        )
        with pytest.raises(SchemaLoadError):
            schema_from_introspection(introspection)

    def test_validation_can_be_skipped(self, introspection):
        user = next(t for t in introspection["__schema"]["types"] if t["name"] == "User")
        user["fields"].append(
            {
                "name": "ghost",
                "args": [],
                "type": {"kind": "OBJECT", "name": "Ghost", "ofType": None},
            }
        )
        schema = schema_from_introspection(introspection, validate=False)
        assert schema.object("User").field("ghost") is not None


class TestSDL:
    """Tests for SDL sources."""

    def test_schema_from_sdl(self, schema):
        assert schema_from_sdl(SDL) == schema

    def test_invalid_sdl(self):
        with pytest.raises(SchemaLoadError):
            schema_from_sdl("type Query {")


class TestLoadSchema:
    """Tests for load_schema."""

    def test_json_file(self, tmp_path, introspection, schema):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"data": introspection}))
        assert load_schema(path) == schema

    def test_sdl_file(self, tmp_path, schema):
        path = tmp_path / "schema.graphql"
        path.write_text(SDL)
        assert load_schema(path) == schema

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            load_schema(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{not json")
        with pytest.raises(SchemaLoadError):
            load_schema(path)

    def test_non_object_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("[]")
        with pytest.raises(SchemaLoadError):
            load_schema(path)
