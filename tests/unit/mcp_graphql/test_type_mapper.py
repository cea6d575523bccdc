# -*- coding: utf-8 -*-
"""Location: ./tests/unit/mcp_graphql/test_type_mapper.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Tests for GraphQL input type mapping.
"""

# Third-Party
from graphql import build_schema, GraphQLBoolean, GraphQLFloat, GraphQLID, GraphQLInt, GraphQLList, GraphQLNonNull, GraphQLScalarType, GraphQLString
import pytest

# First-Party
from mcp_graphql.models import ArgumentDescriptor, declared_default
from mcp_graphql.schema_nodes import AnyNode, BooleanNode, FloatNode, IntNode, ListNode, ObjectNode, StringNode, to_json_schema
from mcp_graphql.type_mapper import DEFAULT_INPUT_DEPTH, map_arguments, map_input_type


class TestMapInputType:
    """Test suite for map_input_type."""

    @pytest.mark.parametrize(
        "graphql_type, expected",
        [
            (GraphQLString, StringNode()),
            (GraphQLID, StringNode()),
            (GraphQLInt, IntNode()),
            (GraphQLFloat, FloatNode()),
            (GraphQLBoolean, BooleanNode()),
        ],
    )
    def test_builtin_scalars(self, graphql_type, expected):
        """Test each built-in scalar maps to its primitive node."""
        assert map_input_type(graphql_type) == expected

    def test_custom_scalar_is_string(self):
        """Test custom scalars fall back to strings."""
        assert map_input_type(GraphQLScalarType("DateTime")) == StringNode()

    def test_enum(self, sample_schema):
        """Test enums become string nodes restricted to their values."""
        node = map_input_type(sample_schema.get_type("Role"))
        assert node == StringNode(enum=("ADMIN", "USER"))

    def test_wrappers_do_not_change_node(self):
        """Test non-null and list wrappers are transparent."""
        assert map_input_type(GraphQLNonNull(GraphQLString)) == StringNode()
        assert map_input_type(GraphQLNonNull(GraphQLList(GraphQLNonNull(GraphQLInt)))) == ListNode(items=IntNode())

    def test_wrappers_do_not_spend_depth(self):
        """Test a wrapped scalar still maps with a budget of one."""
        assert map_input_type(GraphQLList(GraphQLNonNull(GraphQLInt)), depth=1) == ListNode(items=IntNode())

    def test_zero_depth_gives_any(self):
        """Test an exhausted budget yields AnyNode even for scalars."""
        assert map_input_type(GraphQLString, depth=0) == AnyNode()

    def test_input_object_required_fields(self, sample_schema):
        """Test input object fields are required only when non-null without default."""
        node = map_input_type(sample_schema.get_type("CreateUserInput"))
        assert isinstance(node, ObjectNode)
        assert node.required_names == ["name", "email"]
        assert node.field("role").node.enum == ("ADMIN", "USER")

    def test_recursive_input_is_bounded(self, sample_schema):
        """Test a self-referencing input degrades to AnyNode at the bound."""
        level1 = map_input_type(sample_schema.get_type("UserFilter"), depth=DEFAULT_INPUT_DEPTH)
        level2 = level1.field("and").node
        level3 = level2.field("and").node

        assert isinstance(level1, ObjectNode)
        assert isinstance(level2, ObjectNode)
        assert isinstance(level3, ObjectNode)
        assert level2.field("name").node == StringNode()
        assert level3.field("name").node == AnyNode()
        assert level3.field("and").node == AnyNode()

    def test_recursive_input_projects_to_finite_schema(self, sample_schema):
        """Test the bounded tree projects to JSON-Schema without recursion."""
        schema = to_json_schema(map_input_type(sample_schema.get_type("UserFilter")))
        innermost = schema["properties"]["and"]["properties"]["and"]
        assert innermost["type"] == "object"
        assert innermost["properties"]["and"] == {}

    def test_mutually_recursive_inputs_are_bounded(self):
        """Test a cycle through two input objects bottoms out in AnyNode."""
        schema = build_schema("input A { b: B n: Int } input B { a: A s: String } type Query { f(a: A): Int }")

        node = map_input_type(schema.get_type("A"))
        for _ in range(DEFAULT_INPUT_DEPTH - 1):
            assert isinstance(node, ObjectNode)
            node = node.fields[0].node

        assert isinstance(node, ObjectNode)
        assert [field.node for field in node.fields] == [AnyNode(), AnyNode()]
        assert to_json_schema(map_input_type(schema.get_type("A")))["properties"]["b"]["properties"]["a"]["properties"]["b"] == {}

    def test_input_field_defaults(self):
        """Test input field defaults are attached and make non-null fields optional."""
        schema = build_schema("enum Role { ADMIN USER } input Page { size: Int! = 25 role: Role = ADMIN } type Query { f(page: Page): Int }")

        node = map_input_type(schema.get_type("Page"))
        projected = to_json_schema(node)

        assert node.required_names == []
        assert projected["properties"]["size"] == {"type": "integer", "default": 25}
        assert "default" in projected["properties"]["role"]


class TestMapArguments:
    """Test suite for map_arguments."""

    def test_required_and_defaults(self, sample_schema):
        """Test argument requiredness and default propagation."""
        users = sample_schema.query_type.fields["users"]
        arguments = [ArgumentDescriptor(name, arg.type, declared_default(arg), arg.description) for name, arg in users.args.items()]

        node = map_arguments(arguments)

        assert node.required_names == []
        assert to_json_schema(node)["properties"]["limit"] == {"type": "integer", "default": 10}
        assert to_json_schema(node)["properties"]["role"] == {"type": "string", "enum": ["ADMIN", "USER"]}

    def test_non_null_argument_is_required(self):
        """Test a non-null argument without default is required."""
        node = map_arguments([ArgumentDescriptor("id", GraphQLNonNull(GraphQLID))])
        assert node.required_names == ["id"]

    def test_non_null_argument_with_default_is_optional(self):
        """Test a non-null argument with a default is optional."""
        node = map_arguments([ArgumentDescriptor("first", GraphQLNonNull(GraphQLInt), default_value=20)])
        assert node.required_names == []
        assert node.field("first").node == IntNode(default=20)

    def test_description_attached(self):
        """Test argument descriptions reach the node."""
        node = map_arguments([ArgumentDescriptor("q", GraphQLString, description="Search text")])
        assert node.field("q").node.description == "Search text"

    def test_empty(self):
        """Test operations without arguments map to an empty object."""
        assert map_arguments([]) == ObjectNode()
