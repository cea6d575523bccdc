# -*- coding: utf-8 -*-
"""Location: ./tests/unit/mcp_graphql/test_schema_nodes.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Tests for parameter schema trees, their JSON-Schema projection and argument models.
"""

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from mcp_graphql.errors import ProgrammingError
from mcp_graphql.schema_nodes import AnyNode, BooleanNode, build_model, FloatNode, IntNode, ListNode, ObjectField, ObjectNode, StringNode, to_json_schema

FILTER_NODE = ObjectNode(
    fields=(
        ObjectField("name", StringNode(description="Name contains")),
        ObjectField("role", StringNode(enum=("ADMIN", "USER"))),
        ObjectField("ids", ListNode(StringNode())),
    )
)

ARGUMENTS_NODE = ObjectNode(
    fields=(
        ObjectField("id", StringNode(), required=True),
        ObjectField("limit", IntNode(default=10)),
        ObjectField("score", FloatNode()),
        ObjectField("active", BooleanNode()),
        ObjectField("filter", FILTER_NODE),
        ObjectField("extra", AnyNode()),
    )
)


class TestToJsonSchema:
    """Test suite for the JSON-Schema projection."""

    def test_object_projection(self):
        """Test a full object projects field by field."""
        schema = to_json_schema(ARGUMENTS_NODE)

        assert schema["type"] == "object"
        assert schema["required"] == ["id"]
        assert schema["properties"]["id"] == {"type": "string"}
        assert schema["properties"]["limit"] == {"type": "integer", "default": 10}
        assert schema["properties"]["score"] == {"type": "number"}
        assert schema["properties"]["active"] == {"type": "boolean"}
        assert schema["properties"]["extra"] == {}

    def test_nested_object(self):
        """Test nested objects, enums, lists and descriptions."""
        nested = to_json_schema(ARGUMENTS_NODE)["properties"]["filter"]

        assert nested["properties"]["name"] == {"type": "string", "description": "Name contains"}
        assert nested["properties"]["role"] == {"type": "string", "enum": ["ADMIN", "USER"]}
        assert nested["properties"]["ids"] == {"type": "array", "items": {"type": "string"}}
        assert "required" not in nested

    def test_empty_object_has_no_required(self):
        """Test an object without required fields omits the required key."""
        assert to_json_schema(ObjectNode()) == {"type": "object", "properties": {}}

    def test_unknown_node(self):
        """Test unknown node types are rejected."""
        with pytest.raises(ProgrammingError):
            to_json_schema("not a node")  # type: ignore[arg-type]


class TestObjectNode:
    """Test suite for ObjectNode helpers."""

    def test_field_lookup(self):
        """Test fields are found by name."""
        assert ARGUMENTS_NODE.field("limit").node == IntNode(default=10)
        assert ARGUMENTS_NODE.field("missing") is None

    def test_nodes_are_immutable(self):
        """Test nodes cannot be modified after construction."""
        with pytest.raises(AttributeError):
            ARGUMENTS_NODE.description = "changed"  # type: ignore[misc]


class TestBuildModel:
    """Test suite for argument model compilation."""

    @pytest.fixture
    def model(self):
        return build_model(ARGUMENTS_NODE, model_name="Arguments")

    def test_accepts_valid_arguments(self, model):
        """Test valid arguments pass and only supplied keys are dumped."""
        result = model.model_validate({"id": "1", "filter": {"role": "ADMIN", "ids": ["a", "b"]}}).model_dump(by_alias=True, exclude_unset=True)
        assert result == {"id": "1", "filter": {"role": "ADMIN", "ids": ["a", "b"]}}

    def test_missing_required(self, model):
        """Test a missing required field is rejected."""
        with pytest.raises(ValidationError):
            model.model_validate({"limit": 5})

    def test_strict_scalars(self, model):
        """Test scalars are not coerced."""
        with pytest.raises(ValidationError):
            model.model_validate({"id": 1})
        with pytest.raises(ValidationError):
            model.model_validate({"id": "1", "limit": "5"})
        with pytest.raises(ValidationError):
            model.model_validate({"id": "1", "active": "yes"})

    def test_enum_values(self, model):
        """Test enum-restricted strings reject unknown values."""
        with pytest.raises(ValidationError):
            model.model_validate({"id": "1", "filter": {"role": "ROOT"}})

    def test_unknown_keys_dropped(self, model):
        """Test unknown keys are ignored."""
        result = model.model_validate({"id": "1", "unexpected": True}).model_dump(by_alias=True, exclude_unset=True)
        assert result == {"id": "1"}

    def test_any_accepts_anything(self, model):
        """Test AnyNode fields accept arbitrary values."""
        result = model.model_validate({"id": "1", "extra": {"deep": [1, "x"]}}).model_dump(by_alias=True, exclude_unset=True)
        assert result["extra"] == {"deep": [1, "x"]}

    def test_default_applied(self, model):
        """Test declared defaults are applied but not dumped as supplied."""
        instance = model.model_validate({"id": "1"})
        assert instance.model_dump(by_alias=True)["limit"] == 10
        assert "limit" not in instance.model_dump(by_alias=True, exclude_unset=True)

    def test_awkward_names(self):
        """Test GraphQL names that clash with model attributes still work."""
        node = ObjectNode(fields=(ObjectField("__ignore__", BooleanNode()), ObjectField("model_config", StringNode())))
        model = build_model(node, model_name="Awkward")
        result = model.model_validate({"__ignore__": True, "model_config": "x"}).model_dump(by_alias=True, exclude_unset=True)
        assert result == {"__ignore__": True, "model_config": "x"}
