# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/schema_nodes.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Parameter schema tree for generated tools.

A ``SchemaNode`` is a closed union of frozen dataclasses describing the
validation shape of one GraphQL input type. Two projections are derived from
it: a JSON-Schema dict for tool manifests and a pydantic model for validating
invocation arguments.

Examples:
    >>> node = ObjectNode(fields=(
    ...     ObjectField("id", StringNode(), required=True),
    ...     ObjectField("tags", ListNode(StringNode())),
    ... ))
    >>> to_json_schema(node)
    {'type': 'object', 'properties': {'id': {'type': 'string'}, 'tags': {'type': 'array', 'items': {'type': 'string'}}}, 'required': ['id']}
    >>> model = build_model(node, model_name="Example")
    >>> model.model_validate({"id": "1"}).model_dump(by_alias=True, exclude_unset=True)
    {'id': '1'}
"""

# Standard
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, Union

# Third-Party
from graphql import Undefined
from pydantic import BaseModel, ConfigDict, create_model, Field, StrictBool, StrictFloat, StrictInt, StrictStr

# First-Party
from mcp_graphql.errors import ProgrammingError


@dataclass(frozen=True)
class StringNode:
    """String value, optionally restricted to a set of enum values."""

    enum: Optional[Tuple[str, ...]] = None
    description: Optional[str] = None
    default: Any = Undefined


@dataclass(frozen=True)
class IntNode:
    """Integer value."""

    description: Optional[str] = None
    default: Any = Undefined


@dataclass(frozen=True)
class FloatNode:
    """Floating point value."""

    description: Optional[str] = None
    default: Any = Undefined


@dataclass(frozen=True)
class BooleanNode:
    """Boolean value."""

    description: Optional[str] = None
    default: Any = Undefined


@dataclass(frozen=True)
class AnyNode:
    """Unchecked value, used past the recursion budget."""

    description: Optional[str] = None
    default: Any = Undefined


@dataclass(frozen=True)
class ListNode:
    """Homogeneous list of ``items``."""

    items: "SchemaNode"
    description: Optional[str] = None
    default: Any = Undefined


@dataclass(frozen=True)
class ObjectField:
    """A named member of an ``ObjectNode``."""

    name: str
    node: "SchemaNode"
    required: bool = False


@dataclass(frozen=True)
class ObjectNode:
    """Object with named fields, each required or optional."""

    fields: Tuple[ObjectField, ...] = ()
    description: Optional[str] = None
    default: Any = Undefined

    def field(self, name: str) -> Optional[ObjectField]:
        """Return the field called ``name``, if any.

        Args:
            name: Field name.

        Returns:
            The matching field or None.
        """
        for object_field in self.fields:
            if object_field.name == name:
                return object_field
        return None

    @property
    def required_names(self) -> List[str]:
        """Names of required fields, in declaration order."""
        return [f.name for f in self.fields if f.required]


SchemaNode = Union[StringNode, IntNode, FloatNode, BooleanNode, ListNode, ObjectNode, AnyNode]

_PRIMITIVE_JSON_TYPES = {
    StringNode: "string",
    IntNode: "integer",
    FloatNode: "number",
    BooleanNode: "boolean",
}

_ARGUMENT_MODEL_CONFIG = ConfigDict(extra="ignore")


def to_json_schema(node: SchemaNode) -> Dict[str, Any]:
    """Project a schema node into a JSON-Schema dict.

    Args:
        node: Node to project.

    Returns:
        JSON-Schema dict mirroring the node tree.

    Raises:
        ProgrammingError: If ``node`` is not a known node variant.

    Examples:
        >>> to_json_schema(IntNode(default=10))
        {'type': 'integer', 'default': 10}
        >>> to_json_schema(StringNode(enum=("ADMIN", "USER")))
        {'type': 'string', 'enum': ['ADMIN', 'USER']}
        >>> to_json_schema(AnyNode())
        {}
    """
    schema: Dict[str, Any]
    if isinstance(node, AnyNode):
        schema = {}
    elif isinstance(node, ListNode):
        schema = {"type": "array", "items": to_json_schema(node.items)}
    elif isinstance(node, ObjectNode):
        schema = {"type": "object", "properties": {f.name: to_json_schema(f.node) for f in node.fields}}
        if node.required_names:
            schema["required"] = node.required_names
    elif type(node) in _PRIMITIVE_JSON_TYPES:
        schema = {"type": _PRIMITIVE_JSON_TYPES[type(node)]}
        if isinstance(node, StringNode) and node.enum:
            schema["enum"] = list(node.enum)
    else:
        raise ProgrammingError(f"Unknown schema node: {node!r}")

    if node.description:
        schema["description"] = node.description
    if node.default is not Undefined:
        schema["default"] = node.default
    return schema


def _annotation(node: SchemaNode, name: str) -> Any:
    """Return the pydantic type annotation for a node.

    Args:
        node: Node to convert.
        name: Dotted model name used for nested objects.

    Returns:
        A type usable as a pydantic field annotation.

    Raises:
        ProgrammingError: If ``node`` is not a known node variant.
    """
    if isinstance(node, StringNode):
        if node.enum:
            return Literal[node.enum]
        return StrictStr
    if isinstance(node, IntNode):
        return StrictInt
    if isinstance(node, FloatNode):
        return StrictFloat
    if isinstance(node, BooleanNode):
        return StrictBool
    if isinstance(node, ListNode):
        return List[_annotation(node.items, name)]  # type: ignore[misc]
    if isinstance(node, ObjectNode):
        return build_model(node, name)
    if isinstance(node, AnyNode):
        return Any
    raise ProgrammingError(f"Unknown schema node: {node!r}")


def build_model(node: ObjectNode, model_name: str) -> Type[BaseModel]:
    """Compile an object node into a pydantic model with strict scalars.

    GraphQL names are kept as aliases so that names with a leading
    underscore or clashing with ``BaseModel`` attributes stay usable.

    Args:
        node: Object node to compile.
        model_name: Name of the generated model class.

    Returns:
        A pydantic model class. Unknown keys are dropped on validation.
    """
    definitions: Dict[str, Any] = {}
    for index, object_field in enumerate(node.fields):
        annotation = _annotation(object_field.node, f"{model_name}__{object_field.name}")
        if object_field.required:
            definitions[f"field_{index}"] = (annotation, Field(..., alias=object_field.name))
        else:
            default = None if object_field.node.default is Undefined else object_field.node.default
            definitions[f"field_{index}"] = (Optional[annotation], Field(default=default, alias=object_field.name))
    return create_model(model_name, __config__=_ARGUMENT_MODEL_CONFIG, **definitions)
