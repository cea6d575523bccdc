# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/type_mapper.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

GraphQL input type to parameter schema mapping.

Input object types may reference themselves, directly or through other input
objects. Mapping is bounded by an explicit depth budget that is spent on every
input object descent; non-null and list wrappers are free. Once the budget is
exhausted the mapper returns ``AnyNode`` for whatever type remains.

Examples:
    >>> from graphql import GraphQLNonNull, GraphQLList, GraphQLInt
    >>> map_input_type(GraphQLNonNull(GraphQLList(GraphQLInt)))
    ListNode(items=IntNode(description=None, default=Undefined), description=None, default=Undefined)
    >>> map_input_type(GraphQLInt, depth=0)
    AnyNode(description=None, default=Undefined)
"""

# Standard
from dataclasses import replace
from typing import Any, Iterable, Optional, Tuple

# Third-Party
from graphql import (
    GraphQLInputType,
    is_enum_type,
    is_input_object_type,
    is_list_type,
    is_non_null_type,
    is_scalar_type,
    Undefined,
)

# First-Party
from mcp_graphql.models import ArgumentDescriptor, declared_default
from mcp_graphql.schema_nodes import AnyNode, BooleanNode, FloatNode, IntNode, ListNode, ObjectField, ObjectNode, SchemaNode, StringNode

DEFAULT_INPUT_DEPTH = 3

GRAPHQL_SCALAR_NODE_MAP = {
    "String": StringNode,
    "ID": StringNode,
    "Int": IntNode,
    "Float": FloatNode,
    "Boolean": BooleanNode,
}


def map_input_type(type_: GraphQLInputType, depth: int = DEFAULT_INPUT_DEPTH) -> SchemaNode:
    """Convert a GraphQL input type into a schema node.

    Args:
        type_: GraphQL input type, possibly wrapped in non-null and list.
        depth: Remaining input object descents.

    Returns:
        The mapped schema node. Custom scalars map to ``StringNode``; anything
        reached with no budget left, or any unsupported kind, maps to ``AnyNode``.

    Examples:
        >>> from graphql import GraphQLScalarType
        >>> map_input_type(GraphQLScalarType("DateTime"))
        StringNode(enum=None, description=None, default=Undefined)
    """
    if depth <= 0:
        return AnyNode()

    if is_non_null_type(type_):
        return map_input_type(type_.of_type, depth)

    if is_list_type(type_):
        return ListNode(items=map_input_type(type_.of_type, depth))

    if is_scalar_type(type_):
        return GRAPHQL_SCALAR_NODE_MAP.get(type_.name, StringNode)()

    if is_enum_type(type_):
        return StringNode(enum=tuple(type_.values.keys()))

    if is_input_object_type(type_):
        fields = []
        for field_name, input_field in type_.fields.items():
            default = declared_default(input_field)
            node = _annotate(map_input_type(input_field.type, depth - 1), input_field.description, default)
            required = is_non_null_type(input_field.type) and default is Undefined
            fields.append(ObjectField(field_name, node, required=required))
        return ObjectNode(fields=tuple(fields))

    return AnyNode()


def map_arguments(arguments: Iterable[ArgumentDescriptor], depth: int = DEFAULT_INPUT_DEPTH) -> ObjectNode:
    """Map an operation's arguments into one object node.

    Each argument gets the full depth budget. Declared defaults are attached
    to the mapped node as-is.

    Args:
        arguments: Argument descriptors in declaration order.
        depth: Depth budget per argument.

    Returns:
        Object node with one field per argument; an argument is required when
        its type is non-null and it has no default.
    """
    fields: Tuple[ObjectField, ...] = tuple(
        ObjectField(
            argument.name,
            _annotate(map_input_type(argument.type, depth), argument.description, argument.default_value),
            required=is_non_null_type(argument.type) and not argument.has_default,
        )
        for argument in arguments
    )
    return ObjectNode(fields=fields)


def _annotate(node: SchemaNode, description: Optional[str], default: Any) -> SchemaNode:
    """Return ``node`` with a description and default attached.

    Args:
        node: Mapped node.
        description: Optional description.
        default: Declared default or ``Undefined``.

    Returns:
        A copy of the node carrying the extra metadata.
    """
    if not description and default is Undefined:
        return node
    return replace(node, description=description or node.description, default=default)
