# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/tool_synthesizer.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Operation to tool synthesis.

Turns an ``OperationDescriptor`` into a ``Tool``: a deterministic name, a
description enriched with the operation's parameters and output shape, a
parameter schema tree with its JSON-Schema projection, and a generated GraphQL
document for tools that take plain operation arguments.

Examples:
    >>> from graphql import build_schema
    >>> from mcp_graphql.operations import extract_operations
    >>> schema = build_schema("type Query { user(id: ID!): User } type User { id: ID! name: String }")
    >>> tool = ToolSynthesizer().synthesize(extract_operations(schema)[0])
    >>> tool.name
    'query-user'
    >>> tool.input_schema["properties"]["variables"]
    {'type': 'object', 'properties': {'id': {'type': 'string'}}, 'required': ['id']}
    >>> print(tool.document)
    query user($id: ID!) { user(id: $id) { id name } }
"""

# Standard
from typing import List, Set

# Third-Party
from graphql import (
    get_named_type,
    GraphQLInputType,
    GraphQLNamedType,
    GraphQLOutputType,
    is_enum_type,
    is_interface_type,
    is_leaf_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_union_type,
    Undefined,
)

# First-Party
from mcp_graphql.errors import ProgrammingError
from mcp_graphql.models import ArgumentDescriptor, CallingConvention, declared_default, OperationDescriptor, Tool
from mcp_graphql.schema_nodes import ObjectField, ObjectNode, StringNode, to_json_schema
from mcp_graphql.type_mapper import map_arguments

OUTPUT_TYPE_DEPTH = 5


def print_output_type(type_: GraphQLOutputType, depth: int = OUTPUT_TYPE_DEPTH) -> str:
    """Print the shape of an output type for tool descriptions.

    Args:
        type_: GraphQL output type.
        depth: Remaining object levels to expand.

    Returns:
        A compact, indented rendering of the type.

    Examples:
        >>> from graphql import build_schema
        >>> schema = build_schema("type Query { u: [User!] } type User { id: ID! role: Role } enum Role { A B }")
        >>> print(print_output_type(schema.query_type.fields["u"].type))
        [{
          id: ID!
          role: ENUM Role
        }!]
    """
    if depth <= 0:
        return "..."

    if is_list_type(type_):
        return f"[{print_output_type(type_.of_type, depth)}]"
    if is_non_null_type(type_):
        return f"{print_output_type(type_.of_type, depth)}!"
    if is_scalar_type(type_):
        return type_.name
    if is_enum_type(type_):
        return f"ENUM {type_.name}"
    if is_object_type(type_) or is_interface_type(type_):
        if depth - 1 <= 0:
            return type_.name
        lines = [f"  {name}: {print_output_type(field.type, depth - 1)}" for name, field in type_.fields.items()]
        return "{\n" + "\n".join(lines) + "\n}"
    if is_union_type(type_):
        return " | ".join(member.name for member in type_.types)
    return getattr(type_, "name", "Unknown")


def describe_operation(operation: OperationDescriptor) -> str:
    """Build the long-form description of an operation.

    Args:
        operation: Operation to describe.

    Returns:
        Description covering purpose, parameters and output type.
    """
    if operation.arguments:
        parameters = "\n".join(f"- {arg.name}: {arg.type}{f' - {arg.description}' if arg.description else ''}" for arg in operation.arguments)
    else:
        parameters = "No parameters required"
    output = print_output_type(operation.output_type) if operation.output_type is not None else "Unknown output type"
    return (
        f'{operation.kind.value} operation: "{operation.name}"\n\n'
        f"DESCRIPTION:\n{operation.description or f'Anonymous {operation.kind.value}'}\n\n"
        f"PARAMETERS:\n{parameters}\n\n"
        f"OUTPUT TYPE:\n{output}\n\n"
        "When you use this operation, you'll receive a response with this structure."
    )


def _variable_type(argument: ArgumentDescriptor) -> GraphQLInputType:
    """Return the variable type for an argument; non-null arguments with a default take a nullable variable."""
    if argument.has_default and is_non_null_type(argument.type):
        return argument.type.of_type
    return argument.type


class QueryBuilder:
    """Builds GraphQL documents for operations.

    Examples:
        >>> qb = QueryBuilder(max_depth=2)
        >>> qb._max_depth
        2
    """

    def __init__(self, max_depth: int = 3):
        """Initialize query builder.

        Args:
            max_depth: Maximum depth for automatic field selection.
        """
        self._max_depth = max_depth

    def build(self, operation: OperationDescriptor) -> str:
        """Build a document declaring every argument as a variable.

        Args:
            operation: Operation to render.

        Returns:
            A single-operation GraphQL document.
        """
        var_decls = [f"${arg.name}: {_variable_type(arg)}" for arg in operation.arguments]
        arg_refs = [f"{arg.name}: ${arg.name}" for arg in operation.arguments]
        var_decl_str = f"({', '.join(var_decls)})" if var_decls else ""
        arg_ref_str = f"({', '.join(arg_refs)})" if arg_refs else ""

        selection = ""
        if operation.output_type is not None and not is_leaf_type(get_named_type(operation.output_type)):
            selection = " " + self._build_field_selection(get_named_type(operation.output_type), depth=0, visited=set())

        return f"{operation.kind.value} {operation.name}{var_decl_str} {{ {operation.name}{arg_ref_str}{selection} }}"

    def _build_field_selection(self, type_: GraphQLNamedType, depth: int, visited: Set[str]) -> str:
        """Build a field selection string for a named output type.

        Selects scalar and enum fields and recurses into object fields up to
        the configured depth. Fields with required arguments are skipped.

        Args:
            type_: Named GraphQL output type.
            depth: Current recursion depth.
            visited: Type names already on the path (cycle detection).

        Returns:
            A field selection string (e.g. '{ id name email }').
        """
        if not (is_object_type(type_) or is_interface_type(type_)) or type_.name in visited:
            return "{ __typename }"

        visited_copy = visited | {type_.name}
        fields: List[str] = []
        for name, field in type_.fields.items():
            if any(is_non_null_type(arg.type) and declared_default(arg) is Undefined for arg in field.args.values()):
                continue
            named = get_named_type(field.type)
            if is_leaf_type(named):
                fields.append(name)
            elif (is_object_type(named) or is_interface_type(named)) and depth + 1 < self._max_depth and named.name not in visited_copy:
                nested = self._build_field_selection(named, depth + 1, visited_copy)
                if nested != "{ __typename }":
                    fields.append(f"{name} {nested}")

        if not fields:
            fields = ["__typename"]
        return "{ " + " ".join(fields) + " }"


class ToolSynthesizer:
    """Synthesizes tools from operation descriptors.

    Examples:
        >>> ToolSynthesizer().calling_convention
        <CallingConvention.QUERY: 'query'>
    """

    def __init__(
        self,
        calling_convention: CallingConvention = CallingConvention.QUERY,
        describe_output_types: bool = True,
        selection_depth: int = 3,
    ):
        """Initialize synthesizer.

        Args:
            calling_convention: Shape of the generated parameter schemas.
            describe_output_types: Use the long-form description.
            selection_depth: Depth of generated selection sets.
        """
        self.calling_convention = CallingConvention(calling_convention)
        self.describe_output_types = describe_output_types
        self._query_builder = QueryBuilder(selection_depth)

    def synthesize(self, operation: OperationDescriptor) -> Tool:
        """Convert an operation into a tool.

        Args:
            operation: Operation descriptor.

        Returns:
            Tool: The synthesized tool.

        Raises:
            ProgrammingError: If the operation has no name.
        """
        if not operation.name:
            raise ProgrammingError("Operation name is required")

        name = f"{operation.kind.value}-{operation.name}"
        if self.describe_output_types:
            description = describe_operation(operation)
        else:
            description = operation.description or f"Anonymous {operation.kind.value}"

        document = self._query_builder.build(operation)
        if self.describe_output_types and self.calling_convention is CallingConvention.QUERY:
            description = f"{description}\n\nEXAMPLE QUERY:\n{document}"

        arguments = map_arguments(operation.arguments)
        if self.calling_convention is CallingConvention.QUERY:
            parameters = ObjectNode(
                fields=(
                    ObjectField("query", StringNode(description=f"GraphQL document invoking the {operation.name} {operation.kind.value}"), required=True),
                    ObjectField("variables", arguments, required=bool(arguments.required_names)),
                )
            )
        else:
            parameters = arguments

        return Tool(
            name=name,
            description=description,
            kind=operation.kind,
            operation=operation,
            parameters=parameters,
            input_schema=to_json_schema(parameters),
            calling_convention=self.calling_convention,
            document=document,
        )
