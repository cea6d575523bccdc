# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Shared records: log levels, operation descriptors, tools and execution results.

Examples:
    >>> OperationKind.QUERY.value
    'query'
    >>> CallingConvention("arguments") is CallingConvention.ARGUMENTS
    True
    >>> LogLevel.WARNING.upper()
    'WARNING'
"""

# Standard
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Mapping, Optional, Tuple, Type

# Third-Party
from graphql import GraphQLInputType, GraphQLOutputType, Undefined, value_from_ast
from pydantic import BaseModel, ValidationError

# First-Party
from mcp_graphql.errors import ToolArgumentError
from mcp_graphql.schema_nodes import build_model, ObjectNode


class LogLevel(str, Enum):
    """RFC 5424 severity levels, as used by MCP logging."""

    DEBUG = "debug"
    INFO = "info"
    NOTICE = "notice"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"
    ALERT = "alert"
    EMERGENCY = "emergency"


class OperationKind(str, Enum):
    """Root operation kinds translated into tools. Subscriptions are not supported."""

    QUERY = "query"
    MUTATION = "mutation"


class CallingConvention(str, Enum):
    """How a generated tool receives its GraphQL document.

    Attributes:
        QUERY: The caller supplies ``query`` text plus ``variables``.
        ARGUMENTS: The caller supplies the operation arguments and the tool
            executes a generated document.
    """

    QUERY = "query"
    ARGUMENTS = "arguments"


def declared_default(definition: Any) -> Any:
    """Return the default declared on a GraphQL argument or input field.

    graphql-core 3.2 keeps the default in ``default_value``. Later releases
    leave ``default_value`` unset and carry a ``default`` holding either a
    coerced ``value`` or a ``literal`` AST node, which is coerced against the
    definition's type here.

    Args:
        definition: A ``GraphQLArgument`` or ``GraphQLInputField``.

    Returns:
        The default value, or ``Undefined`` when none is declared.

    Examples:
        >>> from graphql import build_schema
        >>> args = build_schema("type Query { f(n: Int = 5, m: Int): Int }").query_type.fields["f"].args
        >>> declared_default(args["n"])
        5
        >>> declared_default(args["m"]) is Undefined
        True
    """
    value = getattr(definition, "default_value", Undefined)
    if value is not Undefined:
        return value
    default = getattr(definition, "default", None)
    if default is None:
        return Undefined
    if isinstance(default, Mapping):
        value, literal = default.get("value", Undefined), default.get("literal")
    else:
        value, literal = getattr(default, "value", Undefined), getattr(default, "literal", None)
    if literal is not None:
        return value_from_ast(literal, definition.type)
    return value


@dataclass(frozen=True)
class ArgumentDescriptor:
    """One declared argument of a root field."""

    name: str
    type: GraphQLInputType
    default_value: Any = Undefined
    description: Optional[str] = None

    @property
    def has_default(self) -> bool:
        """Return True when the argument declares a default value."""
        return self.default_value is not Undefined


@dataclass(frozen=True)
class OperationDescriptor:
    """A query or mutation root field, flattened for tool synthesis."""

    name: str
    kind: OperationKind
    description: Optional[str]
    arguments: Tuple[ArgumentDescriptor, ...] = ()
    output_type: Optional[GraphQLOutputType] = None


@dataclass(frozen=True)
class Tool:
    """An invocable tool synthesized from one GraphQL operation.

    Attributes:
        name: Unique registry key, ``{kind}-{operation}``.
        description: Human-readable description sent to the client.
        kind: Operation kind of the underlying root field.
        operation: The descriptor the tool was synthesized from.
        parameters: Root of the parameter schema tree.
        input_schema: JSON-Schema projection of ``parameters``.
        calling_convention: How invocation arguments are interpreted.
        document: Generated GraphQL document declaring every argument.
    """

    name: str
    description: str
    kind: OperationKind
    operation: OperationDescriptor
    parameters: ObjectNode
    input_schema: Dict[str, Any]
    calling_convention: CallingConvention = CallingConvention.QUERY
    document: str = ""

    @cached_property
    def argument_model(self) -> Type[BaseModel]:
        """Pydantic model compiled from the parameter schema."""
        return build_model(self.parameters, model_name=self.name)

    def validate_arguments(self, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Validate invocation arguments against the parameter schema.

        Args:
            arguments: Raw arguments from the caller.

        Returns:
            The validated arguments, limited to keys the caller supplied.

        Raises:
            ToolArgumentError: If the arguments do not match the schema.
        """
        try:
            validated = self.argument_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise ToolArgumentError(f"Invalid arguments for tool {self.name}: {e}") from e
        return validated.model_dump(by_alias=True, exclude_unset=True)

    def manifest(self) -> Dict[str, Any]:
        """Return the wire-level tool manifest.

        Returns:
            Dict with ``name``, ``description`` and ``inputSchema``.
        """
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


@dataclass(frozen=True)
class GraphQLResult:
    """Successful GraphQL response, returned verbatim."""

    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def data(self) -> Any:
        """Return the ``data`` member of the response."""
        return self.payload.get("data")
