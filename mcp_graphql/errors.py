# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Exception taxonomy for schema loading, tool translation and query execution.

Examples:
    >>> err = TransportError(500, "Internal Server Error", "boom")
    >>> str(err)
    'GraphQL request failed: Internal Server Error\\nboom'
    >>> isinstance(err, GraphQLMCPError)
    True
"""

# Standard
import json
from typing import Any, Dict, List, Optional


class GraphQLMCPError(Exception):
    """Base exception for all mcp-graphql failures."""


class ConfigurationError(GraphQLMCPError):
    """Raised when the process configuration is invalid."""


class TransportError(GraphQLMCPError):
    """Raised when the HTTP layer fails or returns a non-success status.

    Attributes:
        status_code: HTTP status code, or None for network-level failures.
        status_text: HTTP reason phrase or a short failure description.
        body: Raw response body, empty when no response was received.
    """

    def __init__(self, status_code: Optional[int], status_text: str, body: str = ""):
        """Initialize the error.

        Args:
            status_code: HTTP status code, None when no response was received.
            status_text: Reason phrase or failure description.
            body: Raw response body.
        """
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        message = f"GraphQL request failed: {status_text}"
        if body:
            message = f"{message}\n{body}"
        super().__init__(message)


class IntrospectionError(GraphQLMCPError):
    """Raised when an introspection response is unusable."""


class SchemaParseError(GraphQLMCPError):
    """Raised when a local schema definition cannot be read or parsed."""


class QuerySyntaxError(GraphQLMCPError):
    """Raised when caller-supplied query text is not valid GraphQL."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid GraphQL query: {detail}")


class MutationsDisabledError(GraphQLMCPError):
    """Raised when a mutation is submitted while mutations are disabled."""

    def __init__(self) -> None:
        super().__init__("Mutations are not allowed unless you enable them in the configuration. Please use a query operation instead.")


class GraphQLResponseError(GraphQLMCPError):
    """Raised when the server executed the request but reported errors.

    Attributes:
        errors: The ``errors`` array of the response.
        payload: The full decoded response body.
    """

    def __init__(self, payload: Dict[str, Any]):
        """Initialize the error.

        Args:
            payload: Decoded GraphQL response containing a non-empty ``errors`` array.
        """
        self.payload = payload
        self.errors: List[Any] = list(payload.get("errors") or [])
        super().__init__(f"The GraphQL response has errors, please fix the query: {json.dumps(payload, indent=2)}")


class ProgrammingError(GraphQLMCPError):
    """Raised on internal invariant violations."""


class ToolNotFoundError(GraphQLMCPError):
    """Raised when a tool name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool {name} not found")


class ToolArgumentError(GraphQLMCPError):
    """Raised when tool arguments do not match the tool's parameter schema."""
