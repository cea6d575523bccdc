# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/gateway.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Execution gateway.

Checks caller-supplied GraphQL text locally (syntax, mutation gate) and then
sends it to the configured endpoint. The outcome is exactly one of a
``GraphQLResult``, a ``TransportError`` or a ``GraphQLResponseError``.

Examples:
    >>> from mcp_graphql.config import Settings
    >>> gateway = ExecutionGateway(Settings(_env_file=None))
    >>> gateway.is_mutation(gateway.parse_query("mutation { ping }"))
    True
    >>> gateway.check_query("mutation { ping }")
    Traceback (most recent call last):
        ...
    mcp_graphql.errors.MutationsDisabledError: Mutations are not allowed unless you enable them in the configuration. Please use a query operation instead.
"""

# Standard
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

# Third-Party
from graphql import DocumentNode, GraphQLSyntaxError, OperationDefinitionNode, OperationType, parse
import httpx

# First-Party
from mcp_graphql.errors import GraphQLResponseError, MutationsDisabledError, QuerySyntaxError
from mcp_graphql.http_client import build_headers, create_client, post_json
from mcp_graphql.models import GraphQLResult
from mcp_graphql.services.logging_service import LoggingService

if TYPE_CHECKING:
    from mcp_graphql.config import Settings

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


class ExecutionGateway:
    """Sends GraphQL requests to the configured endpoint."""

    def __init__(self, settings: "Settings", client: Optional[httpx.AsyncClient] = None):
        """Initialize gateway.

        Args:
            settings: Settings providing endpoint, headers and the mutation gate.
            client: Optional shared HTTP client; created lazily otherwise.
        """
        self._settings = settings
        self._client = client
        self._owns_client = client is None
        self._headers = build_headers(settings.headers, settings.auth_type, settings.auth_value)

    @staticmethod
    def parse_query(query: str) -> DocumentNode:
        """Parse query text.

        Args:
            query: GraphQL document text.

        Returns:
            DocumentNode: The parsed document.

        Raises:
            QuerySyntaxError: If the text is not valid GraphQL.
        """
        try:
            return parse(query)
        except GraphQLSyntaxError as e:
            raise QuerySyntaxError(str(e)) from e

    @staticmethod
    def is_mutation(document: DocumentNode) -> bool:
        """Return True when the document defines a mutation operation.

        Args:
            document: Parsed document.

        Returns:
            bool: Whether any operation definition is a mutation.
        """
        return any(isinstance(definition, OperationDefinitionNode) and definition.operation == OperationType.MUTATION for definition in document.definitions)

    def check_query(self, query: str) -> DocumentNode:
        """Validate query text before dispatch.

        Args:
            query: GraphQL document text.

        Returns:
            DocumentNode: The parsed document.

        Raises:
            QuerySyntaxError: If the text is not valid GraphQL.
            MutationsDisabledError: If the document contains a mutation while mutations are disabled.
        """
        document = self.parse_query(query)
        if self.is_mutation(document) and not self._settings.allow_mutations:
            logger.warning("Rejected mutation: mutations are disabled")
            raise MutationsDisabledError()
        return document

    async def execute(self, query: str, variables: Optional[Mapping[str, Any]] = None) -> GraphQLResult:
        """Check and execute a GraphQL request.

        Args:
            query: GraphQL document text.
            variables: Optional variables object.

        Returns:
            GraphQLResult: The response payload, verbatim.

        Raises:
            QuerySyntaxError: If the text is not valid GraphQL.
            MutationsDisabledError: If a mutation is submitted while mutations are disabled.
            TransportError: On network failure or non-success HTTP status.
            GraphQLResponseError: If the response carries a non-empty ``errors`` array.
        """
        self.check_query(query)

        payload: Dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = dict(variables)

        logger.info(f"Executing GraphQL request against {self._settings.endpoint}")
        logger.debug(f"GraphQL request body: {payload}")
        result = await post_json(self._get_client(), self._settings.endpoint, payload, self._headers)

        if result.get("errors"):
            logger.info(f"GraphQL response carried {len(result['errors'])} error(s)")
            raise GraphQLResponseError(result)
        return GraphQLResult(payload=result)

    def _get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client, creating an owned one on first use."""
        if self._client is None:
            self._client = create_client(self._settings.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this gateway created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
