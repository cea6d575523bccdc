# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/server.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

GraphQL MCP server.

Serves the tool registry over the MCP stdio transport. Besides one tool per
query (and per mutation when enabled) it offers two built-in tools:

- ``introspect-schema`` reloads the schema from its source, rebuilds the tool
  set and returns the SDL.
- ``query-graphql`` runs a free-form query with optional variables.

The schema is also published as the ``graphql-schema`` resource.

Usage:
    Command line usage::

        # Introspect a live endpoint
        mcp-graphql --endpoint https://api.example.com/graphql

        # Use a local schema file, allow mutations
        SCHEMA=./schema.graphql ENDPOINT=https://api.example.com/graphql ALLOW_MUTATIONS=true mcp-graphql
"""

# Standard
import asyncio
import json
import sys
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Type

# Third-Party
from graphql import GraphQLSchema
import httpx
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
import mcp.types as types
from pydantic import BaseModel, ValidationError

# First-Party
from mcp_graphql import __version__
from mcp_graphql.config import build_settings, Settings
from mcp_graphql.errors import ConfigurationError, GraphQLMCPError, ProgrammingError, ToolArgumentError, ToolNotFoundError
from mcp_graphql.gateway import ExecutionGateway
from mcp_graphql.http_client import create_client
from mcp_graphql.models import CallingConvention
from mcp_graphql.registry import ToolRegistry
from mcp_graphql.schema_nodes import AnyNode, BooleanNode, build_model, ObjectField, ObjectNode, StringNode, to_json_schema
from mcp_graphql.schema_source import load_schema, print_schema_sdl
from mcp_graphql.services.logging_service import LoggingService

# Initialize logging
logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

INTROSPECT_TOOL = "introspect-schema"
QUERY_TOOL = "query-graphql"
SCHEMA_RESOURCE = "graphql-schema"

INTROSPECT_DESCRIPTION = (
    "Introspect the GraphQL schema, use this tool before doing a query to get the schema information "
    "if you do not have it available as a resource already."
)
QUERY_DESCRIPTION = "Query a GraphQL endpoint with the given query and variables."

# __ignore__ gives clients that cannot send an empty object something to send
INTROSPECT_PARAMETERS = ObjectNode(fields=(ObjectField("__ignore__", BooleanNode(description="This does not do anything", default=False)),))
QUERY_PARAMETERS = ObjectNode(
    fields=(
        ObjectField("query", StringNode(description="GraphQL document to execute"), required=True),
        ObjectField("variables", AnyNode(description="Variables object, or a JSON string encoding one")),
    )
)


def _coerce_variables(raw: Any) -> Optional[Dict[str, Any]]:
    """Normalize a variables argument into a dict.

    Args:
        raw: None, a mapping, or a JSON string encoding an object.

    Returns:
        The variables dict, or None.

    Raises:
        ToolArgumentError: If the value is neither an object nor a JSON object string.

    Examples:
        >>> _coerce_variables('{"id": "1"}')
        {'id': '1'}
        >>> _coerce_variables(None) is None
        True
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ToolArgumentError(f"Variables must be a JSON object: {e}") from e
    if not isinstance(raw, Mapping):
        raise ToolArgumentError("Variables must be a JSON object")
    return dict(raw)


class GraphQLMCPServer:
    """MCP server exposing a GraphQL API as tools."""

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        """Initialize the server.

        Args:
            settings: Process settings.
            client: Optional shared HTTP client; one is created from ``settings`` otherwise.
        """
        self._settings = settings
        self._owns_client = client is None
        self._client = client or create_client(settings.timeout)
        self._schema: Optional[GraphQLSchema] = None
        self.registry = ToolRegistry(settings, reserved_names=(INTROSPECT_TOOL, QUERY_TOOL))
        self.gateway = ExecutionGateway(settings, client=self._client)
        self._introspect_model = build_model(INTROSPECT_PARAMETERS, model_name=INTROSPECT_TOOL)
        self._query_model = build_model(QUERY_PARAMETERS, model_name=QUERY_TOOL)
        self.server: Server = Server(settings.name, version=__version__, instructions=f"GraphQL MCP server for {settings.endpoint}")
        self._register_handlers()

    @property
    def schema(self) -> Optional[GraphQLSchema]:
        """The currently loaded schema."""
        return self._schema

    async def start(self) -> None:
        """Load the schema and build the tool registry.

        Raises:
            TransportError: If the endpoint cannot be reached.
            IntrospectionError: If introspection fails.
            SchemaParseError: If the schema file is invalid.
        """
        if self._settings.schema_path and "endpoint" in self._settings.model_fields_set:
            logger.warning(f"Both a schema file and an endpoint are configured; loading the schema from {self._settings.schema_path}")
        schema = await load_schema(self._settings, client=self._client)
        self.registry.build(schema)
        self._schema = schema
        logger.info(f"Started graphql mcp server {self._settings.name} for endpoint: {self._settings.endpoint}")

    async def refresh_schema(self) -> str:
        """Reload the schema from its source and rebuild the tool set.

        On failure the previously installed schema and tools stay in place.

        Returns:
            str: SDL of the freshly loaded schema.
        """
        schema = await load_schema(self._settings, client=self._client)
        self.registry.reload(schema)
        self._schema = schema
        return print_schema_sdl(schema)

    def schema_sdl(self) -> str:
        """Return the SDL of the loaded schema.

        Returns:
            str: SDL text.

        Raises:
            ProgrammingError: If called before ``start``.
        """
        if self._schema is None:
            raise ProgrammingError("Schema has not been loaded")
        return print_schema_sdl(self._schema)

    def list_tools(self) -> List[types.Tool]:
        """Return built-in and generated tool manifests.

        Returns:
            List of MCP tool definitions.
        """
        tools = [
            types.Tool(name=INTROSPECT_TOOL, description=INTROSPECT_DESCRIPTION, inputSchema=to_json_schema(INTROSPECT_PARAMETERS)),
            types.Tool(name=QUERY_TOOL, description=QUERY_DESCRIPTION, inputSchema=to_json_schema(QUERY_PARAMETERS)),
        ]
        tools.extend(types.Tool(**tool.manifest()) for tool in self.registry.tools.values())
        return tools

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]]) -> str:
        """Invoke a tool and return its text result.

        Args:
            name: Tool name.
            arguments: Raw tool arguments.

        Returns:
            str: Tool output.

        Raises:
            ToolNotFoundError: If the tool is unknown.
            ToolArgumentError: If the arguments do not match the tool's schema.
            QuerySyntaxError: If the query text does not parse.
            MutationsDisabledError: If a mutation is submitted while mutations are disabled.
            TransportError: If the HTTP request fails.
            GraphQLResponseError: If the GraphQL response contains errors.
        """
        logger.info(f"Calling tool {name}")

        if name == INTROSPECT_TOOL:
            self._validate(self._introspect_model, name, arguments)
            return await self.refresh_schema()

        if name == QUERY_TOOL:
            args = self._validate(self._query_model, name, arguments)
            result = await self.gateway.execute(args["query"], _coerce_variables(args.get("variables")))
            return json.dumps(result.payload, indent=2)

        tool = self.registry.lookup(name)
        if tool is None:
            raise ToolNotFoundError(name)

        args = tool.validate_arguments(arguments)
        if tool.calling_convention is CallingConvention.QUERY:
            query, variables = args["query"], args.get("variables")
        else:
            query, variables = tool.document, args
        result = await self.gateway.execute(query, variables)
        return json.dumps(result.payload, indent=2)

    @staticmethod
    def _validate(model: Type[BaseModel], name: str, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Validate built-in tool arguments.

        Args:
            model: Pydantic model of the tool's parameters.
            name: Tool name, for error messages.
            arguments: Raw arguments.

        Returns:
            Validated arguments.

        Raises:
            ToolArgumentError: If validation fails.
        """
        try:
            return model.model_validate(dict(arguments or {})).model_dump(by_alias=True, exclude_unset=True)
        except ValidationError as e:
            raise ToolArgumentError(f"Invalid arguments for tool {name}: {e}") from e

    def _register_handlers(self) -> None:
        """Wire MCP request handlers to this instance."""
        server = self.server

        @server.list_tools()
        async def _list_tools() -> List[types.Tool]:
            return self.list_tools()

        @server.call_tool()
        async def _call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
            try:
                text = await self.call_tool(name, arguments)
            except GraphQLMCPError as e:
                logger.warning(f"Tool {name} failed: {e}")
                raise
            if name == INTROSPECT_TOOL:
                await server.request_context.session.send_tool_list_changed()
            return [types.TextContent(type="text", text=text)]

        @server.list_resources()
        async def _list_resources() -> List[types.Resource]:
            return [
                types.Resource(
                    uri=self._settings.endpoint,
                    name=SCHEMA_RESOURCE,
                    description="The GraphQL schema of the server",
                    mimeType="text/plain",
                )
            ]

        @server.read_resource()
        async def _read_resource(uri: Any) -> Iterable[ReadResourceContents]:
            return [ReadResourceContents(content=self.schema_sdl(), mime_type="text/plain")]

    async def run_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(notification_options=NotificationOptions(tools_changed=True)),
            )

    async def close(self) -> None:
        """Close the HTTP client if this server created it."""
        if self._owns_client:
            await self._client.aclose()


async def serve(settings: Settings) -> None:
    """Start the server and serve stdio until shutdown.

    Args:
        settings: Process settings.
    """
    await logging_service.initialize(settings)
    app = GraphQLMCPServer(settings)
    try:
        await app.start()
        await app.run_stdio()
    finally:
        await app.close()
        await logging_service.shutdown()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``.
    """
    asyncio.run(logging_service.initialize())
    try:
        settings = build_settings(argv)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(serve(settings))
    except GraphQLMCPError as e:
        logger.error(f"Fatal error in main(): {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
