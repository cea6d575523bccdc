# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/schema_source.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Schema loading by live introspection or from a local SDL file.

Examples:
    >>> schema = load_from_sdl("type Query { ping: String }")
    >>> list(schema.query_type.fields)
    ['ping']
"""

# Standard
import asyncio
from pathlib import Path
import time
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

# Third-Party
from graphql import build_client_schema, build_schema, get_introspection_query, GraphQLError, GraphQLSchema, print_schema
import httpx

# First-Party
from mcp_graphql.errors import IntrospectionError, SchemaParseError
from mcp_graphql.http_client import build_headers, create_client, post_json
from mcp_graphql.services.logging_service import LoggingService

if TYPE_CHECKING:
    from mcp_graphql.config import Settings

# Initialize logging
logging_service = LoggingService()
logger = logging_service.get_logger(__name__)

INTROSPECTION_QUERY = get_introspection_query(descriptions=True)


def schema_from_introspection(result: Mapping[str, Any]) -> GraphQLSchema:
    """Rebuild a schema from a decoded introspection response.

    Args:
        result: Decoded response body.

    Returns:
        GraphQLSchema: The client schema.

    Raises:
        IntrospectionError: If the body reports errors, lacks ``data.__schema``,
            or cannot be turned into a schema.
    """
    errors = result.get("errors")
    if errors:
        msg = "; ".join(e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors)
        raise IntrospectionError(f"GraphQL introspection failed: {msg}")

    data = result.get("data")
    if not isinstance(data, dict) or not data.get("__schema"):
        raise IntrospectionError("GraphQL introspection returned no schema data")

    try:
        return build_client_schema(data)
    except (GraphQLError, TypeError) as e:
        raise IntrospectionError(f"Invalid introspection result: {e}") from e


async def load_from_endpoint(url: str, headers: Optional[Mapping[str, str]] = None, client: Optional[httpx.AsyncClient] = None) -> GraphQLSchema:
    """Introspect a remote endpoint and rebuild its schema.

    Args:
        url: GraphQL endpoint URL.
        headers: Request headers; the JSON content type is added.
        client: Optional shared HTTP client. A temporary one is used otherwise.

    Returns:
        GraphQLSchema: The introspected schema.

    Raises:
        TransportError: On network failure or non-success HTTP status.
        IntrospectionError: If the response is not a usable introspection result.
    """
    logger.info(f"Introspecting GraphQL schema at {url}")
    start = time.time()
    payload: Dict[str, Any] = {"query": INTROSPECTION_QUERY}
    merged = build_headers(headers)

    if client is None:
        async with create_client() as temporary:
            result = await post_json(temporary, url, payload, merged)
    else:
        result = await post_json(client, url, payload, merged)

    schema = schema_from_introspection(result)
    elapsed_ms = (time.time() - start) * 1000
    logger.info(f"Introspection complete in {elapsed_ms:.1f}ms. Types: {len(schema.type_map)}")
    return schema


def load_from_sdl(sdl: str) -> GraphQLSchema:
    """Parse SDL text into a schema.

    Args:
        sdl: Schema definition language document.

    Returns:
        GraphQLSchema: The parsed schema.

    Raises:
        SchemaParseError: If the document is malformed or not a valid schema.
    """
    try:
        return build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise SchemaParseError(f"Invalid schema definition: {e}") from e


async def load_from_file(path: str) -> GraphQLSchema:
    """Read and parse an SDL file.

    Args:
        path: Path to the schema file.

    Returns:
        GraphQLSchema: The parsed schema.

    Raises:
        SchemaParseError: If the file cannot be read or parsed.
    """
    logger.info(f"Loading GraphQL schema from {path}")
    try:
        sdl = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except OSError as e:
        raise SchemaParseError(f"Failed to read schema file {path}: {e}") from e
    return load_from_sdl(sdl)


async def load_schema(settings: "Settings", client: Optional[httpx.AsyncClient] = None) -> GraphQLSchema:
    """Load the schema from the configured source.

    A local schema file takes precedence over the endpoint.

    Args:
        settings: Process settings.
        client: Optional shared HTTP client.

    Returns:
        GraphQLSchema: The loaded schema.
    """
    if settings.schema_path:
        return await load_from_file(settings.schema_path)
    headers = build_headers(settings.headers, settings.auth_type, settings.auth_value)
    return await load_from_endpoint(settings.endpoint, headers, client=client)


def print_schema_sdl(schema: GraphQLSchema) -> str:
    """Render a schema as SDL.

    Args:
        schema: Schema to print.

    Returns:
        str: SDL text.
    """
    return print_schema(schema)
