# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/http_client.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

HTTP plumbing shared by schema introspection and query execution.

Every request is a JSON POST. Non-success statuses and network failures are
reported as ``TransportError``; nothing is retried.
"""

# Standard
from typing import Any, Dict, Mapping, Optional

# Third-Party
import httpx

# First-Party
from mcp_graphql.errors import TransportError
from mcp_graphql.services.logging_service import LoggingService

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


def build_headers(
    headers: Optional[Mapping[str, str]] = None,
    auth_type: Optional[str] = None,
    auth_value: Optional[str] = None,
) -> Dict[str, str]:
    """Build HTTP headers including authentication.

    Args:
        headers: Caller-supplied headers, merged over the JSON content type.
        auth_type: Authentication type ('bearer', 'basic', 'header').
        auth_value: Authentication credential value.

    Returns:
        Dict of HTTP headers.

    Examples:
        >>> build_headers()["Content-Type"]
        'application/json'
        >>> build_headers({"X-Custom": "1"}, auth_type="bearer", auth_value="tok123")["Authorization"]
        'Bearer tok123'
        >>> build_headers(auth_type="header", auth_value="X-API-Key: secret")["X-API-Key"]
        'secret'
    """
    merged: Dict[str, str] = {"Content-Type": "application/json"}
    merged.update(headers or {})
    if auth_type and auth_value:
        if auth_type == "bearer":
            merged["Authorization"] = f"Bearer {auth_value}"
        elif auth_type == "basic":
            merged["Authorization"] = f"Basic {auth_value}"
        elif auth_type == "header":
            # auth_value is expected to be "HeaderName: HeaderValue"
            if ":" in auth_value:
                key, _, val = auth_value.partition(":")
                merged[key.strip()] = val.strip()
    return merged


def create_client(timeout: float = 30.0) -> httpx.AsyncClient:
    """Create the shared async HTTP client.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        httpx.AsyncClient: A client following redirects.
    """
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


async def post_json(client: httpx.AsyncClient, url: str, payload: Dict[str, Any], headers: Mapping[str, str]) -> Dict[str, Any]:
    """POST a JSON payload and decode the JSON response.

    Args:
        client: HTTP client.
        url: Target URL.
        payload: JSON body.
        headers: Request headers.

    Returns:
        The decoded response object.

    Raises:
        TransportError: On network failure, non-2xx status, or a body that is not a JSON object.
    """
    try:
        response = await client.post(url, json=payload, headers=dict(headers))
    except httpx.HTTPError as e:
        logger.error(f"Request to {url} failed: {e}")
        raise TransportError(None, f"{type(e).__name__}: {e}") from e

    if not response.is_success:
        logger.warning(f"Request to {url} returned HTTP {response.status_code}")
        raise TransportError(response.status_code, response.reason_phrase or str(response.status_code), response.text)

    try:
        body = response.json()
    except ValueError as e:
        raise TransportError(response.status_code, "Response body is not valid JSON", response.text) from e
    if not isinstance(body, dict):
        raise TransportError(response.status_code, "Response body is not a JSON object", response.text)
    return body
