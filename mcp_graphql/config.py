# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/config.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Configuration for the GraphQL MCP server.

Settings are read from the environment (and an optional ``.env`` file) and can
be overridden from the command line. They are frozen once loaded.

Environment variables:
    NAME, ENDPOINT, HEADERS (JSON object), SCHEMA (schema file path),
    ALLOW_MUTATIONS, EXCLUDE_QUERIES / EXCLUDE_MUTATIONS (JSON arrays),
    AUTH_TYPE, AUTH_VALUE, CALLING_CONVENTION, DESCRIBE_OUTPUT_TYPES,
    SELECTION_DEPTH, TIMEOUT, LOG_LEVEL, LOG_TO_FILE, LOG_FILE, LOG_FOLDER.

Examples:
    >>> s = Settings(endpoint="https://api.example.com/graphql", _env_file=None)
    >>> s.allow_mutations
    False
    >>> s.schema_source
    'endpoint'
    >>> Settings(schema_path="schema.graphql", _env_file=None).schema_source
    'file'
"""

# Standard
import argparse
from functools import lru_cache
import json
from typing import Any, Dict, List, Literal, Optional, Sequence

# Third-Party
from pydantic import AliasChoices, Field, field_validator, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

# First-Party
from mcp_graphql.errors import ConfigurationError
from mcp_graphql.models import CallingConvention, LogLevel

DEFAULT_ENDPOINT = "http://localhost:4000/graphql"


class Settings(BaseSettings):
    """Process configuration.

    Attributes:
        name: Server name announced to MCP clients.
        endpoint: GraphQL endpoint used for introspection and execution.
        schema_path: Local SDL file; when set it is the schema source.
        headers: Extra HTTP headers sent with every request.
        auth_type: Optional credential style ('bearer', 'basic', 'header').
        auth_value: Credential value for ``auth_type``.
        allow_mutations: Expose mutations as tools and accept mutation queries.
        exclude_queries: Query names that never become tools.
        exclude_mutations: Mutation names that never become tools.
        calling_convention: How generated tools receive their GraphQL document.
        describe_output_types: Include parameters and output shape in tool descriptions.
        selection_depth: Depth of generated selection sets.
        timeout: HTTP timeout in seconds.
        log_level: Minimum log level.
        log_to_file: Enable JSON file logging.
        log_file: Log file name.
        log_folder: Directory for ``log_file``.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True, populate_by_name=True)

    name: str = "mcp-graphql"
    endpoint: str = DEFAULT_ENDPOINT
    schema_path: Optional[str] = Field(default=None, validation_alias=AliasChoices("schema_path", "SCHEMA", "SCHEMA_PATH"))
    headers: Dict[str, str] = Field(default_factory=dict)
    auth_type: Optional[Literal["bearer", "basic", "header"]] = None
    auth_value: Optional[str] = None
    allow_mutations: bool = False
    exclude_queries: List[str] = Field(default_factory=list)
    exclude_mutations: List[str] = Field(default_factory=list)
    calling_convention: CallingConvention = CallingConvention.QUERY
    describe_output_types: bool = True
    selection_depth: int = Field(default=3, ge=1)
    timeout: float = Field(default=30.0, gt=0)
    log_level: LogLevel = LogLevel.INFO
    log_to_file: bool = False
    log_file: Optional[str] = None
    log_folder: Optional[str] = None

    @field_validator("endpoint")
    @classmethod
    def _validate_endpoint(cls, value: str) -> str:
        """Require an absolute http(s) URL.

        Args:
            value: Endpoint URL.

        Returns:
            The URL without surrounding whitespace.

        Raises:
            ValueError: If the URL is not http(s).
        """
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL, got {value!r}")
        return value

    @field_validator("headers", mode="before")
    @classmethod
    def _parse_headers(cls, value: Any) -> Any:
        """Accept headers as a JSON object string.

        Args:
            value: Raw header value.

        Returns:
            A mapping of header names to values.

        Raises:
            ValueError: If the value is not a JSON object.
        """
        if isinstance(value, str):
            try:
                value = json.loads(value or "{}")
            except json.JSONDecodeError as e:
                raise ValueError("HEADERS must be a valid JSON string") from e
        if not isinstance(value, dict):
            raise ValueError("HEADERS must be a JSON object")
        return {str(k): str(v) for k, v in value.items()}

    @field_validator("log_level", "calling_convention", mode="before")
    @classmethod
    def _lowercase_enum(cls, value: Any) -> Any:
        """Accept enum values in any case.

        Args:
            value: Raw value.

        Returns:
            The lower-cased value for strings, else the value unchanged.
        """
        return value.strip().lower() if isinstance(value, str) else value

    @property
    def schema_source(self) -> str:
        """Return 'file' when a local schema is configured, else 'endpoint'."""
        return "file" if self.schema_path else "endpoint"


@lru_cache()
def get_settings() -> Settings:
    """Load settings from the environment once.

    Returns:
        Settings: The cached settings.

    Raises:
        ConfigurationError: If the environment holds invalid values.
    """
    return _load(None)


def _load(overrides: Optional[Dict[str, Any]]) -> Settings:
    """Build settings, translating validation failures.

    Args:
        overrides: Explicit values taking precedence over the environment.

    Returns:
        Settings: Validated settings.

    Raises:
        ConfigurationError: If any value is invalid.
    """
    try:
        return Settings(**(overrides or {}))
    except ValidationError as e:
        details = "\n".join(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ConfigurationError(f"Invalid configuration:\n{details}") from e
    except SettingsError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser.

    Returns:
        argparse.ArgumentParser: Parser whose unset options default to None.
    """
    parser = argparse.ArgumentParser(
        prog="mcp-graphql",
        description="Expose a GraphQL API as MCP tools over stdio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  mcp-graphql --endpoint https://api.example.com/graphql
  mcp-graphql --schema-path ./schema.graphql --endpoint https://api.example.com/graphql --allow-mutations
  mcp-graphql --endpoint https://api.example.com/graphql --exclude-queries internalStats debugInfo
        """,
    )
    parser.add_argument("--name", help="Server name announced to clients")
    parser.add_argument("--endpoint", help="Endpoint for the schema to be introspected and transformed into tools")
    parser.add_argument("--schema-path", "--schemaPath", dest="schema_path", help="File path alternative to endpoint, will read the file instead of fetching the endpoint")
    parser.add_argument("--headers", help="JSON stringified headers to be sent with every request to the endpoint")
    parser.add_argument("--auth-type", choices=["bearer", "basic", "header"], help="Authentication type")
    parser.add_argument("--auth-value", help="Authentication credential value")
    parser.add_argument("--allow-mutations", "--allowMutations", dest="allow_mutations", action="store_true", default=None, help="Allow clients to use mutations (disabled by default)")
    parser.add_argument("--no-allow-mutations", dest="allow_mutations", action="store_false", default=None, help="Reject mutations")
    parser.add_argument("--exclude-queries", "--excludeQueries", dest="exclude_queries", nargs="*", help="Queries to exclude from the generated tools")
    parser.add_argument("--exclude-mutations", "--excludeMutations", dest="exclude_mutations", nargs="*", help="Mutations to exclude from the generated tools")
    parser.add_argument("--calling-convention", choices=[c.value for c in CallingConvention], help="'query' tools take query text and variables, 'arguments' tools take operation arguments")
    parser.add_argument("--selection-depth", type=int, help="Depth of generated selection sets (default: 3)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (default: 30)")
    parser.add_argument("--log-level", choices=[level.value for level in LogLevel], help="Log level")
    return parser


def build_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """Build settings from the command line layered over the environment.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``.

    Returns:
        Settings: Validated settings.

    Raises:
        ConfigurationError: If any value is invalid.

    Examples:
        >>> s = build_settings(["--endpoint", "https://x.example/graphql", "--exclude-queries", "a", "b"])
        >>> s.exclude_queries
        ['a', 'b']
    """
    args = create_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return _load(overrides)
