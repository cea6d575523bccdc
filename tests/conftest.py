# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors
"""

# Standard
from typing import Any, Dict
from unittest.mock import AsyncMock

# Third-Party
from graphql import build_schema, introspection_from_schema
import httpx
import pytest

# First-Party
from mcp_graphql.config import get_settings, Settings

SAMPLE_SDL = '''
type Query {
  "Fetch a user by id"
  user(id: ID!): User
  users(limit: Int = 10, role: Role): [User!]!
  search(filter: UserFilter!): [User]
  ping: String
}

type Mutation {
  "Create a user"
  createUser(input: CreateUserInput!): User
  ping: String
}

type User {
  id: ID!
  name: String
  role: Role
  friends: [User]
  posts(first: Int!): [Post]
}

type Post {
  id: ID!
  title: String
}

enum Role {
  ADMIN
  USER
}

input UserFilter {
  name: String
  role: Role
  and: UserFilter
}

input CreateUserInput {
  name: String!
  email: String!
  role: Role = USER
}
'''

ENV_VARS = (
    "NAME",
    "ENDPOINT",
    "HEADERS",
    "SCHEMA",
    "SCHEMA_PATH",
    "ALLOW_MUTATIONS",
    "EXCLUDE_QUERIES",
    "EXCLUDE_MUTATIONS",
    "AUTH_TYPE",
    "AUTH_VALUE",
    "CALLING_CONVENTION",
    "DESCRIBE_OUTPUT_TYPES",
    "SELECTION_DEPTH",
    "TIMEOUT",
    "LOG_LEVEL",
    "LOG_TO_FILE",
    "LOG_FILE",
    "LOG_FOLDER",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host environment out of settings under test."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_schema():
    """Schema built from the shared SDL."""
    return build_schema(SAMPLE_SDL)


@pytest.fixture
def introspection_result(sample_schema) -> Dict[str, Any]:
    """Introspection response body for the shared schema."""
    return {"data": introspection_from_schema(sample_schema)}


@pytest.fixture
def schema_file(tmp_path):
    """SDL file on disk holding the shared schema."""
    path = tmp_path / "schema.graphql"
    path.write_text(SAMPLE_SDL, encoding="utf-8")
    return path


@pytest.fixture
def make_settings():
    """Factory for settings that ignore any .env file."""

    def _make(**overrides: Any) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def mock_client():
    """HTTP client whose ``post`` returns a JSON response set per test."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.post.return_value = httpx.Response(200, json={"data": {}})
    return client
