# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/registry.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Tool registry.

The registry owns one read-only mapping from tool name to ``Tool``. Building or
reloading computes a complete new mapping first and then replaces the
reference in a single assignment, so lookups see either the old set or the new
one, never a mix.
"""

# Standard
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, TYPE_CHECKING

# Third-Party
from graphql import GraphQLSchema

# First-Party
from mcp_graphql.errors import ProgrammingError
from mcp_graphql.models import OperationDescriptor, OperationKind, Tool
from mcp_graphql.operations import extract_operations
from mcp_graphql.services.logging_service import LoggingService
from mcp_graphql.tool_synthesizer import ToolSynthesizer

if TYPE_CHECKING:
    from mcp_graphql.config import Settings

logging_service = LoggingService()
logger = logging_service.get_logger(__name__)


class ToolRegistry:
    """Registry of tools generated from a GraphQL schema.

    Examples:
        >>> from mcp_graphql.config import Settings
        >>> registry = ToolRegistry(Settings(_env_file=None))
        >>> len(registry)
        0
        >>> registry.lookup("query-user") is None
        True
    """

    def __init__(self, settings: "Settings", synthesizer: Optional[ToolSynthesizer] = None, reserved_names: Iterable[str] = ()):
        """Initialize registry.

        Args:
            settings: Settings providing the mutation gate and exclusion lists.
            synthesizer: Tool synthesizer; one is built from ``settings`` when omitted.
            reserved_names: Names owned by built-in tools; generated tools never take them.
        """
        self._settings = settings
        self._synthesizer = synthesizer or ToolSynthesizer(
            calling_convention=settings.calling_convention,
            describe_output_types=settings.describe_output_types,
            selection_depth=settings.selection_depth,
        )
        self._reserved = frozenset(reserved_names)
        self._tools: Mapping[str, Tool] = MappingProxyType({})

    @property
    def allowed_kinds(self) -> List[OperationKind]:
        """Operation kinds admitted by the mutation gate."""
        if self._settings.allow_mutations:
            return [OperationKind.QUERY, OperationKind.MUTATION]
        return [OperationKind.QUERY]

    def is_excluded(self, operation: OperationDescriptor) -> bool:
        """Check the kind-scoped exclusion lists.

        Args:
            operation: Operation to check.

        Returns:
            True when the operation's name is excluded for its own kind.
        """
        if operation.kind is OperationKind.QUERY:
            return operation.name in self._settings.exclude_queries
        return operation.name in self._settings.exclude_mutations

    def _compute(self, schema: GraphQLSchema) -> Dict[str, Tool]:
        """Compute a complete tool mapping for a schema.

        Args:
            schema: Source schema.

        Returns:
            New mapping of tool name to tool.

        Raises:
            ProgrammingError: If two operations produce the same tool name.
        """
        tools: Dict[str, Tool] = {}
        for operation in extract_operations(schema, self.allowed_kinds):
            if self.is_excluded(operation):
                logger.info(f"Skipping operation {operation.name} as it is excluded")
                continue

            tool = self._synthesizer.synthesize(operation)
            if tool.name in self._reserved:
                logger.warning(f"Skipping operation {operation.name}: tool name {tool.name} is reserved")
                continue
            if tool.name in tools:
                raise ProgrammingError(f"Duplicate tool name {tool.name}")
            tools[tool.name] = tool
        return tools

    def build(self, schema: GraphQLSchema) -> Mapping[str, Tool]:
        """Build the tool set for a schema and install it.

        Args:
            schema: Source schema.

        Returns:
            The installed read-only mapping.
        """
        tools = MappingProxyType(self._compute(schema))
        self._tools = tools
        logger.info(f"Registered {len(tools)} GraphQL tools")
        return tools

    def reload(self, schema: GraphQLSchema) -> Mapping[str, Tool]:
        """Rebuild the tool set from a freshly loaded schema.

        The previous mapping stays installed if building fails.

        Args:
            schema: Freshly loaded schema.

        Returns:
            The installed read-only mapping.
        """
        previous = len(self._tools)
        tools = self.build(schema)
        logger.info(f"Reloaded GraphQL tools: {previous} -> {len(tools)}")
        return tools

    def lookup(self, name: str) -> Optional[Tool]:
        """Find a tool by name.

        Args:
            name: Tool name.

        Returns:
            The tool, or None when not registered.
        """
        return self._tools.get(name)

    @property
    def tools(self) -> Mapping[str, Tool]:
        """The current read-only mapping."""
        return self._tools

    def names(self) -> List[str]:
        """Return registered tool names in registration order."""
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools
