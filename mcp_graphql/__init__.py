# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

MCP GraphQL - expose a GraphQL API as Model Context Protocol tools.
"""

__author__ = "MCP GraphQL Contributors"
__version__ = "1.0.0"
__license__ = "Apache-2.0"
