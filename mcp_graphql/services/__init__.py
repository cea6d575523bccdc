# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/services/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Services Package.
Exposes supporting services:
- Logging configuration
"""
