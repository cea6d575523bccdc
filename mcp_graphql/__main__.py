# -*- coding: utf-8 -*-
"""Location: ./mcp_graphql/__main__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0
Authors: MCP GraphQL Contributors

Allow ``python -m mcp_graphql``.
"""

# First-Party
from mcp_graphql.server import main

if __name__ == "__main__":  # pragma: no cover
    main()
