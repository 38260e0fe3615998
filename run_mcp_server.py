#!/usr/bin/env python3
"""Run the AR.IO Gateway MCP Server from a source checkout

main() owns exit codes: signals exit 0, config or connect failures exit 1.
"""

from ario_mcp.mcp_server_fastmcp import main

if __name__ == "__main__":
    main()
