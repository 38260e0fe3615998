"""AR.IO Gateway MCP Server"""

__version__ = "1.0.0"
