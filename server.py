"""
Fleet - MCP Server
Query and manage AWS resources conversationally through Claude.
"""

import asyncio

from fleet.server import serve

if __name__ == "__main__":
    asyncio.run(serve())
