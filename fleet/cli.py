"""
Command line entry point: ``fleet-claude [mcp]``.
"""

import argparse
import asyncio
import sys
from typing import Optional

USAGE = "Usage: fleet-claude [mcp]"


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="fleet-claude", description="AWS tools over MCP")
    parser.add_argument("command", nargs="?", default="mcp", help="mcp (default): run the stdio server")
    args = parser.parse_args(argv)

    if args.command != "mcp":
        print(f"Unknown command: {args.command}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    from .server import serve

    asyncio.run(serve())
    return 0


if __name__ == "__main__":
    sys.exit(main())
