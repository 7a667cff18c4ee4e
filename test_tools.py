"""
Quick smoke script to verify AWS connectivity and read-only tools work.
Run this directly against a real account: python test_tools.py
"""

import asyncio
import json

from fleet.config import get_config
from fleet.dispatcher import Dispatcher
from fleet.tools import build_registry

# Read-only tools that need no arguments or only optional ones
SMOKE_CALLS = [
    ("aws_whoami", {}),
    ("ec2_list_instances", {"maxResults": 5}),
    ("s3_list_buckets", {}),
    ("cloudwatch_list_alarms", {"maxRecords": 5}),
    ("cloudwatch_list_log_groups", {"limit": 5}),
    ("lambda_list_functions", {"maxItems": 5}),
    ("ecs_list_clusters", {}),
    ("cfn_list_stacks", {}),
]


def print_result(name: str, text: str):
    """Pretty print a tool result."""
    print(f"\n{'='*60}")
    print(f"✓ {name}")
    print("=" * 60)
    print(text)


async def main():
    print("Testing Fleet Tools")
    print("=" * 60)

    config = get_config()
    registry = build_registry(config)
    dispatcher = Dispatcher(registry)
    print(f"Region: {config.region}; {len(registry)} tools registered")

    # Test AWS credentials first
    print("\n1. Testing AWS credentials...")
    result = await dispatcher.invoke("aws_whoami", {})
    if result.is_error:
        print(f"   ✗ AWS credential error: {result.message}")
        print("   Make sure your AWS credentials are configured.")
        print("   Run: aws configure")
        return
    print(f"   ✓ Connected as: {result.payload['Arn']}")
    print(f"   ✓ Account: {result.payload['Account']}")

    print("\n2. Testing read-only tools...")
    for name, arguments in SMOKE_CALLS:
        if name not in registry:
            print(f"   - {name}: service disabled")
            continue

        result = await dispatcher.invoke(name, arguments)
        if result.is_error:
            print(f"   ✗ {name} error: {result.message}")
        elif isinstance(result.payload, dict) and "count" in result.payload:
            print(f"   ✓ {name}: Found {result.payload['count']} items")
        else:
            print_result(name, result.to_text())

    print("\n3. Tool catalogue...")
    print(json.dumps([tool["name"] for tool in registry.describe()], indent=2))

    print("\n" + "=" * 60)
    print("Testing complete!")
    print("=" * 60)
    print("\nIf all tests passed, your MCP server should work with Claude Desktop.")


if __name__ == "__main__":
    asyncio.run(main())
