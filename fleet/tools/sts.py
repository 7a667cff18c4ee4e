"""
STS (identity) tools for Fleet.
"""

from typing import Any

from ..config import FleetConfig
from ..registry import ToolRegistry
from . import call

SERVICE = "sts"


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    sts = client_factory("sts", **config.client_kwargs())

    @registry.tool(
        "aws_whoami",
        "Get current AWS caller identity: account ID, user/role ARN, and region",
    )
    async def aws_whoami(args) -> dict[str, Any]:
        identity = await call(sts, "get_caller_identity")
        return {
            "Account": identity.get("Account"),
            "Arn": identity.get("Arn"),
            "UserId": identity.get("UserId"),
            "Region": config.region,
        }
