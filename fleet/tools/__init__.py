"""
Fleet service modules and the shared AWS client helpers they use.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Optional

import boto3

from ..config import FleetConfig
from ..registry import ToolRegistry

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., Any]

# AWS clients (initialized lazily)
_clients = {}


def get_client(service_name: str, region_name: Optional[str] = None):
    """Get or create an AWS client for the specified service and region."""
    key = (service_name, region_name)
    if key not in _clients:
        _clients[key] = boto3.client(service_name, region_name=region_name)
    return _clients[key]


async def call(client, operation: str, **params) -> dict[str, Any]:
    """Run one blocking boto3 operation in a worker thread."""
    return await asyncio.to_thread(getattr(client, operation), **params)


def tags_to_dict(tags: Optional[list]) -> dict[str, str]:
    return {t["Key"]: t.get("Value") for t in tags or []}


from . import (  # noqa: E402
    cloudformation,
    cloudwatch,
    ec2,
    ecs,
    lambda_tools,
    s3,
    sts,
)

SERVICE_MODULES = (sts, ec2, s3, cloudwatch, lambda_tools, ecs, cloudformation)


def build_registry(
    config: FleetConfig, client_factory: Optional[ClientFactory] = None
) -> ToolRegistry:
    """
    Register the tools of every enabled service and freeze the registry.

    Args:
        config: Resolved process configuration
        client_factory: Callable ``(service_name, region_name=...)`` returning a
            boto3-style client (defaults to ``get_client``)
    """
    factory = client_factory or get_client
    enabled = config.enabled_services
    registry = ToolRegistry()

    for module in SERVICE_MODULES:
        if module.SERVICE in enabled:
            module.register_tools(registry, config, factory)
            logger.debug("Registered %s tools", module.SERVICE)

    logger.info(
        "Registered %d tools for services: %s",
        len(registry),
        ", ".join(m.SERVICE for m in SERVICE_MODULES if m.SERVICE in enabled),
    )
    return registry.freeze()
