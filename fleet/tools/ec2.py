"""
EC2 tools for Fleet.
"""

from typing import Any, Literal, Optional

from pydantic import Field

from ..config import FleetConfig
from ..registry import ToolArguments, ToolRegistry
from . import call, tags_to_dict

SERVICE = "ec2"


class ListInstancesArgs(ToolArguments):
    state: Optional[str] = Field(
        default=None,
        description="Filter by instance state: running, stopped, pending, terminated",
    )
    tag_key: Optional[str] = Field(default=None, description="Filter by tag key")
    tag_value: Optional[str] = Field(
        default=None, description="Filter by tag value (requires tagKey)"
    )
    max_results: Optional[int] = Field(
        default=None, description="Max results to return (default 50)"
    )


class ManageInstanceArgs(ToolArguments):
    instance_id: str = Field(description="The EC2 instance ID (e.g. i-0abc123def456)")
    action: Literal["start", "stop", "reboot"] = Field(description="Action to perform")


def _format_instance(instance: dict) -> dict[str, Any]:
    tags = instance.get("Tags") or []
    return {
        "InstanceId": instance.get("InstanceId"),
        "State": (instance.get("State") or {}).get("Name"),
        "Type": instance.get("InstanceType"),
        "LaunchTime": instance.get("LaunchTime"),
        "PublicIp": instance.get("PublicIpAddress") or None,
        "PrivateIp": instance.get("PrivateIpAddress") or None,
        "Name": next((t.get("Value") for t in tags if t.get("Key") == "Name"), None),
        "Tags": tags_to_dict(tags),
    }


def _state_change(changes: list) -> tuple[Optional[str], Optional[str]]:
    if not changes:
        return None, None
    change = changes[0]
    return (
        (change.get("PreviousState") or {}).get("Name"),
        (change.get("CurrentState") or {}).get("Name"),
    )


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    ec2 = client_factory("ec2", **config.client_kwargs())

    @registry.tool(
        "ec2_list_instances",
        "List EC2 instances. Optionally filter by state (running, stopped, etc.) "
        "or by a tag name/value.",
        ListInstancesArgs,
    )
    async def ec2_list_instances(args: ListInstancesArgs) -> dict[str, Any]:
        filters = []
        if args.state:
            filters.append({"Name": "instance-state-name", "Values": [args.state]})
        if args.tag_key and args.tag_value:
            filters.append({"Name": f"tag:{args.tag_key}", "Values": [args.tag_value]})

        params = {}
        if filters:
            params["Filters"] = filters
        if args.max_results:
            params["MaxResults"] = args.max_results

        response = await call(ec2, "describe_instances", **params)
        instances = [
            _format_instance(instance)
            for reservation in response.get("Reservations", [])
            for instance in reservation.get("Instances", [])
        ]

        return {"count": len(instances), "instances": instances}

    @registry.tool(
        "ec2_manage_instance",
        "Start, stop, or reboot an EC2 instance by instance ID.",
        ManageInstanceArgs,
    )
    async def ec2_manage_instance(args: ManageInstanceArgs) -> dict[str, Any]:
        params = {"InstanceIds": [args.instance_id]}

        if args.action == "reboot":
            await call(ec2, "reboot_instances", **params)
            return {
                "action": "reboot",
                "instanceId": args.instance_id,
                "status": "reboot initiated",
            }

        if args.action == "start":
            response = await call(ec2, "start_instances", **params)
            previous, current = _state_change(response.get("StartingInstances"))
        else:
            response = await call(ec2, "stop_instances", **params)
            previous, current = _state_change(response.get("StoppingInstances"))

        return {
            "action": args.action,
            "instanceId": args.instance_id,
            "previousState": previous,
            "currentState": current,
        }
