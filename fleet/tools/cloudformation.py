"""
CloudFormation tools for Fleet.
"""

import asyncio
from typing import Any, Optional

from pydantic import Field

from ..config import FleetConfig
from ..registry import ToolArguments, ToolRegistry
from . import call, tags_to_dict

SERVICE = "cloudformation"

DEFAULT_EVENT_LIMIT = 20

# Every status except DELETE_COMPLETE
LIVE_STACK_STATUSES = [
    "CREATE_IN_PROGRESS",
    "CREATE_COMPLETE",
    "CREATE_FAILED",
    "ROLLBACK_IN_PROGRESS",
    "ROLLBACK_COMPLETE",
    "ROLLBACK_FAILED",
    "UPDATE_IN_PROGRESS",
    "UPDATE_COMPLETE",
    "UPDATE_FAILED",
    "UPDATE_ROLLBACK_IN_PROGRESS",
    "UPDATE_ROLLBACK_COMPLETE",
    "UPDATE_ROLLBACK_FAILED",
]


class ListStacksArgs(ToolArguments):
    status_filter: Optional[list[str]] = Field(
        default=None,
        description=(
            'Stack status filters (e.g. ["CREATE_COMPLETE","UPDATE_COMPLETE"]). '
            "Default excludes DELETE_COMPLETE."
        ),
    )


class DescribeStackArgs(ToolArguments):
    stack_name: str = Field(description="Stack name or ID")


class StackEventsArgs(ToolArguments):
    stack_name: str = Field(description="Stack name or ID")
    limit: Optional[int] = Field(default=None, description="Max events to return (default 20)")


def _format_stack(stack: dict, resources: list) -> dict[str, Any]:
    return {
        "StackName": stack.get("StackName"),
        "StackId": stack.get("StackId"),
        "Status": stack.get("StackStatus"),
        "StatusReason": stack.get("StackStatusReason") or None,
        "Description": stack.get("Description") or None,
        "CreationTime": stack.get("CreationTime"),
        "LastUpdatedTime": stack.get("LastUpdatedTime"),
        "Parameters": {
            p["ParameterKey"]: p.get("ParameterValue") for p in stack.get("Parameters", [])
        },
        "Outputs": {
            o["OutputKey"]: {"Value": o.get("OutputValue"), "Description": o.get("Description")}
            for o in stack.get("Outputs", [])
        },
        "Tags": tags_to_dict(stack.get("Tags")),
        "ResourceCount": len(resources),
        "Resources": resources,
    }


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    cfn = client_factory("cloudformation", **config.client_kwargs())

    @registry.tool(
        "cfn_list_stacks",
        "List CloudFormation stacks. Optionally filter by status.",
        ListStacksArgs,
    )
    async def cfn_list_stacks(args: ListStacksArgs) -> dict[str, Any]:
        response = await call(
            cfn,
            "list_stacks",
            StackStatusFilter=args.status_filter or LIVE_STACK_STATUSES,
        )
        stacks = [
            {
                "StackName": s.get("StackName"),
                "StackStatus": s.get("StackStatus"),
                "CreationTime": s.get("CreationTime"),
                "LastUpdatedTime": s.get("LastUpdatedTime"),
                "Description": s.get("TemplateDescription") or None,
                "DriftStatus": (s.get("DriftInformation") or {}).get("StackDriftStatus"),
            }
            for s in response.get("StackSummaries", [])
        ]
        return {"count": len(stacks), "stacks": stacks}

    @registry.tool(
        "cfn_describe_stack",
        "Get detailed information about a CloudFormation stack, including parameters, "
        "outputs, and resources.",
        DescribeStackArgs,
    )
    async def cfn_describe_stack(args: DescribeStackArgs) -> dict[str, Any]:
        # gather() returns results in argument order regardless of completion order
        described, listed = await asyncio.gather(
            call(cfn, "describe_stacks", StackName=args.stack_name),
            call(cfn, "list_stack_resources", StackName=args.stack_name),
        )

        stacks = described.get("Stacks") or []
        if not stacks:
            return {"error": f"Stack {args.stack_name} not found"}

        resources = [
            {
                "LogicalId": r.get("LogicalResourceId"),
                "PhysicalId": r.get("PhysicalResourceId"),
                "Type": r.get("ResourceType"),
                "Status": r.get("ResourceStatus"),
                "LastUpdated": r.get("LastUpdatedTimestamp"),
            }
            for r in listed.get("StackResourceSummaries", [])
        ]
        return _format_stack(stacks[0], resources)

    @registry.tool(
        "cfn_stack_events",
        "Get recent events for a CloudFormation stack, useful for debugging deployments.",
        StackEventsArgs,
    )
    async def cfn_stack_events(args: StackEventsArgs) -> dict[str, Any]:
        response = await call(cfn, "describe_stack_events", StackName=args.stack_name)
        limit = args.limit or DEFAULT_EVENT_LIMIT

        events = [
            {
                "Timestamp": e.get("Timestamp"),
                "LogicalResourceId": e.get("LogicalResourceId"),
                "ResourceType": e.get("ResourceType"),
                "ResourceStatus": e.get("ResourceStatus"),
                "ResourceStatusReason": e.get("ResourceStatusReason") or None,
            }
            for e in response.get("StackEvents", [])[:limit]
        ]
        return {"stackName": args.stack_name, "count": len(events), "events": events}
