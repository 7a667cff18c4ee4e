"""
ECS tools for Fleet.
"""

from typing import Any, Literal, Optional

from pydantic import Field

from ..config import FleetConfig
from ..registry import ToolArguments, ToolRegistry
from . import call

SERVICE = "ecs"

DEFAULT_MAX_RESULTS = 50


class ListServicesArgs(ToolArguments):
    cluster: str = Field(description="Cluster name or ARN")
    max_results: Optional[int] = Field(default=None, description="Max results (default 50)")


class ListTasksArgs(ToolArguments):
    cluster: str = Field(description="Cluster name or ARN")
    service_name: Optional[str] = Field(default=None, description="Service name to filter by")
    desired_status: Optional[Literal["RUNNING", "PENDING", "STOPPED"]] = Field(
        default=None, description="Filter by task status"
    )


def _format_service(service: dict) -> dict[str, Any]:
    return {
        "serviceName": service.get("serviceName"),
        "status": service.get("status"),
        "desiredCount": service.get("desiredCount"),
        "runningCount": service.get("runningCount"),
        "pendingCount": service.get("pendingCount"),
        "launchType": service.get("launchType"),
        "taskDefinition": service.get("taskDefinition"),
        "createdAt": service.get("createdAt"),
    }


def _format_task(task: dict) -> dict[str, Any]:
    return {
        "taskArn": task.get("taskArn"),
        "taskDefinitionArn": task.get("taskDefinitionArn"),
        "lastStatus": task.get("lastStatus"),
        "desiredStatus": task.get("desiredStatus"),
        "cpu": task.get("cpu"),
        "memory": task.get("memory"),
        "launchType": task.get("launchType"),
        "startedAt": task.get("startedAt"),
        "stoppedAt": task.get("stoppedAt"),
        "stoppedReason": task.get("stoppedReason") or None,
        "containers": [
            {
                "name": container.get("name"),
                "lastStatus": container.get("lastStatus"),
                "exitCode": container.get("exitCode"),
                "reason": container.get("reason") or None,
            }
            for container in task.get("containers", [])
        ],
    }


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    ecs = client_factory("ecs", **config.client_kwargs())

    @registry.tool("ecs_list_clusters", "List ECS clusters in the account.")
    async def ecs_list_clusters(args) -> dict[str, Any]:
        response = await call(ecs, "list_clusters")
        arns = response.get("clusterArns", [])
        return {
            "count": len(arns),
            "clusters": [{"arn": arn, "name": arn.split("/")[-1]} for arn in arns],
        }

    @registry.tool(
        "ecs_list_services", "List services in an ECS cluster.", ListServicesArgs
    )
    async def ecs_list_services(args: ListServicesArgs) -> dict[str, Any]:
        listed = await call(
            ecs,
            "list_services",
            cluster=args.cluster,
            maxResults=args.max_results or DEFAULT_MAX_RESULTS,
        )
        arns = listed.get("serviceArns", [])

        if not arns:
            return {"cluster": args.cluster, "count": 0, "services": []}

        described = await call(ecs, "describe_services", cluster=args.cluster, services=arns)
        services = [_format_service(s) for s in described.get("services", [])]

        return {"cluster": args.cluster, "count": len(services), "services": services}

    @registry.tool(
        "ecs_list_tasks",
        "List tasks in an ECS cluster, optionally filtered by service.",
        ListTasksArgs,
    )
    async def ecs_list_tasks(args: ListTasksArgs) -> dict[str, Any]:
        params = {"cluster": args.cluster}
        if args.service_name:
            params["serviceName"] = args.service_name
        if args.desired_status:
            params["desiredStatus"] = args.desired_status

        listed = await call(ecs, "list_tasks", **params)
        arns = listed.get("taskArns", [])

        if not arns:
            return {"cluster": args.cluster, "count": 0, "tasks": []}

        described = await call(ecs, "describe_tasks", cluster=args.cluster, tasks=arns)
        tasks = [_format_task(t) for t in described.get("tasks", [])]

        return {"cluster": args.cluster, "count": len(tasks), "tasks": tasks}
