"""
CloudWatch metrics, alarms, and Logs tools for Fleet.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Literal, Optional

from pydantic import Field

from ..config import FleetConfig
from ..registry import ToolArguments, ToolRegistry
from . import call

SERVICE = "cloudwatch"

DEFAULT_LIMIT = 50
DEFAULT_PERIOD_SECONDS = 300
DEFAULT_HOURS_BACK = 1


class ListAlarmsArgs(ToolArguments):
    state_value: Optional[Literal["OK", "ALARM", "INSUFFICIENT_DATA"]] = Field(
        default=None, description="Filter by alarm state"
    )
    max_records: Optional[int] = Field(
        default=None, description="Max alarms to return (default 50)"
    )


class GetMetricArgs(ToolArguments):
    namespace: str = Field(description="CloudWatch namespace (e.g. AWS/EC2, AWS/Lambda)")
    metric_name: str = Field(description="Metric name (e.g. CPUUtilization, Invocations)")
    dimension_name: str = Field(description="Dimension name (e.g. InstanceId, FunctionName)")
    dimension_value: str = Field(description="Dimension value")
    stat: Optional[Literal["Average", "Sum", "Minimum", "Maximum", "SampleCount"]] = Field(
        default=None, description="Statistic (default Average)"
    )
    period_seconds: Optional[int] = Field(
        default=None, description="Period in seconds (default 300)"
    )
    hours_back: Optional[float] = Field(
        default=None, description="How many hours back to query (default 1)"
    )


class ListLogGroupsArgs(ToolArguments):
    prefix: Optional[str] = Field(default=None, description="Log group name prefix to filter by")
    limit: Optional[int] = Field(default=None, description="Max log groups to return (default 50)")


class GetLogsArgs(ToolArguments):
    log_group_name: str = Field(description="Log group name (e.g. /aws/lambda/my-function)")
    log_stream_name: str = Field(description="Log stream name")
    limit: Optional[int] = Field(default=None, description="Max events to return (default 50)")
    start_from_head: Optional[bool] = Field(
        default=None,
        description="Start from oldest (true) or newest (false, default)",
    )


def _from_epoch_ms(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    cloudwatch = client_factory("cloudwatch", **config.client_kwargs())
    logs = client_factory("logs", **config.client_kwargs())

    @registry.tool(
        "cloudwatch_list_alarms",
        "List CloudWatch alarms. Optionally filter by state (OK, ALARM, INSUFFICIENT_DATA).",
        ListAlarmsArgs,
    )
    async def cloudwatch_list_alarms(args: ListAlarmsArgs) -> dict[str, Any]:
        params = {"MaxRecords": args.max_records or DEFAULT_LIMIT}
        if args.state_value:
            params["StateValue"] = args.state_value

        response = await call(cloudwatch, "describe_alarms", **params)
        alarms = [
            {
                "Name": alarm.get("AlarmName"),
                "State": alarm.get("StateValue"),
                "Metric": alarm.get("MetricName"),
                "Namespace": alarm.get("Namespace"),
                "Description": alarm.get("AlarmDescription") or None,
                "StateReason": alarm.get("StateReason"),
                "UpdatedAt": alarm.get("StateUpdatedTimestamp"),
            }
            for alarm in response.get("MetricAlarms", [])
        ]
        return {"count": len(alarms), "alarms": alarms}

    @registry.tool(
        "cloudwatch_get_metric",
        "Query a CloudWatch metric for a given period. Returns datapoints.",
        GetMetricArgs,
    )
    async def cloudwatch_get_metric(args: GetMetricArgs) -> dict[str, Any]:
        stat = args.stat or "Average"
        period = args.period_seconds or DEFAULT_PERIOD_SECONDS
        end = datetime.now(timezone.utc)
        start = end - timedelta(hours=args.hours_back or DEFAULT_HOURS_BACK)

        response = await call(
            cloudwatch,
            "get_metric_data",
            StartTime=start,
            EndTime=end,
            MetricDataQueries=[
                {
                    "Id": "m1",
                    "MetricStat": {
                        "Metric": {
                            "Namespace": args.namespace,
                            "MetricName": args.metric_name,
                            "Dimensions": [
                                {"Name": args.dimension_name, "Value": args.dimension_value}
                            ],
                        },
                        "Period": period,
                        "Stat": stat,
                    },
                }
            ],
        )

        results = response.get("MetricDataResults") or [{}]
        result = results[0]
        datapoints = sorted(
            (
                {"timestamp": ts, "value": value}
                for ts, value in zip(result.get("Timestamps", []), result.get("Values", []))
            ),
            key=lambda point: point["timestamp"],
        )

        return {
            "namespace": args.namespace,
            "metricName": args.metric_name,
            "stat": stat,
            "period": period,
            "range": {"start": start, "end": end},
            "datapoints": datapoints,
        }

    @registry.tool(
        "cloudwatch_list_log_groups",
        "List CloudWatch Logs log groups. Optionally filter by name prefix.",
        ListLogGroupsArgs,
    )
    async def cloudwatch_list_log_groups(args: ListLogGroupsArgs) -> dict[str, Any]:
        params = {"limit": args.limit or DEFAULT_LIMIT}
        if args.prefix:
            params["logGroupNamePrefix"] = args.prefix

        response = await call(logs, "describe_log_groups", **params)
        groups = [
            {
                "name": group.get("logGroupName"),
                "storedBytes": group.get("storedBytes"),
                "retentionDays": group.get("retentionInDays") or "never expires",
                "creationTime": _from_epoch_ms(group.get("creationTime")),
            }
            for group in response.get("logGroups", [])
        ]
        return {"count": len(groups), "logGroups": groups}

    @registry.tool(
        "cloudwatch_get_logs",
        "Get recent log events from a CloudWatch Logs log group and stream.",
        GetLogsArgs,
    )
    async def cloudwatch_get_logs(args: GetLogsArgs) -> dict[str, Any]:
        response = await call(
            logs,
            "get_log_events",
            logGroupName=args.log_group_name,
            logStreamName=args.log_stream_name,
            limit=args.limit or DEFAULT_LIMIT,
            startFromHead=bool(args.start_from_head),
        )
        events = [
            {"timestamp": _from_epoch_ms(event.get("timestamp")), "message": event.get("message")}
            for event in response.get("events", [])
        ]
        return {
            "logGroupName": args.log_group_name,
            "logStreamName": args.log_stream_name,
            "count": len(events),
            "events": events,
        }
