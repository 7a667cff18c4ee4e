"""
Lambda tools for Fleet.
"""

import asyncio
import base64
from typing import Any, Literal, Optional

from pydantic import Field

from ..config import FleetConfig
from ..registry import ToolArguments, ToolRegistry
from . import call

SERVICE = "lambda"

DEFAULT_MAX_ITEMS = 50


class ListFunctionsArgs(ToolArguments):
    max_items: Optional[int] = Field(
        default=None, description="Max functions to return (default 50)"
    )


class GetFunctionArgs(ToolArguments):
    function_name: str = Field(description="Function name or ARN")


class InvokeArgs(ToolArguments):
    function_name: str = Field(description="Function name or ARN")
    payload: Optional[str] = Field(default=None, description="JSON payload string to send")
    invocation_type: Optional[Literal["RequestResponse", "Event", "DryRun"]] = Field(
        default=None,
        description="Invocation type (default RequestResponse for sync)",
    )


async def _read_payload(stream) -> Optional[str]:
    if stream is None:
        return None
    raw = await asyncio.to_thread(stream.read) if hasattr(stream, "read") else stream
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8", errors="replace")
    return raw


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    lambda_client = client_factory("lambda", **config.client_kwargs())

    @registry.tool(
        "lambda_list_functions", "List Lambda functions in the account.", ListFunctionsArgs
    )
    async def lambda_list_functions(args: ListFunctionsArgs) -> dict[str, Any]:
        response = await call(
            lambda_client, "list_functions", MaxItems=args.max_items or DEFAULT_MAX_ITEMS
        )
        functions = [
            {
                "FunctionName": func.get("FunctionName"),
                "Runtime": func.get("Runtime"),
                "Handler": func.get("Handler"),
                "MemorySize": func.get("MemorySize"),
                "Timeout": func.get("Timeout"),
                "LastModified": func.get("LastModified"),
                "CodeSize": func.get("CodeSize"),
                "Description": func.get("Description") or None,
            }
            for func in response.get("Functions", [])
        ]
        return {"count": len(functions), "functions": functions}

    @registry.tool(
        "lambda_get_function",
        "Get detailed configuration for a Lambda function.",
        GetFunctionArgs,
    )
    async def lambda_get_function(args: GetFunctionArgs) -> dict[str, Any]:
        response = await call(lambda_client, "get_function", FunctionName=args.function_name)
        func = response.get("Configuration", {})

        return {
            "FunctionName": func.get("FunctionName"),
            "FunctionArn": func.get("FunctionArn"),
            "Runtime": func.get("Runtime"),
            "Handler": func.get("Handler"),
            "Role": func.get("Role"),
            "MemorySize": func.get("MemorySize"),
            "Timeout": func.get("Timeout"),
            "LastModified": func.get("LastModified"),
            "CodeSize": func.get("CodeSize"),
            "Description": func.get("Description"),
            "Environment": (func.get("Environment") or {}).get("Variables", {}),
            "Layers": [layer["Arn"] for layer in func.get("Layers", [])],
            "State": func.get("State"),
            "LastUpdateStatus": func.get("LastUpdateStatus"),
        }

    @registry.tool(
        "lambda_invoke",
        "Invoke a Lambda function with an optional JSON payload. Returns the response.",
        InvokeArgs,
    )
    async def lambda_invoke(args: InvokeArgs) -> dict[str, Any]:
        params = {
            "FunctionName": args.function_name,
            "InvocationType": args.invocation_type or "RequestResponse",
        }
        if args.payload:
            params["Payload"] = args.payload.encode("utf-8")

        response = await call(lambda_client, "invoke", **params)
        log_result = response.get("LogResult")

        return {
            "functionName": args.function_name,
            "statusCode": response.get("StatusCode"),
            "executedVersion": response.get("ExecutedVersion"),
            "functionError": response.get("FunctionError") or None,
            "logResult": (
                base64.b64decode(log_result).decode("utf-8", errors="replace")
                if log_result
                else None
            ),
            "payload": await _read_payload(response.get("Payload")),
        }
