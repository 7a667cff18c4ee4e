"""
S3 tools for Fleet.
"""

import asyncio
from typing import Any, Optional

from pydantic import Field

from ..config import FleetConfig
from ..registry import ToolArguments, ToolRegistry
from . import call

SERVICE = "s3"

DEFAULT_MAX_KEYS = 100


class ListObjectsArgs(ToolArguments):
    bucket: str = Field(description="S3 bucket name")
    prefix: Optional[str] = Field(default=None, description="Key prefix to filter by")
    max_keys: Optional[int] = Field(default=None, description="Max keys to return (default 100)")


class GetObjectArgs(ToolArguments):
    bucket: str = Field(description="S3 bucket name")
    key: str = Field(description="Object key")


class PutObjectArgs(ToolArguments):
    bucket: str = Field(description="S3 bucket name")
    key: str = Field(description="Object key")
    body: str = Field(description="Text content to write")
    content_type: Optional[str] = Field(
        default=None, description="Content-Type (default text/plain)"
    )


def register_tools(registry: ToolRegistry, config: FleetConfig, client_factory) -> None:
    s3 = client_factory("s3", **config.client_kwargs())

    @registry.tool("s3_list_buckets", "List all S3 buckets in the account.")
    async def s3_list_buckets(args) -> dict[str, Any]:
        response = await call(s3, "list_buckets")
        buckets = [
            {"Name": bucket.get("Name"), "CreationDate": bucket.get("CreationDate")}
            for bucket in response.get("Buckets", [])
        ]
        return {"count": len(buckets), "buckets": buckets}

    @registry.tool(
        "s3_list_objects",
        "List objects in an S3 bucket, optionally filtered by prefix.",
        ListObjectsArgs,
    )
    async def s3_list_objects(args: ListObjectsArgs) -> dict[str, Any]:
        params = {"Bucket": args.bucket, "MaxKeys": args.max_keys or DEFAULT_MAX_KEYS}
        if args.prefix:
            params["Prefix"] = args.prefix

        response = await call(s3, "list_objects_v2", **params)
        objects = [
            {
                "Key": obj.get("Key"),
                "Size": obj.get("Size"),
                "LastModified": obj.get("LastModified"),
            }
            for obj in response.get("Contents", [])
        ]

        return {
            "bucket": args.bucket,
            "prefix": args.prefix or "",
            "count": len(objects),
            "truncated": bool(response.get("IsTruncated", False)),
            "objects": objects,
        }

    @registry.tool(
        "s3_get_object",
        "Read the contents of a text object from S3. Returns the body as a string.",
        GetObjectArgs,
    )
    async def s3_get_object(args: GetObjectArgs) -> dict[str, Any]:
        response = await call(s3, "get_object", Bucket=args.bucket, Key=args.key)
        raw = await asyncio.to_thread(response["Body"].read)

        return {
            "bucket": args.bucket,
            "key": args.key,
            "contentType": response.get("ContentType"),
            "contentLength": response.get("ContentLength"),
            "lastModified": response.get("LastModified"),
            "body": raw.decode("utf-8", errors="replace"),
        }

    @registry.tool("s3_put_object", "Write text content to an S3 object.", PutObjectArgs)
    async def s3_put_object(args: PutObjectArgs) -> dict[str, Any]:
        await call(
            s3,
            "put_object",
            Bucket=args.bucket,
            Key=args.key,
            Body=args.body.encode("utf-8"),
            ContentType=args.content_type or "text/plain",
        )
        return {"bucket": args.bucket, "key": args.key, "status": "written", "size": len(args.body)}
