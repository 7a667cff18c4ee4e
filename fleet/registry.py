"""
Tool descriptors and the registry that maps tool names to them.

A tool is a name, a description, a pydantic model describing its arguments,
and an async handler that receives a validated instance of that model.
"""

import inspect
import re
from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .errors import (
    ArgumentValidationError,
    DuplicateNameError,
    RegistryFrozenError,
    ToolDefinitionError,
    UnknownToolError,
)

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_\-]{1,64}$")


class ToolArguments(BaseModel):
    """
    Base class for tool argument models.

    Fields are declared in snake_case and exposed to callers in camelCase
    (``max_results`` is sent as ``maxResults``). Unknown keys are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class NoArguments(ToolArguments):
    pass


Handler = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    arguments: type[BaseModel]
    handler: Handler

    def __post_init__(self):
        if not isinstance(self.name, str) or not _NAME_PATTERN.match(self.name):
            raise ToolDefinitionError(f"Invalid tool name: {self.name!r}")
        if not (inspect.isclass(self.arguments) and issubclass(self.arguments, BaseModel)):
            raise ToolDefinitionError(f"{self.name}: arguments must be a pydantic model class")
        if not inspect.iscoroutinefunction(self.handler):
            raise ToolDefinitionError(f"{self.name}: handler must be an async function")

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the arguments, using the public (camelCase) names."""
        schema = self.arguments.model_json_schema(by_alias=True)
        schema.setdefault("type", "object")
        schema.setdefault("properties", {})
        return schema

    def validate(self, raw: Any) -> BaseModel:
        """Validate and coerce raw arguments, raising ArgumentValidationError."""
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ArgumentValidationError(self.name, "arguments", "expected an object")

        try:
            return self.arguments.model_validate(dict(raw))
        except ValidationError as e:
            error = e.errors()[0]
            loc = error.get("loc") or ("arguments",)
            raise ArgumentValidationError(self.name, str(loc[0]), error["msg"]) from e

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class ToolRegistry:
    """
    Insertion-ordered mapping of tool name to descriptor.

    Populated during startup, then frozen; lookups are safe from any number of
    concurrent invocations once frozen.
    """

    def __init__(self):
        self._tools: dict[str, ToolDescriptor] = {}
        self._frozen = False

    def register(self, descriptor: ToolDescriptor) -> ToolDescriptor:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {descriptor.name}: registry is frozen"
            )
        if descriptor.name in self._tools:
            raise DuplicateNameError(descriptor.name)
        self._tools[descriptor.name] = descriptor
        return descriptor

    def tool(self, name: str, description: str, arguments: type[BaseModel] = NoArguments):
        """Decorator form of register() for async handler functions."""

        def decorator(handler: Handler) -> Handler:
            self.register(ToolDescriptor(name, description, arguments, handler))
            return handler

        return decorator

    def lookup(self, name: str) -> ToolDescriptor:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> Iterator[ToolDescriptor]:
        """Iterate descriptors in registration order. Each call starts over."""
        return iter(tuple(self._tools.values()))

    def describe(self) -> list[dict[str, Any]]:
        return [descriptor.describe() for descriptor in self.list_tools()]

    def freeze(self) -> "ToolRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
