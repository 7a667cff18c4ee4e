"""
Invocation boundary: turns (tool name, raw arguments) into a result envelope.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .envelope import Failure, ResultEnvelope, Success
from .errors import ArgumentValidationError, UnknownToolError, normalize_error
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Looks up, validates, and runs tools. Never raises for runtime faults."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def invoke(
        self, tool_name: str, raw_arguments: Optional[Mapping[str, Any]] = None
    ) -> ResultEnvelope:
        logger.debug("Invoking %s", tool_name)

        try:
            descriptor = self.registry.lookup(tool_name)
        except UnknownToolError as e:
            logger.info("%s", e)
            return Failure(str(e), kind="UnknownToolError")

        try:
            arguments = descriptor.validate(raw_arguments)
        except ArgumentValidationError as e:
            logger.info("%s", e)
            return Failure(str(e), kind="ArgumentValidationError")

        try:
            payload = await descriptor.handler(arguments)
        except Exception as e:  # noqa: BLE001 - every handler fault becomes a Failure
            error = normalize_error(e)
            logger.warning("%s failed (%s): %s", tool_name, error.category.value, error.message)
            logger.debug("%s traceback", tool_name, exc_info=True)
            return Failure(error.message, kind="ProviderError")

        logger.info("%s succeeded", tool_name)
        return Success(payload)
