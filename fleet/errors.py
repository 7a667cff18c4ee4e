"""
Error taxonomy for Fleet and normalization of AWS provider faults.
"""

import enum

from botocore.exceptions import (
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
    SSOTokenLoadError,
    TokenRetrievalError,
    UnauthorizedSSOTokenError,
)


class FleetError(Exception):
    """Base class for every error raised by Fleet."""


class UnknownToolError(FleetError):
    """Requested tool name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ArgumentValidationError(FleetError):
    """Tool arguments are missing, mistyped, or outside an allowed set."""

    def __init__(self, tool: str, field: str, detail: str):
        self.tool = tool
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid arguments for {tool}: {field}: {detail}")


class DuplicateNameError(FleetError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class RegistryFrozenError(FleetError):
    """Registration was attempted after startup completed."""


class ToolDefinitionError(FleetError):
    """A static tool definition is malformed."""


class ProviderCategory(str, enum.Enum):
    MISSING_CREDENTIALS = "missing_credentials"
    EXPIRED_CREDENTIALS = "expired_credentials"
    PROVIDER = "provider"


MISSING_CREDENTIALS_MESSAGE = (
    "AWS credentials not configured. Set AWS_ACCESS_KEY_ID and "
    "AWS_SECRET_ACCESS_KEY, or configure an AWS profile."
)
EXPIRED_CREDENTIALS_MESSAGE = (
    "AWS credentials have expired. Refresh your session token or re-authenticate."
)

_MISSING_CREDENTIAL_HINTS = ("Could not load credentials", "Unable to locate credentials")
_EXPIRED_CODES = {"ExpiredToken", "ExpiredTokenException", "RequestExpired"}
_EXPIRED_TYPES = (TokenRetrievalError, UnauthorizedSSOTokenError, SSOTokenLoadError)
# "expired" alone also matches certificates, keys and presigned URLs.
_EXPIRED_SUBJECTS = ("token", "session", "credential")


class ProviderError(FleetError):
    """A handler's call to AWS failed. ``message`` is already normalized."""

    def __init__(self, category: ProviderCategory, message: str):
        self.category = category
        self.message = message
        super().__init__(message)


def _describe(exc: Exception) -> tuple[str, str]:
    """Return (name, message) for an exception, preferring AWS error codes."""
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = error.get("Code") or type(exc).__name__
        return code, error.get("Message") or str(exc)
    return type(exc).__name__, str(exc) or type(exc).__name__


def _mentions_expired_credentials(message: str) -> bool:
    lowered = message.lower()
    return "expired" in lowered and any(subject in lowered for subject in _EXPIRED_SUBJECTS)


def normalize_error(exc: Exception) -> ProviderError:
    """
    Classify any handler failure into a ProviderError.

    Missing and expired credentials get fixed messages so callers can match on
    them; everything else is reported as "<code>: <message>".
    """
    if isinstance(exc, ProviderError):
        return exc

    name, message = _describe(exc)

    if isinstance(exc, (NoCredentialsError, PartialCredentialsError)) or any(
        hint in message for hint in _MISSING_CREDENTIAL_HINTS
    ):
        return ProviderError(ProviderCategory.MISSING_CREDENTIALS, MISSING_CREDENTIALS_MESSAGE)

    expired = isinstance(exc, _EXPIRED_TYPES) or name in _EXPIRED_CODES
    if expired or _mentions_expired_credentials(message):
        return ProviderError(ProviderCategory.EXPIRED_CREDENTIALS, EXPIRED_CREDENTIALS_MESSAGE)

    return ProviderError(ProviderCategory.PROVIDER, f"{name}: {message}")
