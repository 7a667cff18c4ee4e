"""
Uniform result wrapper returned for every tool invocation.
"""

import base64
import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    return str(value)


def render_text(data: Any) -> str:
    """Render a payload the way tools return it: strings as-is, anything else as JSON."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, default=_json_default)


@dataclass(frozen=True)
class Success:
    payload: Any

    is_error = False

    def to_text(self) -> str:
        return render_text(self.payload)


@dataclass(frozen=True)
class Failure:
    message: str
    kind: str = "ProviderError"

    is_error = True

    def to_text(self) -> str:
        return self.message


ResultEnvelope = Union[Success, Failure]
