"""
Process configuration for Fleet, resolved once from the environment.
"""

import logging
import os
import sys
from functools import lru_cache
from typing import Any, Literal

from pydantic import field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

ALL_SERVICES = ("sts", "ec2", "s3", "cloudwatch", "lambda", "ecs", "cloudformation")

DEFAULT_REGION = "us-east-1"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Exact variable names read per field, first non-empty wins.
ENV_VARS = {
    "region": ("AWS_REGION", "AWS_DEFAULT_REGION"),
    "services": ("FLEET_SERVICES",),
    "log_level": ("FLEET_LOG_LEVEL",),
}


class FleetEnvSource(PydanticBaseSettingsSource):
    """Reads only the variables in ENV_VARS, matched case-sensitively."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        for env_name in ENV_VARS.get(field_name, ()):
            value = os.environ.get(env_name)
            if value:
                return value, env_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        values = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, _, _ = self.get_field_value(field, field_name)
            if value is not None:
                values[field_name] = value
        return values


class FleetConfig(BaseSettings):
    """Immutable settings passed to every service module at startup."""

    region: str = DEFAULT_REGION
    # Comma-separated service ids; empty means every service.
    services: str = ""
    log_level: LogLevel = "INFO"

    model_config = SettingsConfigDict(frozen=True, extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, FleetEnvSource(settings_cls)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def enabled_services(self) -> frozenset[str]:
        if not self.services.strip():
            return frozenset(ALL_SERVICES)
        requested = {s.strip().lower() for s in self.services.split(",")}
        return frozenset(s for s in ALL_SERVICES if s in requested)

    def client_kwargs(self) -> dict[str, str]:
        """Keyword arguments every boto3 client is created with."""
        return {"region_name": self.region}


@lru_cache()
def get_config() -> FleetConfig:
    """Get cached configuration."""
    return FleetConfig()


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stderr handler to the ``fleet`` logger.

    stdout is reserved for the MCP stdio transport.
    """
    logger = logging.getLogger("fleet")
    logger.setLevel(level.upper())
    if not any(getattr(h, "_fleet_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._fleet_handler = True
        logger.addHandler(handler)
    return logger
