"""Process-wide settings for objectstore-connector.

These come from the environment (``OBJECTSTORE_CONNECTOR_*``) and govern
diagnostics only. Per-connector settings such as the endpoint and
credentials live in ``objectstore_connector.schemas``.
"""

import logging
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Diagnostics settings with environment variable support."""

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    # Forces debug diagnostics on for every connector in the process.
    debug: bool = False
    otel_enabled: bool = False
    otel_service_name: str = "objectstore-connector"

    model_config = SettingsConfigDict(
        env_prefix="OBJECTSTORE_CONNECTOR_",
        case_sensitive=False,
    )

    @property
    def effective_log_level(self) -> int:
        """Numeric logging level; debug mode always logs at DEBUG."""
        if self.debug:
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.INFO)


settings = Settings()
