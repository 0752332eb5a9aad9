# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spineinterface.logging.logger_types import LoggerType


class AppSettings(BaseSettings):
    """Global app settings."""

    model_config = SettingsConfigDict(
        env_prefix="spineinterface_", env_file=".env", extra="ignore"
    )

    logger_type: LoggerType = Field(
        LoggerType.STRUCTLOG,
        description="The type of logger to use.",
    )

    # Logging settings.
    log_level: str = Field("INFO", description="Log level used for logging statements.")

    default_strict: bool = Field(
        True,
        description="Whether parameter calls raise when no value is specified for the given arguments, "
        "unless overridden per call.",
    )
