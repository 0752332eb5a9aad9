# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from typing import Optional

from spineinterface.logging.base_logger import BaseLogger
from spineinterface.logging.logger_types import LoggerType
from spineinterface.logging.standard_logger import StandardLogger
from spineinterface.logging.structlog_logger import StructlogLogger
from spineinterface.settings import Settings


def get_logger(name: str, logger_type: Optional[str] = None) -> BaseLogger:
    """Create a logger for module ``name``.

    Args:
        name: Usually ``__name__`` of the calling module.
        logger_type: One of the ``LoggerType`` values. Defaults to ``Settings.logger_type``.

    Raises:
        ValueError: If the logger type is unknown.

    """
    if logger_type is None:
        logger_type = Settings.logger_type
    if logger_type == LoggerType.STANDARD:
        return StandardLogger(name)
    elif logger_type == LoggerType.STRUCTLOG:
        return StructlogLogger(name)
    else:
        raise ValueError(f"Unknown logger type: {logger_type}")
