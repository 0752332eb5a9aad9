# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

import logging
from typing import Any, Optional

import structlog

from spineinterface.logging.base_logger import BaseLogger
from spineinterface.settings import Settings


def configure_structlog(log_level: str = None) -> None:
    """Make structlog drop statements below ``log_level`` (defaults to the app setting)."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level or Settings.log_level)
        )
    )


class StructlogLogger(BaseLogger):
    def __init__(self, name: str, bound_logger: Optional[Any] = None):
        if bound_logger is None:
            if not structlog.is_configured():
                configure_structlog()
            bound_logger = structlog.get_logger(name)
        self.name = name
        self.logger = bound_logger

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)

    def exception(self, message: str, **kwargs):
        self.logger.exception(message, **kwargs)

    def bind(self, **kwargs) -> "StructlogLogger":
        return StructlogLogger(self.name, bound_logger=self.logger.bind(**kwargs))
