# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

import logging
from typing import Any, Optional

from spineinterface.logging.base_logger import BaseLogger
from spineinterface.settings import Settings


class StandardLogger(BaseLogger):
    """Logger backed by the standard library ``logging`` module.

    Bound context and per-call keyword arguments are rendered as ``key=value`` pairs
    after the message, so they also show up with the default formatter.
    """

    def __init__(self, name: str, context: Optional[dict[str, Any]] = None):
        self.logger = logging.getLogger(name)
        self.context = dict(context or {})
        logging.basicConfig(level=Settings.log_level)

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs):
        fields = {**self.context, **kwargs}
        if fields:
            message = message + " " + " ".join(f"{k}={v!r}" for k, v in fields.items())
        self.logger.log(level, message, exc_info=exc_info)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, **kwargs)

    def exception(self, message: str, **kwargs):
        self._log(logging.ERROR, message, exc_info=True, **kwargs)

    def bind(self, **kwargs) -> "StandardLogger":
        return StandardLogger(self.logger.name, context={**self.context, **kwargs})
