# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from enum import StrEnum


class LoggerType(StrEnum):
    """Backends a logger can be created with."""

    STANDARD = "logging"
    STRUCTLOG = "structlog"
