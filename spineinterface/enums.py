# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0
from enum import Enum


class ValueKind(Enum):
    SCALAR = "scalar"
    ARRAY = "array"
    TIME_SERIES = "time_series"
    MAP = "map"


class TemporalAggregation(Enum):
    """What to do when several time series entries apply equally to a time slice."""

    RAISE = "raise"
    MEAN = "mean"
