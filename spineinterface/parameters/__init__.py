# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0
"""Parameter values and their resolution."""

from .parameter import Parameter, ParameterIndices
from .values import ArrayValue, MapValue, ScalarValue, TimeSeriesValue, Value, from_python

__all__ = [
    "ArrayValue",
    "MapValue",
    "Parameter",
    "ParameterIndices",
    "ScalarValue",
    "TimeSeriesValue",
    "Value",
    "from_python",
]
