# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Time slices and the interval algebra used to look up time-varying values.

A ``TimeSlice`` is the half-open interval ``[start, end)``. Bounds are usually
``datetime`` or ``pandas.Timestamp`` objects, but any totally ordered type with a
subtraction works (e.g. plain numbers for abstract model periods).

For datetime bounds the duration weight is expressed in minutes; for numeric bounds
it is ``end - start``. An explicit duration can be given to weight slices whose
calendar length differs from their logical length.

Example:
    >>> from datetime import datetime
    >>> day = TimeSlice(datetime(2025, 1, 1), datetime(2025, 1, 2))
    >>> morning = TimeSlice(datetime(2025, 1, 1, 6), datetime(2025, 1, 1, 12))
    >>> duration(day)
    1440.0
    >>> iscontained(morning, day)
    True
    >>> overlap_duration(morning, day)
    360.0
    >>> t_lowest_resolution([morning, day]) == [day]
    True
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from functools import total_ordering
from typing import Any, Optional, Union

from spineinterface.exceptions import InvalidIntervalError

MINUTE = timedelta(minutes=1)

Number = Union[int, float]


def _span_to_number(span: Any) -> Number:
    if isinstance(span, timedelta):
        return span / MINUTE
    return span


@total_ordering
class TimeSlice:
    """A slice of time ``[start, end)`` with a duration weight."""

    __slots__ = ("start", "end", "duration")

    def __init__(self, start: Any, end: Any, duration: Optional[Number] = None):
        """Construct a TimeSlice with bounds given by ``start`` and ``end``.

        Args:
            start: Inclusive start of the slice.
            end: Exclusive end of the slice.
            duration: Logical length of the slice. Defaults to the length of
                ``[start, end)`` in minutes (datetime bounds) or in bound units.

        Raises:
            InvalidIntervalError: If ``start`` is after ``end``.
        """
        if start > end:
            raise InvalidIntervalError(start, end)
        if duration is None:
            duration = _span_to_number(end - start)
        elif duration < 0:
            raise InvalidIntervalError(start, end)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "duration", duration)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeSlice):
            return NotImplemented
        return self.start == other.start and self.end == other.end

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeSlice):
            return NotImplemented
        return (self.start, self.end) < (other.start, other.end)

    def __hash__(self) -> int:
        return hash((self.start, self.end))

    def __str__(self) -> str:
        return f"{_format_bound(self.start)}~>{_format_bound(self.end)}"

    def __repr__(self) -> str:
        return f"TimeSlice({self.start!r}, {self.end!r})"

    def __reduce__(self):
        return (TimeSlice, (self.start, self.end, self.duration))

    def before(self, other: "TimeSlice") -> bool:
        return before(self, other)

    def overlaps(self, other: "TimeSlice") -> bool:
        return overlaps(self, other)

    def iscontained(self, other: "TimeSlice") -> bool:
        return iscontained(self, other)

    def overlap_duration(self, other: "TimeSlice") -> Number:
        return overlap_duration(self, other)


def _format_bound(bound: Any) -> str:
    if isinstance(bound, datetime):
        return bound.isoformat(timespec="minutes")
    return str(bound)


def duration(t: TimeSlice) -> Number:
    """The duration of time slice ``t``."""
    return t.duration


def before(a: TimeSlice, b: TimeSlice) -> bool:
    """Determine whether the end point of ``a`` is exactly the start point of ``b``."""
    return a.end == b.start


def iscontained(b: TimeSlice, a: TimeSlice) -> bool:
    """Determine whether ``b`` is contained in ``a``."""
    return a.start <= b.start and b.end <= a.end


def overlaps(a: TimeSlice, b: TimeSlice) -> bool:
    """Determine whether ``a`` and ``b`` overlap.

    Slices that only share an end point do not overlap.
    """
    return a.start < b.end and b.start < a.end


def overlap_duration(a: TimeSlice, b: TimeSlice) -> Number:
    """The duration of the period where ``a`` and ``b`` overlap.

    The overlap is measured in ``a``'s duration weight, i.e. as the fraction of ``a``
    that ``b`` covers times ``duration(a)``.
    """
    if not overlaps(a, b):
        return 0
    full_span = a.end - a.start
    if not full_span:
        return 0
    span = min(a.end, b.end) - max(a.start, b.start)
    return a.duration * (span / full_span)


def _strictly_contains(outer: TimeSlice, inner: TimeSlice) -> bool:
    return outer != inner and iscontained(inner, outer)


def t_lowest_resolution(t_iter: Iterable[TimeSlice]) -> list[TimeSlice]:
    """Return a list containing only time slices from ``t_iter`` that aren't contained in any other.

    Input order and exact duplicates are preserved. This compares all pairs of distinct
    slices, so it is quadratic in the number of distinct slices; fine for the tens to
    low thousands of slices a model horizon has.
    """
    slices = list(t_iter)
    distinct = set(slices)
    return [t for t in slices if not any(_strictly_contains(other, t) for other in distinct)]


def t_highest_resolution(t_iter: Iterable[TimeSlice]) -> list[TimeSlice]:
    """Return a list containing only time slices from ``t_iter`` that do not contain any other.

    Same ordering, duplicate and complexity behaviour as ``t_lowest_resolution``.
    """
    slices = list(t_iter)
    distinct = set(slices)
    return [t for t in slices if not any(_strictly_contains(t, other) for other in distinct)]
