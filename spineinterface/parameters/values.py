# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Parameter values.

A value is one of four shapes, told apart by its ``kind``:

- ``ScalarValue``: a number, string, boolean or None.
- ``ArrayValue``: a fixed-length sequence of scalars addressed by a 0-based index.
- ``TimeSeriesValue``: ordered ``(TimeSlice, Value)`` entries, plus an optional default
  that applies at all times no entry covers.
- ``MapValue``: ordered ``(key, Value)`` entries; values may be maps again.

Code that navigates values switches on ``kind`` rather than on the Python type.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, ClassVar, Optional, Union

import pandas as pd

from spineinterface.enums import ValueKind
from spineinterface.time_slice import (
    TimeSlice,
    duration,
    iscontained,
    overlap_duration,
    overlaps,
    t_highest_resolution,
)

Scalar = Union[int, float, str, bool, None]


class Value:
    kind: ClassVar[ValueKind]

    def leaves(self, path: tuple = ()) -> Iterator[tuple[tuple, Scalar]]:
        """Yield ``(path, scalar)`` for every scalar leaf, ``path`` being the sub-indices leading to it."""
        raise NotImplementedError

    def to_python(self) -> Any:
        """Plain Python rendering: lists for arrays, dicts for maps and time series."""
        raise NotImplementedError


@dataclass(frozen=True)
class ScalarValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.SCALAR

    value: Scalar

    @property
    def is_null(self) -> bool:
        return self.value is None

    def leaves(self, path: tuple = ()) -> Iterator[tuple[tuple, Scalar]]:
        yield path, self.value

    def to_python(self) -> Scalar:
        return self.value


@dataclass(frozen=True)
class ArrayValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.ARRAY

    values: tuple[Scalar, ...]

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.values)

    def leaves(self, path: tuple = ()) -> Iterator[tuple[tuple, Scalar]]:
        for i, v in enumerate(self.values):
            yield path + (i,), v

    def to_python(self) -> list[Scalar]:
        return list(self.values)


@dataclass(frozen=True)
class TimeSeriesValue(Value):
    """Time-varying value.

    Entries are kept sorted by time slice. Two entries may not have the same slice.
    """

    kind: ClassVar[ValueKind] = ValueKind.TIME_SERIES

    entries: tuple[tuple[TimeSlice, Value], ...]
    default: Optional[Value] = None

    def __post_init__(self):
        entries = tuple(sorted(self.entries, key=lambda entry: entry[0]))
        slices = [t for t, _ in entries]
        if len(set(slices)) != len(slices):
            raise ValueError("A time series cannot have two entries for the same time slice.")
        object.__setattr__(self, "entries", entries)

    def __len__(self) -> int:
        return len(self.entries)

    def select(self, t: TimeSlice) -> list[tuple[TimeSlice, Value]]:
        """The entries that apply best to ``t``.

        Entries whose slice contains ``t`` are preferred over entries that only overlap
        it. Within the preferred group the finest slices win, and among those the ones
        with the smallest duration. More than one returned entry means the match is
        ambiguous; an empty list means no entry applies.
        """
        group = [(s, v) for s, v in self.entries if iscontained(t, s)]
        if not group:
            group = [(s, v) for s, v in self.entries if overlaps(s, t)]
        if not group:
            return []
        finest = set(t_highest_resolution(s for s, _ in group))
        group = [(s, v) for s, v in group if s in finest]
        shortest = min(duration(s) for s, _ in group)
        return [(s, v) for s, v in group if duration(s) == shortest]

    def weighted_mean(self, t: TimeSlice, entries: Sequence[tuple[TimeSlice, Value]]) -> Optional[float]:
        """Mean of scalar ``entries`` weighted by how much of ``t`` each one covers.

        Returns None if the entries cover no part of ``t`` or hold non-numeric values.
        """
        total_weight = 0
        total = 0
        for s, v in entries:
            if v.kind is not ValueKind.SCALAR or not isinstance(v.value, Number) or isinstance(v.value, bool):
                return None
            weight = overlap_duration(t, s)
            total += weight * v.value
            total_weight += weight
        if not total_weight:
            return None
        return total / total_weight

    def leaves(self, path: tuple = ()) -> Iterator[tuple[tuple, Scalar]]:
        for s, v in self.entries:
            yield from v.leaves(path + (s,))
        if self.default is not None:
            yield from self.default.leaves(path + (None,))

    def to_python(self) -> dict[Optional[TimeSlice], Any]:
        result: dict[Optional[TimeSlice], Any] = {s: v.to_python() for s, v in self.entries}
        if self.default is not None:
            result[None] = self.default.to_python()
        return result

    @classmethod
    def from_series(cls, series: pd.Series, end: Any = None) -> "TimeSeriesValue":
        """Build a time series from a ``pandas.Series`` indexed by slice start.

        Each entry runs until the next index value. The last one runs until ``end``, or
        for one index frequency (or the last step) when ``end`` is not given.

        Raises:
            ValueError: If the series is empty, or the end of the last entry cannot be told.
        """
        if series.empty:
            raise ValueError("Cannot build a time series from an empty series.")
        series = series.sort_index()
        starts = list(series.index)
        if end is None:
            freq = getattr(series.index, "freq", None)
            if freq is not None:
                end = starts[-1] + freq
            elif len(starts) > 1:
                end = starts[-1] + (starts[-1] - starts[-2])
            else:
                raise ValueError("Cannot infer the end of a single-entry time series; pass `end`.")
        ends = starts[1:] + [end]
        return cls(
            tuple(
                (TimeSlice(_to_python_bound(s), _to_python_bound(e)), from_python(v))
                for s, e, v in zip(starts, ends, series.tolist())
            )
        )


def _to_python_bound(bound: Any) -> Any:
    if isinstance(bound, pd.Timestamp):
        return bound.to_pydatetime()
    if isinstance(bound, pd.Timedelta):
        return bound.to_pytimedelta()
    return bound


@dataclass(frozen=True)
class MapValue(Value):
    kind: ClassVar[ValueKind] = ValueKind.MAP

    entries: tuple[tuple[Any, Value], ...]
    _lookup: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        entries = tuple(self.entries)
        lookup = dict(entries)
        if len(lookup) != len(entries):
            raise ValueError("A map cannot have two entries with the same key.")
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_lookup", lookup)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: Any) -> bool:
        return key in self._lookup

    def get(self, key: Any) -> Optional[Value]:
        return self._lookup.get(key)

    def leaves(self, path: tuple = ()) -> Iterator[tuple[tuple, Scalar]]:
        for k, v in self.entries:
            yield from v.leaves(path + (k,))

    def to_python(self) -> dict[Any, Any]:
        return {k: v.to_python() for k, v in self.entries}


def from_python(obj: Any) -> Value:
    """Wrap a plain Python object into a ``Value``.

    Lists and tuples become arrays, mappings become maps (recursively), a
    ``pandas.Series`` becomes a time series, and anything else is a scalar.

    Raises:
        ValueError: If a list or tuple holds anything but scalars.
    """
    if isinstance(obj, Value):
        return obj
    if isinstance(obj, pd.Series):
        return TimeSeriesValue.from_series(obj)
    if isinstance(obj, Mapping):
        return MapValue(tuple((k, from_python(v)) for k, v in obj.items()))
    if isinstance(obj, (list, tuple)):
        nested = [v for v in obj if isinstance(v, (Value, pd.Series, Mapping, list, tuple))]
        if nested:
            raise ValueError(f"Array elements must be scalars, got {nested[0]!r}; use a mapping to nest values.")
        return ArrayValue(tuple(obj))
    return ScalarValue(obj)
