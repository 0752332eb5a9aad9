# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Custom exceptions for spineinterface.

Errors raised by queries are deterministic functions of the dataset and the
arguments: none of them is transient, and nothing in the package retries.
"""

from collections.abc import Mapping, Sequence
from typing import Any


class InvalidIntervalError(ValueError):
    """A time slice was constructed with its start after its end."""

    def __init__(self, start: Any, end: Any):
        """Initialize the exception with the rejected bounds.

        Args:
            start: Requested start of the interval.
            end: Requested end of the interval.
        """
        self.start = start
        self.end = end
        super().__init__(f"Invalid interval: start {start} is after end {end}.")


class ParameterNotSpecifiedError(LookupError):
    """A strict parameter lookup found no value for the given arguments."""

    def __init__(self, parameter: str, arguments: Mapping[str, Any]):
        """Initialize the exception with the parameter and the lookup arguments.

        Args:
            parameter: Name of the parameter.
            arguments: Dimension name to entity mapping that was looked up.
        """
        self.parameter = parameter
        self.arguments = dict(arguments)
        formatted = ", ".join(f"{k}={v}" for k, v in self.arguments.items())
        super().__init__(f"Parameter {parameter} is not specified for argument(s) {formatted}.")


class IndexOutOfRangeError(IndexError):
    """An array value was indexed outside its bounds."""

    def __init__(self, parameter: str, index: int, length: int):
        """Initialize the exception.

        Args:
            parameter: Name of the parameter whose array was indexed.
            index: The requested index.
            length: Length of the array.
        """
        self.parameter = parameter
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of range for parameter {parameter} with array length {length}.")


class MapKeyNotFoundError(KeyError):
    """A map value has no entry for one of the requested keys."""

    def __init__(self, parameter: str, key: Any, path: Sequence[Any] = ()):
        """Initialize the exception.

        Args:
            parameter: Name of the parameter whose map was navigated.
            key: The key that was not found.
            path: Keys that were successfully navigated before ``key``.
        """
        self.parameter = parameter
        self.key = key
        self.path = tuple(path)
        super().__init__(f"Map key {key!r} not found for parameter {parameter} at path {list(self.path)}.")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class AmbiguousTemporalMatchError(LookupError):
    """More than one time series entry applies equally well to a time slice."""

    def __init__(self, parameter: str, t: Any, candidates: Sequence[Any]):
        """Initialize the exception.

        Args:
            parameter: Name of the parameter whose series was looked up.
            t: The time slice that was queried.
            candidates: The time slices of the competing entries.
        """
        self.parameter = parameter
        self.t = t
        self.candidates = list(candidates)
        super().__init__(
            f"Time slice {t} matches {len(self.candidates)} entries of parameter {parameter} "
            f"at equal resolution: {', '.join(str(c) for c in self.candidates)}."
        )


class UnknownEntityError(LookupError):
    """A filter or key refers to an entity that is not a member of the class."""

    def __init__(self, class_name: str, entity: Any):
        """Initialize the exception.

        Args:
            class_name: Name of the class the entity was looked up in.
            entity: The entity (or entity name) that was not found.
        """
        self.class_name = class_name
        self.entity = entity
        super().__init__(f"Unknown entity {entity} for class {class_name}.")


class UnknownClassError(LookupError):
    """A class, dimension or parameter name does not exist."""

    def __init__(self, name: str, available: Sequence[str] | None = None):
        """Initialize the exception.

        Args:
            name: The unknown name.
            available: Optional list of names that do exist.
        """
        self.name = name
        self.available = list(available) if available is not None else None
        if self.available is not None:
            message = f"Unknown class {name}. Available: {', '.join(self.available)}."
        else:
            message = f"Unknown class {name}."
        super().__init__(message)


class InvalidFilterError(ValueError):
    """A lookup that must select exactly one key received a wildcard or a collection."""


class PopulationError(ValueError):
    """The ingested data cannot be turned into a consistent snapshot."""


__all__ = [
    "AmbiguousTemporalMatchError",
    "IndexOutOfRangeError",
    "InvalidFilterError",
    "InvalidIntervalError",
    "MapKeyNotFoundError",
    "ParameterNotSpecifiedError",
    "PopulationError",
    "UnknownClassError",
    "UnknownEntityError",
]
