# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Normalisation of the filter values accepted by class and parameter queries.

A filter value for one dimension is either ``anything``, a single entity (an
``Entity`` or its name), or a finite collection of those.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from spineinterface.entities import Anything, Entity
from spineinterface.exceptions import UnknownClassError

if TYPE_CHECKING:
    from spineinterface.classes.object_class import ObjectClass


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


# Marks that the caller did not pass a default; queries then return a new empty list.
NO_DEFAULT = _NoDefault()


class DimensionFilter(NamedTuple):
    """A normalised filter for one dimension.

    ``entities`` is None for the wildcard.
    """

    entities: Optional[frozenset[Entity]]

    @property
    def is_wildcard(self) -> bool:
        return self.entities is None

    def accepts(self, entity: Entity) -> bool:
        return self.entities is None or entity in self.entities


WILDCARD = DimensionFilter(None)


def is_collection(value: Any) -> bool:
    """Whether ``value`` should be read as a collection of filter values."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Entity, Mapping))


def normalize_filter(value: Any, object_class: "ObjectClass") -> DimensionFilter:
    """Turn a user supplied filter value into a ``DimensionFilter``.

    Args:
        value: ``anything``, an entity, an entity name, or a collection of entities/names.
        object_class: The class the dimension draws its entities from.

    Returns:
        The normalised filter.

    Raises:
        UnknownEntityError: If an entity is not a member of ``object_class``.
    """
    if isinstance(value, Anything):
        return WILDCARD
    if is_collection(value):
        return DimensionFilter(frozenset(object_class.entity(v) for v in value))
    return DimensionFilter(frozenset((object_class.entity(value),)))


def normalize_filters(
    filters: Mapping[str, Any],
    dimensions: tuple[str, ...],
    object_classes: tuple["ObjectClass", ...],
    class_name: str,
) -> dict[str, DimensionFilter]:
    """Normalise a dimension name to filter value mapping.

    Raises:
        UnknownClassError: If a filter names a dimension the class does not have.
    """
    normalized = {}
    for dimension, value in filters.items():
        if dimension not in dimensions:
            raise UnknownClassError(f"{dimension} (in {class_name})", available=dimensions)
        object_class = object_classes[dimensions.index(dimension)]
        normalized[dimension] = normalize_filter(value, object_class)
    return normalized
