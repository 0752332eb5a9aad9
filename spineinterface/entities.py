# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Entity handles, relationship keys and the wildcard filter sentinel.

Example:
    >>> phoenix = Entity("Phoenix", "actor")
    >>> joker = Entity("Joker", "film")
    >>> key = RelationshipKey(("actor", "film"), (phoenix, joker))
    >>> key
    (actor=Phoenix, film=Joker)
    >>> key.film
    Entity('film', 'Joker')
    >>> key == (phoenix, joker)
    True
"""

import itertools
from collections.abc import Iterable, Sequence
from functools import total_ordering
from typing import Any

_id_counter = itertools.count(1)


@total_ordering
class Entity:
    """An object of an object class.

    Two entities are equal when they have the same class and name. The ``id`` is a
    surrogate assigned at creation, unique within the process.
    """

    __slots__ = ("name", "class_name", "id")

    def __init__(self, name: str, class_name: str):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "class_name", class_name)
        object.__setattr__(self, "id", next(_id_counter))

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return (self.class_name, self.name) == (other.class_name, other.name)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return (self.class_name, self.name) < (other.class_name, other.name)

    def __hash__(self) -> int:
        return hash((self.class_name, self.name))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Entity({self.class_name!r}, {self.name!r})"

    def __reduce__(self):
        return (Entity, (self.name, self.class_name))


class Anything:
    """Type of the ``anything`` filter value, which lets every entity of a dimension pass."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "anything"

    def __reduce__(self):
        return (Anything, ())


anything = Anything()


class RelationshipKey(tuple):
    """Ordered tuple of entities, one per dimension of a relationship class.

    Behaves as a plain tuple for equality, hashing and unpacking, and additionally
    gives access to its entities by dimension name.
    """

    dimensions: tuple[str, ...]

    def __new__(cls, dimensions: Sequence[str], entities: Iterable[Entity]):
        key = super().__new__(cls, entities)
        if len(key) != len(dimensions):
            raise ValueError(
                f"Relationship key needs {len(dimensions)} entities, got {len(key)}."
            )
        key.dimensions = tuple(dimensions)
        return key

    def __getitem__(self, item: Any):
        if isinstance(item, str):
            try:
                return tuple.__getitem__(self, self.dimensions.index(item))
            except ValueError:
                raise KeyError(item) from None
        return tuple.__getitem__(self, item)

    def __getattr__(self, item: str):
        # only reached for names that are not regular attributes
        if item.startswith("__") or item == "dimensions":
            raise AttributeError(item)
        try:
            return self[item]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} has no dimension {item!r}"
            ) from None

    def __repr__(self) -> str:
        return "(" + ", ".join(f"{d}={e}" for d, e in zip(self.dimensions, self)) + ")"

    def __reduce__(self):
        return (RelationshipKey, (self.dimensions, tuple(self)))

    def as_dict(self) -> dict[str, Entity]:
        """Dimension name to entity mapping."""
        return dict(zip(self.dimensions, self))

    def project(self, dimensions: Sequence[str]) -> "RelationshipKey":
        """Return the key restricted to ``dimensions``, in the given order."""
        return RelationshipKey(dimensions, (self[d] for d in dimensions))
