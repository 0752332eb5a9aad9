# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

from spineinterface.classes.filters import NO_DEFAULT, DimensionFilter, normalize_filters
from spineinterface.classes.object_class import ObjectClass
from spineinterface.entities import Entity, RelationshipKey
from spineinterface.exceptions import PopulationError, UnknownClassError, UnknownEntityError

if TYPE_CHECKING:
    from spineinterface.parameters.parameter import Parameter


def default_dimension_names(class_names: Sequence[str]) -> tuple[str, ...]:
    """Dimension names for a list of member classes.

    Classes that appear more than once get a 1-based positional suffix, so
    ``["node", "node"]`` gives ``("node1", "node2")``.
    """
    counts = Counter(class_names)
    seen: Counter = Counter()
    names = []
    for class_name in class_names:
        if counts[class_name] > 1:
            seen[class_name] += 1
            names.append(f"{class_name}{seen[class_name]}")
        else:
            names.append(class_name)
    return tuple(names)


class RelationshipClass:
    """A named set of relationships between objects of its member classes.

    Each relationship is a ``RelationshipKey`` with one entity per member class, in the
    declared member order. A reverse index from (dimension, entity) to key positions
    is built once at construction, so filtered queries only touch matching keys.

    Example:
        >>> actor = ObjectClass("actor", ["Phoenix", "Johansson"])
        >>> film = ObjectClass("film", ["Her", "Joker"])
        >>> actor__film = RelationshipClass(
        ...     "actor__film",
        ...     [actor, film],
        ...     [("Phoenix", "Joker"), ("Phoenix", "Her"), ("Johansson", "Her")],
        ... )
        >>> actor__film(actor="Johansson")
        [Entity('film', 'Her')]
        >>> actor__film(film="Her", _compact=False)
        [(actor=Phoenix, film=Her), (actor=Johansson, film=Her)]
    """

    def __init__(
        self,
        name: str,
        object_classes: Sequence[ObjectClass],
        relationships: Iterable[Sequence[Union[Entity, str]]] = (),
        dimension_names: Optional[Sequence[str]] = None,
    ):
        """Create the class and index its relationships.

        Args:
            name: Name of the class.
            object_classes: Member classes, in order.
            relationships: One sequence of entities (or entity names) per relationship.
            dimension_names: Names for the dimensions. Defaults to the member class names,
                suffixed where a class appears more than once.

        Raises:
            PopulationError: If a relationship has the wrong arity, refers to an entity
                that is not a member of its positional class, or is given twice.
        """
        self.name = name
        self.object_classes = tuple(object_classes)
        if dimension_names is None:
            dimension_names = default_dimension_names([oc.name for oc in self.object_classes])
        self.dimensions = tuple(dimension_names)
        if len(self.dimensions) != len(self.object_classes):
            raise PopulationError(
                f"Relationship class {name} has {len(self.object_classes)} member classes "
                f"but {len(self.dimensions)} dimension names."
            )
        if len(set(self.dimensions)) != len(self.dimensions):
            raise PopulationError(f"Relationship class {name} has duplicate dimension names {self.dimensions}.")

        self._keys: list[RelationshipKey] = []
        self._positions: dict[RelationshipKey, int] = {}
        self._reverse_index: tuple[dict[Entity, list[int]], ...] = tuple({} for _ in self.dimensions)
        self._parameters: dict[str, "Parameter"] = {}
        for relationship in relationships:
            self._add(relationship)

    def _add(self, relationship: Sequence[Union[Entity, str]]) -> None:
        if len(relationship) != len(self.object_classes):
            raise PopulationError(
                f"Relationship {tuple(relationship)} of class {self.name} should have "
                f"{len(self.object_classes)} members."
            )
        try:
            entities = [oc.entity(e) for oc, e in zip(self.object_classes, relationship)]
        except UnknownEntityError as e:
            raise PopulationError(
                f"Relationship {tuple(str(x) for x in relationship)} of class {self.name}: {e}"
            ) from e
        key = RelationshipKey(self.dimensions, entities)
        if key in self._positions:
            raise PopulationError(f"Duplicate relationship {key!r} in class {self.name}.")
        position = len(self._keys)
        self._keys.append(key)
        self._positions[key] = position
        for index, entity in zip(self._reverse_index, key):
            index.setdefault(entity, []).append(position)

    def __repr__(self) -> str:
        return f"RelationshipClass({self.name!r}, dimensions={self.dimensions}, n_relationships={len(self)})"

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[RelationshipKey]:
        return iter(self._keys)

    def __contains__(self, item: Any) -> bool:
        try:
            return tuple(item) in self._positions
        except TypeError:
            return False

    @property
    def keys(self) -> tuple[RelationshipKey, ...]:
        return tuple(self._keys)

    @property
    def object_class_names(self) -> tuple[str, ...]:
        return tuple(oc.name for oc in self.object_classes)

    @property
    def parameters(self) -> dict[str, "Parameter"]:
        """Parameters defined on this class, by name."""
        return dict(self._parameters)

    def add_parameter(self, parameter: "Parameter") -> None:
        """Register a parameter defined on this class. Only used while populating."""
        self._parameters[parameter.name] = parameter

    def normalize(self, filters: Mapping[str, Any]) -> dict[str, DimensionFilter]:
        return normalize_filters(filters, self.dimensions, self.object_classes, self.name)

    def key(self, entities: Mapping[str, Union[Entity, str]]) -> RelationshipKey:
        """Build the key with the given entity per dimension.

        The key does not need to be a current relationship; parameters use this to
        address values and report what was looked up.

        Raises:
            UnknownClassError: If the dimensions do not match this class.
            UnknownEntityError: If an entity is not a member of its dimension's class.
        """
        if set(entities) != set(self.dimensions):
            raise UnknownClassError(
                f"{'__'.join(entities)} (dimensions of {self.name})", available=self.dimensions
            )
        return RelationshipKey(
            self.dimensions,
            (oc.entity(entities[d]) for d, oc in zip(self.dimensions, self.object_classes)),
        )

    def select(self, filters: Mapping[str, DimensionFilter]) -> list[RelationshipKey]:
        """Keys that pass the normalised filters, in insertion order."""
        concrete = [
            (self.dimensions.index(dimension), f.entities)
            for dimension, f in filters.items()
            if not f.is_wildcard
        ]
        if not concrete:
            return list(self._keys)
        candidates = []
        for position, entities in concrete:
            index = self._reverse_index[position]
            matching = set()
            for entity in entities:
                matching.update(index.get(entity, ()))
            candidates.append(matching)
        candidates.sort(key=len)
        positions = set.intersection(*candidates)
        return [self._keys[p] for p in sorted(positions)]

    def query(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        *,
        compact: bool = True,
        default: Any = NO_DEFAULT,
    ) -> Any:
        """An Array of Object tuples corresponding to the relationships of this class.

        Args:
            filters: For each dimension, an entity (or its name), a collection of
                entities, or ``anything``. Omitted dimensions accept all entities.
            compact: Whether the filtered dimensions (including those given ``anything``) should
                be removed from the resulting tuples. Tuples that become equal are returned once,
                in first-seen order. When exactly one dimension remains, its entities are returned.
            default: Returned when no relationship passes the filter. Defaults to a new empty list.

        Returns:
            Relationship keys, entities, or ``default``.

        Raises:
            UnknownClassError: If a filter names a dimension the class does not have.
            UnknownEntityError: If a filter names an entity that is not a member.
        """
        normalized = self.normalize(filters or {})
        keys = self.select(normalized)
        if not keys:
            return [] if default is NO_DEFAULT else default
        if not compact:
            return keys
        kept = [d for d in self.dimensions if d not in normalized]
        if not kept:
            # every dimension filtered: dropping them all would leave empty tuples
            return keys
        if len(kept) == len(self.dimensions):
            return keys
        if len(kept) == 1:
            position = self.dimensions.index(kept[0])
            compacted = (key[position] for key in keys)
        else:
            compacted = (key.project(kept) for key in keys)
        return list(dict.fromkeys(compacted))

    def __call__(self, _compact: bool = True, _default: Any = NO_DEFAULT, **filters: Any) -> Any:
        """Shorthand for ``query`` taking the filters as keyword arguments."""
        return self.query(filters, compact=_compact, default=_default)
