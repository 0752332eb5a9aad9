# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Dataset snapshots: building them from ingested data and publishing them.

A ``DatasetSnapshot`` is the lookup table from names to classes and parameters. It is
built in one go by ``build_snapshot`` and never mutated afterwards, so any number of
threads can query it without locking. ``Dataset`` holds the snapshot currently in use
and swaps in a new one when the data is repopulated.

Example:
    >>> data = DatasetData(
    ...     object_classes=[
    ...         ObjectClassData(name="actor", objects=["Phoenix", "Johansson"]),
    ...         ObjectClassData(name="film", objects=["Her", "Joker"]),
    ...     ],
    ...     relationship_classes=[
    ...         RelationshipClassData(
    ...             name="actor__film",
    ...             object_classes=["actor", "film"],
    ...             relationships=[["Phoenix", "Joker"], ["Phoenix", "Her"], ["Johansson", "Her"]],
    ...         )
    ...     ],
    ... )
    >>> snapshot = build_snapshot(data)
    >>> snapshot["actor__film"](actor="Johansson")
    [Entity('film', 'Her')]
"""

import threading
from collections.abc import Iterator, Mapping
from typing import Optional, Union

from spineinterface.classes.object_class import ObjectClass
from spineinterface.classes.relationship_class import RelationshipClass
from spineinterface.data_classes.dataset import (
    DatasetData,
    ObjectClassData,
    ParameterData,
    RelationshipClassData,
    value_from_data,
)
from spineinterface.exceptions import PopulationError, UnknownClassError
from spineinterface.logging.logger_factory import get_logger
from spineinterface.parameters.parameter import ClassLike, Parameter

logger = get_logger(__name__)


class DatasetSnapshot:
    """Immutable set of object classes, relationship classes and parameters."""

    def __init__(
        self,
        object_classes: Mapping[str, ObjectClass],
        relationship_classes: Mapping[str, RelationshipClass],
        parameters: Mapping[str, Parameter],
    ):
        self._object_classes = dict(object_classes)
        self._relationship_classes = dict(relationship_classes)
        self._parameters = dict(parameters)
        self._all: dict[str, Union[ObjectClass, RelationshipClass, Parameter]] = {}
        for table in (self._object_classes, self._relationship_classes, self._parameters):
            for name, item in table.items():
                if name in self._all:
                    raise PopulationError(f"Name {name} is used by both {self._all[name]!r} and {item!r}.")
                self._all[name] = item

    def __repr__(self) -> str:
        return (
            f"DatasetSnapshot(object_classes={len(self._object_classes)}, "
            f"relationship_classes={len(self._relationship_classes)}, parameters={len(self._parameters)})"
        )

    def __getitem__(self, name: str) -> Union[ObjectClass, RelationshipClass, Parameter]:
        """Look up an object class, relationship class or parameter by name."""
        try:
            return self._all[name]
        except KeyError:
            raise UnknownClassError(name, available=list(self._all)) from None

    def __contains__(self, name: object) -> bool:
        return name in self._all

    def __iter__(self) -> Iterator[str]:
        return iter(self._all)

    @property
    def object_classes(self) -> tuple[ObjectClass, ...]:
        return tuple(self._object_classes.values())

    @property
    def relationship_classes(self) -> tuple[RelationshipClass, ...]:
        return tuple(self._relationship_classes.values())

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        return tuple(self._parameters.values())

    def object_class(self, name: str) -> ObjectClass:
        try:
            return self._object_classes[name]
        except KeyError:
            raise UnknownClassError(name, available=list(self._object_classes)) from None

    def relationship_class(self, name: str) -> RelationshipClass:
        try:
            return self._relationship_classes[name]
        except KeyError:
            raise UnknownClassError(name, available=list(self._relationship_classes)) from None

    def parameter(self, name: str) -> Parameter:
        try:
            return self._parameters[name]
        except KeyError:
            raise UnknownClassError(name, available=list(self._parameters)) from None


def _build_object_classes(items: list[ObjectClassData]) -> dict[str, ObjectClass]:
    object_classes = {}
    for item in items:
        if item.name in object_classes:
            raise PopulationError(f"Duplicate object class {item.name}.")
        object_classes[item.name] = ObjectClass(item.name, item.objects)
    return object_classes


def _build_relationship_classes(
    items: list[RelationshipClassData], object_classes: Mapping[str, ObjectClass]
) -> dict[str, RelationshipClass]:
    relationship_classes = {}
    for item in items:
        if item.name in relationship_classes:
            raise PopulationError(f"Duplicate relationship class {item.name}.")
        try:
            members = [object_classes[name] for name in item.object_classes]
        except KeyError as e:
            raise PopulationError(
                f"Relationship class {item.name} refers to unknown object class {e.args[0]}."
            ) from None
        relationship_classes[item.name] = RelationshipClass(
            item.name, members, item.relationships, dimension_names=item.dimension_names
        )
    return relationship_classes


def _build_parameters(
    items: list[ParameterData], classes: Mapping[str, ClassLike]
) -> dict[str, Parameter]:
    parameters: dict[str, Parameter] = {}
    for item in items:
        try:
            class_ = classes[item.class_name]
        except KeyError:
            raise PopulationError(f"Parameter {item.name} is defined on unknown class {item.class_name}.") from None
        parameter = parameters.setdefault(item.name, Parameter(item.name))
        if item.class_name in {c.name for c in parameter.classes}:
            raise PopulationError(f"Parameter {item.name} is defined twice on class {item.class_name}.")
        values = {}
        try:
            for value_item in item.values:
                key = value_item.entities
                if not isinstance(key, str):
                    key = tuple(key)
                if key in values:
                    raise PopulationError(f"Duplicate value of parameter {item.name} for {key} in {item.class_name}.")
                values[key] = value_from_data(value_item.value)
            if item.default_value is not None:
                default = value_from_data(item.default_value)
                explicit = set(values)
                for member in class_:
                    member_key = member.name if isinstance(class_, ObjectClass) else tuple(e.name for e in member)
                    if member_key not in explicit:
                        values[member_key] = default
        except PopulationError:
            raise
        except ValueError as e:
            # also covers InvalidIntervalError
            raise PopulationError(f"Invalid value for parameter {item.name} in {item.class_name}: {e}") from e
        parameter.set_values(class_, values)
    return parameters


def build_snapshot(data: DatasetData) -> DatasetSnapshot:
    """Build a snapshot from ingested data.

    Args:
        data: Validated ingest data.

    Returns:
        The populated snapshot.

    Raises:
        PopulationError: If the data is inconsistent, e.g. duplicate names, relationships
            between unknown objects, or values for unknown keys.
    """
    object_classes = _build_object_classes(data.object_classes)
    relationship_classes = _build_relationship_classes(data.relationship_classes, object_classes)
    classes: dict[str, ClassLike] = {**object_classes}
    for name, relationship_class in relationship_classes.items():
        if name in classes:
            raise PopulationError(f"Class name {name} is used by both an object and a relationship class.")
        classes[name] = relationship_class
    parameters = _build_parameters(data.parameters, classes)
    snapshot = DatasetSnapshot(object_classes, relationship_classes, parameters)
    logger.info(
        "Built dataset snapshot",
        object_classes=len(object_classes),
        relationship_classes=len(relationship_classes),
        parameters=len(parameters),
    )
    return snapshot


class Dataset:
    """Holds the snapshot in use and replaces it atomically on repopulation.

    Readers call ``snapshot`` (or keep a reference to a snapshot they obtained earlier)
    without locking. Writers build the new snapshot first and only take the lock to
    swap the reference, so a failed repopulation leaves the previous snapshot in place.
    """

    def __init__(self, snapshot: Optional[DatasetSnapshot] = None):
        self._snapshot = snapshot
        self._lock = threading.Lock()
        self.version = 0 if snapshot is None else 1

    @property
    def snapshot(self) -> DatasetSnapshot:
        """The snapshot currently published.

        Raises:
            RuntimeError: If nothing was published yet.
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("No dataset snapshot has been published yet.")
        return snapshot

    def publish(self, snapshot: DatasetSnapshot) -> None:
        with self._lock:
            self._snapshot = snapshot
            self.version += 1
        logger.info("Published dataset snapshot", version=self.version)

    def repopulate(self, data: DatasetData) -> DatasetSnapshot:
        """Build a snapshot from ``data`` and publish it.

        Raises:
            PopulationError: If the data is inconsistent. The previous snapshot stays published.
        """
        try:
            snapshot = build_snapshot(data)
        except PopulationError as e:
            logger.error("Repopulation failed, keeping previous snapshot", version=self.version, error=str(e))
            raise
        self.publish(snapshot)
        return snapshot
