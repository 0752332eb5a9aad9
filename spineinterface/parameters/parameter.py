# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Parameters and their resolution to a single value."""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Optional, Union

from spineinterface.classes.filters import DimensionFilter, is_collection, normalize_filter
from spineinterface.classes.object_class import ObjectClass
from spineinterface.classes.relationship_class import RelationshipClass
from spineinterface.entities import Anything, Entity, RelationshipKey, anything
from spineinterface.enums import TemporalAggregation, ValueKind
from spineinterface.exceptions import (
    AmbiguousTemporalMatchError,
    IndexOutOfRangeError,
    InvalidFilterError,
    MapKeyNotFoundError,
    ParameterNotSpecifiedError,
    PopulationError,
    UnknownClassError,
    UnknownEntityError,
)
from spineinterface.parameters.values import Value, from_python
from spineinterface.settings import Settings
from spineinterface.time_slice import TimeSlice

ClassLike = Union[ObjectClass, RelationshipClass]
Key = Union[Entity, RelationshipKey]


def split_sub_index(sub_index: Any) -> tuple[Optional[int], Optional[TimeSlice], tuple]:
    """Split a single sub-index into its ``(i, t, inds)`` form.

    An ``int`` is an array index, a ``TimeSlice`` a time, a string a single map key
    and any other sequence a path of map keys.
    """
    if sub_index is None:
        return None, None, ()
    if isinstance(sub_index, TimeSlice):
        return None, sub_index, ()
    if isinstance(sub_index, int) and not isinstance(sub_index, bool):
        return sub_index, None, ()
    if isinstance(sub_index, str):
        return None, None, (sub_index,)
    if isinstance(sub_index, Sequence):
        return None, None, tuple(sub_index)
    raise TypeError(f"Unsupported sub-index {sub_index!r}.")


class Parameter:
    """A parameter defined on one or more object or relationship classes.

    Values are stored sparsely per class and key. A key with no stored value means the
    parameter is not specified for it, which is different from a stored ``None``.

    Example:
        >>> from spineinterface.classes import ObjectClass
        >>> film = ObjectClass("film", ["Her", "Joker"])
        >>> release_year = Parameter("release_year")
        >>> release_year.set_values(film, {"Joker": 2019, "Her": 2013})
        >>> release_year(film="Joker")
        2019
        >>> release_year.resolve({"film": "Her"})
        2013
    """

    def __init__(self, name: str):
        self.name = name
        self._classes: dict[str, ClassLike] = {}
        self._values: dict[str, dict[Key, Value]] = {}

    def __repr__(self) -> str:
        return f"Parameter({self.name!r}, classes={list(self._classes)})"

    @property
    def classes(self) -> tuple[ClassLike, ...]:
        return tuple(self._classes.values())

    def values(self, class_name: str) -> dict[Key, Value]:
        """The stored values for one class, by key.

        Raises:
            UnknownClassError: If the parameter is not defined on ``class_name``.
        """
        try:
            return dict(self._values[class_name])
        except KeyError:
            raise UnknownClassError(class_name, available=list(self._classes)) from None

    def set_values(self, class_: ClassLike, values: Mapping[Any, Any]) -> None:
        """Define the parameter on ``class_`` with the given values. Only used while populating.

        Args:
            class_: The object or relationship class.
            values: Key to value mapping. Keys are entities or names for object classes, and
                relationship keys or sequences of entities/names for relationship classes.
                Values are ``Value`` instances or plain Python objects (see ``from_python``).

        Raises:
            PopulationError: If a key is not a member of the class, or is given twice.
            ValueError: If a list or tuple value holds anything but scalars.
        """
        stored = self._values.setdefault(class_.name, {})
        self._classes[class_.name] = class_
        class_.add_parameter(self)
        for raw_key, raw_value in values.items():
            key = self._member_key(class_, raw_key)
            if key in stored:
                raise PopulationError(f"Duplicate value of parameter {self.name} for {key!r} in {class_.name}.")
            stored[key] = from_python(raw_value)

    def _member_key(self, class_: ClassLike, raw_key: Any) -> Key:
        try:
            if isinstance(class_, ObjectClass):
                return class_.entity(raw_key)
            if isinstance(raw_key, Mapping):
                key = class_.key(raw_key)
            else:
                key = class_.key(dict(zip(class_.dimensions, raw_key)))
        except (UnknownEntityError, UnknownClassError, TypeError) as e:
            raise PopulationError(f"Invalid key {raw_key!r} for parameter {self.name} in {class_.name}: {e}") from e
        if key not in class_:
            raise PopulationError(
                f"Parameter {self.name} has a value for {key!r}, which is not a relationship of {class_.name}."
            )
        return key

    def _find(self, filters: Mapping[str, Any]) -> tuple[ClassLike, Key, Optional[Value]]:
        for dimension, value in filters.items():
            if isinstance(value, Anything) or is_collection(value):
                raise InvalidFilterError(
                    f"Parameter {self.name} needs a single entity for {dimension}, got {value!r}."
                )
        candidates = [c for c in self._classes.values() if set(c.dimensions) == set(filters)]
        if not candidates:
            raise UnknownClassError(
                f"{', '.join(filters) or '(no arguments)'} for parameter {self.name}",
                available=[", ".join(c.dimensions) for c in self._classes.values()],
            )
        first = None
        for class_ in candidates:
            if isinstance(class_, ObjectClass):
                key = class_.entity(filters[class_.name])
            else:
                key = class_.key(filters)
            value = self._values[class_.name].get(key)
            if value is not None:
                return class_, key, value
            if first is None:
                first = (class_, key, None)
        return first

    def resolve(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        sub_index: Any = None,
        *,
        strict: Optional[bool] = None,
        aggregate: TemporalAggregation = TemporalAggregation.RAISE,
    ) -> Any:
        """The value of this parameter for one object or relationship.

        Args:
            filters: One entity (or entity name) per dimension of exactly one of the classes
                the parameter is defined on.
            sub_index: An array index (``int``), a ``TimeSlice`` for time-varying values, or a
                sequence of keys to navigate nested maps. Ignored when it does not apply.
            strict: Whether to raise or return None if the parameter is not specified for
                the given arguments. Defaults to ``Settings.default_strict``.
            aggregate: What to do when several time series entries apply equally well.

        Returns:
            The scalar value, or the ``Value`` itself if it is not scalar and no applicable
            sub-index was given.

        Raises:
            ParameterNotSpecifiedError: If strict and there is no value.
            InvalidFilterError: If a filter is ``anything`` or a collection.
            UnknownClassError: If the filter dimensions match none of the parameter's classes.
            UnknownEntityError: If a filter entity is not a member of its class.
            IndexOutOfRangeError: If an array index is out of bounds.
            MapKeyNotFoundError: If a map key is absent.
            AmbiguousTemporalMatchError: If several time series entries apply equally well.
        """
        i, t, inds = split_sub_index(sub_index)
        return self._resolve(dict(filters or {}), i, t, inds, strict, aggregate)

    def __call__(
        self,
        i: Optional[int] = None,
        t: Optional[TimeSlice] = None,
        inds: Any = None,
        _strict: Optional[bool] = None,
        _aggregate: TemporalAggregation = TemporalAggregation.RAISE,
        **filters: Any,
    ) -> Any:
        """Shorthand for ``resolve`` taking the entities as keyword arguments.

        ``i``, ``t`` and ``inds`` can be combined to navigate nested values; a tuple for
        ``inds`` navigates nested maps.
        """
        if inds is None:
            inds = ()
        elif not isinstance(inds, (tuple, list)):
            inds = (inds,)
        return self._resolve(filters, i, t, tuple(inds), _strict, _aggregate)

    def _resolve(
        self,
        filters: dict[str, Any],
        i: Optional[int],
        t: Optional[TimeSlice],
        inds: tuple,
        strict: Optional[bool],
        aggregate: TemporalAggregation,
    ) -> Any:
        if strict is None:
            strict = Settings.default_strict
        _, _, value = self._find(filters)
        if value is None:
            return self._not_specified(filters, strict)
        path: list = []
        while True:
            if value.kind is ValueKind.SCALAR:
                return value.value
            elif value.kind is ValueKind.ARRAY:
                if i is None:
                    return value
                if not 0 <= i < len(value):
                    raise IndexOutOfRangeError(self.name, i, len(value))
                return value.values[i]
            elif value.kind is ValueKind.TIME_SERIES:
                if t is None:
                    return value
                selected = value.select(t)
                if len(selected) == 1:
                    value = selected[0][1]
                elif not selected:
                    if value.default is None:
                        return self._not_specified({**filters, "t": t}, strict)
                    value = value.default
                else:
                    mean = None
                    if aggregate is TemporalAggregation.MEAN:
                        mean = value.weighted_mean(t, selected)
                    if mean is None:
                        raise AmbiguousTemporalMatchError(self.name, t, [s for s, _ in selected])
                    return mean
            elif value.kind is ValueKind.MAP:
                if not inds:
                    return value
                key, inds = inds[0], inds[1:]
                if key not in value:
                    raise MapKeyNotFoundError(self.name, key, path)
                path.append(key)
                value = value.get(key)
            else:
                raise TypeError(f"Unknown value kind {value.kind!r}.")

    def _not_specified(self, arguments: Mapping[str, Any], strict: bool) -> None:
        if strict:
            raise ParameterNotSpecifiedError(self.name, arguments)
        return None

    def indices(self, filters: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "ParameterIndices":
        """An iterable over all objects and relationships where the value of this parameter is not None.

        Args:
            filters: For each dimension, an entity (or its name), a collection of entities, or
                ``anything``. Classes that lack a filtered dimension are skipped.
            **kwargs: Filters given as keyword arguments.

        Raises:
            UnknownClassError: If a filtered dimension belongs to none of the parameter's classes.
            UnknownEntityError: If a filter names an entity that is not a member.
        """
        return ParameterIndices(self, {**(filters or {}), **kwargs})


class ParameterIndices:
    """Restartable lazy iterable over the keys where a parameter has a non-null value.

    Filters are validated when the iterable is created; keys are produced on iteration,
    so iterating twice walks the values twice.
    """

    def __init__(self, parameter: Parameter, filters: Mapping[str, Any]):
        self.parameter = parameter
        known = {d for c in parameter.classes for d in c.dimensions}
        for dimension in filters:
            if dimension not in known:
                raise UnknownClassError(
                    f"{dimension} (dimension of parameter {parameter.name})", available=sorted(known)
                )
        self._plan: list[tuple[ClassLike, dict[str, DimensionFilter]]] = []
        for class_ in parameter.classes:
            if not set(filters) <= set(class_.dimensions):
                continue
            if isinstance(class_, ObjectClass):
                normalized = {class_.name: normalize_filter(filters.get(class_.name, anything), class_)}
            else:
                normalized = class_.normalize(filters)
            self._plan.append((class_, normalized))

    def __iter__(self) -> Iterator[Key]:
        for class_, normalized in self._plan:
            for key, value in self.parameter._values[class_.name].items():
                if value.kind is ValueKind.SCALAR and value.is_null:
                    continue
                if isinstance(class_, ObjectClass):
                    if normalized[class_.name].accepts(key):
                        yield key
                elif all(f.accepts(key[d]) for d, f in normalized.items()):
                    yield key

    def __repr__(self) -> str:
        return f"ParameterIndices({self.parameter.name!r})"
