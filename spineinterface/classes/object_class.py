# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Union

from spineinterface.classes.filters import (
    NO_DEFAULT,
    DimensionFilter,
    is_collection,
    normalize_filter,
)
from spineinterface.entities import Anything, Entity, anything
from spineinterface.exceptions import PopulationError, UnknownClassError, UnknownEntityError

if TYPE_CHECKING:
    from spineinterface.parameters.parameter import Parameter


class ObjectClass:
    """A named set of objects.

    The class is populated once and not mutated afterwards. Objects keep the order in
    which they were given.

    Example:
        >>> film = ObjectClass("film", ["Her", "Joker"])
        >>> film()
        [Entity('film', 'Her'), Entity('film', 'Joker')]
        >>> film("Her")
        Entity('film', 'Her')
    """

    def __init__(self, name: str, objects: Iterable[Union[Entity, str]] = ()):
        """Create the class and its member entities.

        Args:
            name: Name of the class.
            objects: Entities or entity names. Names are turned into entities of this class.

        Raises:
            PopulationError: On duplicate names, or entities that belong to another class.
        """
        self.name = name
        self._objects: dict[str, Entity] = {}
        self._parameters: dict[str, "Parameter"] = {}
        for obj in objects:
            if not isinstance(obj, Entity):
                obj = Entity(obj, name)
            elif obj.class_name != name:
                raise PopulationError(f"Object {obj!r} cannot be a member of class {name}.")
            if obj.name in self._objects:
                raise PopulationError(f"Duplicate object {obj.name} in class {name}.")
            self._objects[obj.name] = obj

    def __repr__(self) -> str:
        return f"ObjectClass({self.name!r}, n_objects={len(self)})"

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._objects.values())

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, Entity):
            return item.class_name == self.name and item.name in self._objects
        return isinstance(item, str) and item in self._objects

    @property
    def dimensions(self) -> tuple[str, ...]:
        return (self.name,)

    @property
    def objects(self) -> tuple[Entity, ...]:
        return tuple(self._objects.values())

    @property
    def parameters(self) -> dict[str, "Parameter"]:
        """Parameters defined on this class, by name."""
        return dict(self._parameters)

    def add_parameter(self, parameter: "Parameter") -> None:
        """Register a parameter defined on this class. Only used while populating."""
        self._parameters[parameter.name] = parameter

    def entity(self, value: Union[Entity, str]) -> Entity:
        """Return the member entity for an entity or an entity name.

        Raises:
            UnknownEntityError: If the entity is not a member of this class.
        """
        if isinstance(value, Entity):
            if value not in self:
                raise UnknownEntityError(self.name, value)
            return value
        try:
            return self._objects[value]
        except (KeyError, TypeError):
            raise UnknownEntityError(self.name, value) from None

    def select(self, dimension_filter: DimensionFilter) -> list[Entity]:
        """Members that pass a normalised filter, in insertion order."""
        if dimension_filter.is_wildcard:
            return list(self._objects.values())
        return [obj for obj in self._objects.values() if obj in dimension_filter.entities]

    def query(self, filter: Any = anything, *, default: Any = NO_DEFAULT, **parameter_filters: Any) -> Any:
        """An Array of Entity instances corresponding to the objects in this class.

        Args:
            filter: ``anything``, an entity (or its name) or a collection of entities to
                restrict the result to.
            default: Returned when no object passes the filters. Defaults to a new empty list.
            **parameter_filters: For each parameter defined on this class, the value (or a
                collection of values) an object's value must equal to be kept.

        Returns:
            The matching entities in insertion order, or ``default``.

        Raises:
            UnknownEntityError: If ``filter`` names an entity that is not a member.
            UnknownClassError: If a parameter filter names a parameter not defined on this class.
        """
        result = self.select(normalize_filter(filter, self))
        for parameter_name, wanted in parameter_filters.items():
            try:
                parameter = self._parameters[parameter_name]
            except KeyError:
                raise UnknownClassError(
                    f"{parameter_name} (parameter of {self.name})", available=list(self._parameters)
                ) from None
            accepted = list(wanted) if is_collection(wanted) else [wanted]
            result = [
                obj for obj in result if parameter.resolve({self.name: obj}, strict=False) in accepted
            ]
        if not result:
            return [] if default is NO_DEFAULT else default
        return result

    def __call__(
        self,
        name: Union[str, Entity, Anything, None] = None,
        _default: Any = NO_DEFAULT,
        **parameter_filters: Any,
    ) -> Any:
        """Shorthand: ``oc("x")`` returns the member named x, ``oc(**kw)`` queries."""
        if name is None or isinstance(name, Anything) or is_collection(name):
            return self.query(anything if name is None else name, default=_default, **parameter_filters)
        return self.entity(name)
