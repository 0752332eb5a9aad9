# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0
"""Specifies the dataclasses a dataset snapshot is populated from."""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError, model_validator

from spineinterface.data_classes.base import BaseConfig
from spineinterface.parameters.values import (
    ArrayValue,
    MapValue,
    ScalarValue,
    TimeSeriesValue,
    Value,
)
from spineinterface.time_slice import TimeSlice

ScalarData = Union[bool, int, float, str, None]
Bound = Union[datetime, int, float]
MapKey = Union[bool, datetime, int, float, str]

_DATETIME = TypeAdapter(datetime)


class ArrayData(BaseConfig):
    type: Literal["array"] = "array"
    data: list[ScalarData] = Field(..., description="The array elements, addressed by 0-based index.")


class TimeSeriesEntryData(BaseConfig):
    start: Bound = Field(..., description="Inclusive start of the time slice.")
    end: Bound = Field(..., description="Exclusive end of the time slice.")
    duration: Optional[float] = Field(
        None, description="Optional duration weight of the slice. Defaults to its length."
    )
    value: "ValueData"


class TimeSeriesData(BaseConfig):
    type: Literal["time_series"] = "time_series"
    data: list[TimeSeriesEntryData] = Field(..., description="Entries, one per time slice.")
    default: Optional["ValueData"] = Field(
        None, description="Value that applies at all times none of the entries covers."
    )


class MapData(BaseConfig):
    type: Literal["map"] = "map"
    index_type: Optional[Literal["date_time"]] = Field(
        None,
        description="Set to 'date_time' when the keys are datetimes, so that keys written as ISO strings "
        "are read back as datetimes. Other keys keep the type they are given in.",
    )
    data: list[tuple[MapKey, "ValueData"]] = Field(..., description="Ordered (key, value) pairs.")

    @model_validator(mode="after")
    def parse_date_time_keys(self) -> "MapData":
        """Convert the keys to datetimes when ``index_type`` is 'date_time'.

        Raises:
            ValueError: If a key cannot be read as a datetime.
        """
        if self.index_type == "date_time":
            try:
                self.data = [(_DATETIME.validate_python(k), v) for k, v in self.data]
            except ValidationError as e:
                raise ValueError(f"Map keys must be datetimes when index_type is 'date_time': {e}") from e
        return self


ValueData = Union[
    Annotated[Union[ArrayData, TimeSeriesData, MapData], Field(discriminator="type")],
    ScalarData,
]

TimeSeriesEntryData.model_rebuild()
TimeSeriesData.model_rebuild()
MapData.model_rebuild()


def value_from_data(data: ValueData) -> Value:
    """Turn an ingested value into a ``Value``.

    Raises:
        InvalidIntervalError: If a time series entry has its start after its end.
        ValueError: If a time series repeats a slice or a map repeats a key.
    """
    if isinstance(data, ArrayData):
        return ArrayValue(tuple(data.data))
    if isinstance(data, TimeSeriesData):
        return TimeSeriesValue(
            tuple(
                (TimeSlice(entry.start, entry.end, entry.duration), value_from_data(entry.value))
                for entry in data.data
            ),
            default=value_from_data(data.default) if data.default is not None else None,
        )
    if isinstance(data, MapData):
        return MapValue(tuple((k, value_from_data(v)) for k, v in data.data))
    return ScalarValue(data)


def value_to_data(value: Value) -> ValueData:
    """Inverse of ``value_from_data``."""
    if isinstance(value, ArrayValue):
        return ArrayData(data=list(value.values))
    if isinstance(value, TimeSeriesValue):
        return TimeSeriesData(
            data=[
                TimeSeriesEntryData(start=t.start, end=t.end, duration=t.duration, value=value_to_data(v))
                for t, v in value.entries
            ],
            default=value_to_data(value.default) if value.default is not None else None,
        )
    if isinstance(value, MapValue):
        keys = [k for k, _ in value.entries]
        is_date_time = [isinstance(k, datetime) for k in keys]
        if any(is_date_time) and not all(is_date_time):
            raise ValueError(f"Cannot write a map that mixes datetime and other keys: {keys}.")
        return MapData(
            index_type="date_time" if keys and all(is_date_time) else None,
            data=[(k, value_to_data(v)) for k, v in value.entries],
        )
    return value.value


class ObjectClassData(BaseConfig):
    """An object class and the names of its objects."""

    name: str = Field(..., description="Name of the object class, e.g. 'node'.")
    objects: list[str] = Field(default_factory=list, description="Names of the objects in the class.")


class RelationshipClassData(BaseConfig):
    """A relationship class, its member classes and its relationships."""

    name: str = Field(..., description="Name of the relationship class, e.g. 'node__commodity'.")
    object_classes: list[str] = Field(..., description="Names of the member object classes, in order.")
    relationships: list[list[str]] = Field(
        default_factory=list,
        description="One list of object names per relationship, in member class order.",
    )
    dimension_names: Optional[list[str]] = Field(
        None,
        description="Names of the dimensions. Defaults to the member class names, suffixed with "
        "their position where a class appears more than once.",
    )


class ParameterValueData(BaseConfig):
    """The value of a parameter for one object or relationship."""

    entities: Union[str, list[str]] = Field(
        ..., description="Object name, or list of object names for a relationship."
    )
    value: ValueData


class ParameterData(BaseConfig):
    """A parameter definition on one class and its values there.

    A parameter defined on several classes is given once per class.
    """

    name: str = Field(..., description="Name of the parameter, e.g. 'demand'.")
    class_name: str = Field(..., description="Object or relationship class the parameter is defined on.")
    default_value: Optional[ValueData] = Field(
        None,
        description="Value for every member of the class without an explicit value. "
        "When unset those members have no value.",
    )
    values: list[ParameterValueData] = Field(default_factory=list)


class DatasetData(BaseConfig):
    """Everything a snapshot is built from."""

    object_classes: list[ObjectClassData] = Field(default_factory=list)
    relationship_classes: list[RelationshipClassData] = Field(default_factory=list)
    parameters: list[ParameterData] = Field(default_factory=list)
