# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Exporting parameter values, as a table or back to the ingest format."""

from collections.abc import Iterable
from pathlib import Path
from typing import Optional

import pandas as pd

from spineinterface.classes.object_class import ObjectClass
from spineinterface.data_classes.dataset import (
    DatasetData,
    ObjectClassData,
    ParameterData,
    ParameterValueData,
    RelationshipClassData,
    value_to_data,
)
from spineinterface.logging.logger_factory import get_logger
from spineinterface.parameters.parameter import Parameter
from spineinterface.snapshot import DatasetSnapshot

FRAME_COLUMNS = ["parameter", "class_name", "entities", "index", "value"]

logger = get_logger(__name__)


def parameters_to_frame(parameters: Iterable[Parameter]) -> pd.DataFrame:
    """Flatten parameter values into one row per scalar leaf.

    Args:
        parameters: The parameters to export.

    Returns:
        DataFrame with columns ``parameter``, ``class_name``, ``entities`` (tuple of entity
        names), ``index`` (tuple of sub-indices leading to the leaf: array positions, time
        slices and map keys; empty for scalars) and ``value``.
    """
    rows = []
    for parameter in parameters:
        for class_ in parameter.classes:
            for key, value in parameter.values(class_.name).items():
                entities = (key.name,) if isinstance(class_, ObjectClass) else tuple(e.name for e in key)
                for path, leaf in value.leaves():
                    rows.append((parameter.name, class_.name, entities, path, leaf))
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def snapshot_to_data(snapshot: DatasetSnapshot, parameter_names: Optional[Iterable[str]] = None) -> DatasetData:
    """Convert a snapshot back to ingest data.

    Args:
        snapshot: The snapshot to convert.
        parameter_names: Parameters to include. Defaults to all of them.
    """
    if parameter_names is None:
        parameters = snapshot.parameters
    else:
        parameters = tuple(snapshot.parameter(name) for name in parameter_names)
    parameter_data = []
    for parameter in parameters:
        for class_ in parameter.classes:
            values = []
            for key, value in parameter.values(class_.name).items():
                entities = key.name if isinstance(class_, ObjectClass) else [e.name for e in key]
                values.append(ParameterValueData(entities=entities, value=value_to_data(value)))
            parameter_data.append(ParameterData(name=parameter.name, class_name=class_.name, values=values))
    return DatasetData(
        object_classes=[
            ObjectClassData(name=oc.name, objects=[o.name for o in oc]) for oc in snapshot.object_classes
        ],
        relationship_classes=[
            RelationshipClassData(
                name=rc.name,
                object_classes=list(rc.object_class_names),
                relationships=[[e.name for e in key] for key in rc],
                dimension_names=list(rc.dimensions),
            )
            for rc in snapshot.relationship_classes
        ],
        parameters=parameter_data,
    )


def write_parameters(
    snapshot: DatasetSnapshot, path: Path, parameter_names: Optional[Iterable[str]] = None
) -> None:
    """Write the snapshot's classes and the selected parameters to a YAML file.

    The file can be read back with ``DatasetData.read_yaml`` and built into an equal snapshot.
    """
    data = snapshot_to_data(snapshot, parameter_names)
    data.write_yaml(path)
    logger.info("Wrote parameters", path=str(path), parameters=sorted({p.name for p in data.parameters}))
