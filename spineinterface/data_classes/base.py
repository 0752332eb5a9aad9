# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

"""Base model for the ingest data classes, with YAML reading and writing."""

from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, ConfigDict


class BaseConfig(BaseModel):
    """Base model for data read from and written to YAML files.

    Unknown fields are rejected so that typos in hand-written dataset files surface
    as validation errors instead of silently missing data.
    """

    model_config = ConfigDict(
        protected_namespaces=(),
        extra="forbid",
        arbitrary_types_allowed=False,
    )

    @classmethod
    def read_yaml(cls, path: Path) -> Self:
        """Create an instance from a YAML file.

        Args:
            path: Path to the YAML file to read.

        Returns:
            A validated instance populated with the file contents.
        """
        with Path(path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def write_yaml(self, path: Path) -> None:
        """Write this instance to a YAML file.

        Args:
            path: Destination path for the YAML file (will be overwritten).
        """
        with Path(path).open("w", encoding="utf-8") as f:
            yaml.dump(self.model_dump(mode="json"), f, allow_unicode=True, sort_keys=False)
