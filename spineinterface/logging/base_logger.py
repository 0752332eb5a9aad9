# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from abc import ABC, abstractmethod
from typing import Any


class BaseLogger(ABC):
    """Logger interface shared by the snapshot builder and the query classes.

    Keyword arguments passed to the log methods are treated as structured context,
    e.g. ``logger.info("Snapshot published", n_parameters=12)``.
    """

    @abstractmethod
    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def info(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def exception(self, message: str, **kwargs: Any) -> None:
        pass

    @abstractmethod
    def bind(self, **kwargs: Any) -> "BaseLogger":
        """Return a logger that adds ``kwargs`` to every following statement."""
