# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0
"""Object and relationship classes with filtered querying."""

from .object_class import ObjectClass
from .relationship_class import RelationshipClass

__all__ = ["ObjectClass", "RelationshipClass"]
