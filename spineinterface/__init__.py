# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("spineinterface")
except PackageNotFoundError:
    # package is not installed
    pass
