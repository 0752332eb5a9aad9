# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

import pytest

from test.unit.utils.data import TestData


@pytest.fixture
def movies():
    return TestData.movies()


@pytest.fixture
def energy():
    return TestData.energy()
