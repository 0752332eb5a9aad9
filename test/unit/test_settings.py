# SPDX-FileCopyrightText: 2019-2025 Contributors to the SpineInterface project
#
# SPDX-License-Identifier: MPL-2.0

import os
from unittest import TestCase, mock

from spineinterface.app_settings import AppSettings
from spineinterface.logging.logger_types import LoggerType


class TestAppSettings(TestCase):
    def test_defaults(self):
        # Act
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = AppSettings(_env_file=None)

        # Assert
        self.assertEqual(settings.logger_type, LoggerType.STRUCTLOG)
        self.assertEqual(settings.log_level, "INFO")
        self.assertTrue(settings.default_strict)

    def test_parsing_env(self):
        # Arrange
        env = {
            "SPINEINTERFACE_DEFAULT_STRICT": "false",
            "SPINEINTERFACE_LOGGER_TYPE": "logging",
            "SPINEINTERFACE_LOG_LEVEL": "DEBUG",
        }

        # Act
        with mock.patch.dict(os.environ, env):
            settings = AppSettings(_env_file=None)

        # Assert
        self.assertFalse(settings.default_strict)
        self.assertEqual(settings.logger_type, LoggerType.STANDARD)
        self.assertEqual(settings.log_level, "DEBUG")
