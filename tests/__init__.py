"""Unit test initializations and utility functions."""

import os
import sys
import shutil
import atexit
import tempfile
import unittest
from pathlib import Path

# Storage locations must be set before docmodel reads its configuration
_TEST_ROOT = tempfile.mkdtemp(prefix='docmodel-tests-')
atexit.register(shutil.rmtree, _TEST_ROOT, ignore_errors=True)
os.environ['__DOCMODEL_TEST__'] = '1'
os.environ['__DOCMODEL_USER_PREFIX__'] = os.path.join(_TEST_ROOT, 'user')
os.environ['STORAGE_PATH'] = os.path.join(_TEST_ROOT, 'project')

from docmodel import logger, config

ASSETS = Path(__file__).parent / "assets"
CONFIGURATION_FILE = ASSETS / "docmodel.yaml"

# Set the configuration to a specific testing version
config.update_configuration(
    config.Configuration.default()
    | config.Configuration.create_from_file(CONFIGURATION_FILE)
    | config.Configuration.create_from_environment())

from docmodel.cf.storage.levels import PROJECT_STORAGE, USER_STORAGE
from tests.models import MEMORY_STORAGE

TEST_ROOT = Path(_TEST_ROOT)


class TestCase(unittest.TestCase):
    """Base class for unit tests.

    Redirects the :any:`docmodel.logger` console handler to the unittest
    output and empties every table of the test storages after each test.
    """
    # Follow the :any:`unittest` code style.
    # pylint: disable=invalid-name

    @classmethod
    def setUpClass(cls):
        # Reset stdout logger handler to use buffered unittest stdout
        # pylint: disable=protected-access
        cls._orig_stream = logger._STDERR_HANDLER.stream
        logger._STDERR_HANDLER.stream = sys.stdout

        # Make sure the storage is clean before any test is performed
        cls.resetStorage()

    @classmethod
    def tearDownClass(cls):
        # Reset stdout logger handler to use original stdout
        # pylint: disable=protected-access
        logger._STDERR_HANDLER.stream = cls._orig_stream

    def tearDown(self):
        self.resetStorage()

    def assertRowEqual(self, row, expected):
        """Compare a stored row with a dictionary, ignoring key order."""
        self.assertIsNotNone(row)
        self.assertDictEqual(dict(row), expected)

    @classmethod
    def resetStorage(cls):
        for storage in (MEMORY_STORAGE, PROJECT_STORAGE, USER_STORAGE):
            storage.reload()
            for table in storage.tables():
                storage.purge(table_name=table)
