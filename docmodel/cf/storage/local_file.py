"""
JSON file storage.

All the tables of a storage level live in a single JSON object written at
``<prefix>/<filename>``::

    {
     "users": [{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bo"}],
     "posts": [{"id": 1, "user_id": 2, "title": "Hello"}]
    }

The prefix directory is created the first time the storage is accessed.
"""

import os
import json
import tempfile
from pathlib import Path
from typing import Dict, List, Union
from docmodel import logger, util, DEFAULT_STORAGE_FILENAME
from docmodel.cf.storage import AbstractStorage, StorageError

LOGGER = logger.get_logger(__name__)


class LocalFileStorage(AbstractStorage):
    """A storage level persisted as one JSON file on the local filesystem."""

    def __init__(self, name, prefix, filename=DEFAULT_STORAGE_FILENAME, indent=2):
        """Initialize the storage.

        Args:
            name (str): Name of the storage level.
            prefix (str): Directory holding the JSON file.
            filename (str): Name of the JSON file.
            indent (int): Indentation used when writing the file.
        """
        super().__init__(name)
        self._prefix = Path(prefix) if prefix else None
        self.filename = filename
        self.indent = indent

    @property
    def prefix(self) -> Path:
        return self._prefix

    @property
    def dbfile(self) -> Path:
        return Path(self.prefix, self.filename)

    def connect_filesystem(self):
        """Prepares the store filesystem for reading and writing."""
        if self.prefix is None:
            raise StorageError(f"No filesystem prefix set for {self.name} storage")
        if not util.mkdirp(self.prefix):
            raise StorageError(
                f"Failed to access {self.name} filesystem prefix '{self.prefix}'",
                "Check the permissions of the directory or set STORAGE_PATH")
        LOGGER.debug("Initialized %s filesystem prefix '%s'", self.name,
                     self.prefix)

    def _load(self) -> Dict[str, List[dict]]:
        self.connect_filesystem()
        if not self.dbfile.exists():
            return {}

        try:
            with open(self.dbfile, 'r', encoding='utf-8') as dbfile:
                contents = dbfile.read()
        except OSError as err:
            raise StorageError(
                f"Failed to read {self.name} storage '{self.dbfile}': {err}") from err

        if not contents.strip():
            return {}

        try:
            data = json.loads(contents)
        except json.JSONDecodeError as err:
            raise StorageError(
                f"Malformed {self.name} storage '{self.dbfile}': {err}",
                "Fix or remove the file to start from an empty storage") from err

        if not isinstance(data, dict):
            raise StorageError(
                f"Malformed {self.name} storage '{self.dbfile}': "
                f"expected an object of tables, got {type(data).__name__}")

        return data

    def _flush(self, database: Dict[str, List[dict]]):
        # The previous file stays intact until the new dump is complete
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile('w',
                                             encoding='utf-8',
                                             dir=self.prefix,
                                             prefix=f".{self.filename}.",
                                             delete=False) as tmp:
                tmp_path = tmp.name
                json.dump(database, tmp, indent=self.indent)
            os.replace(tmp_path, self.dbfile)
        except (OSError, TypeError, ValueError) as err:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(
                f"Failed to write {self.name} storage '{self.dbfile}': {err}") from err

    def destroy(self):
        """Forget the in-memory state and delete the storage file."""
        self.reload()
        if self.prefix and self.dbfile.exists():
            self.dbfile.unlink()

    def relocate(self, prefix: Union[str, Path]):
        """Point the storage at another directory, dropping the loaded state."""
        self.reload()
        self._prefix = Path(prefix)
