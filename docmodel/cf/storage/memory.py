"""
In-memory storage, for tests and throwaway models.
"""

import copy
from typing import Dict, List
from docmodel.cf.storage import AbstractStorage


class MemoryStorage(AbstractStorage):
    """Storage that keeps its tables in the process memory.

    Writes are counted and snapshotted so tests can check what would have
    been persisted.

    Attributes:
        writes (int): Number of flushes performed.
        snapshot (dict): Deep copy of the tables at the last flush.
    """

    def __init__(self, name='memory', tables=None):
        super().__init__(name)
        self._initial = copy.deepcopy(tables) if tables else {}
        self.writes = 0
        self.snapshot = {}

    def _load(self) -> Dict[str, List[dict]]:
        return copy.deepcopy(self._initial)

    def _flush(self, database: Dict[str, List[dict]]):
        self.writes += 1
        self.snapshot = copy.deepcopy(database)

    def reload(self):
        """Go back to the last flushed state."""
        self._initial = copy.deepcopy(self.snapshot) if self.writes else self._initial
        super().reload()
