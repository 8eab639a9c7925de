"""Document storage.

A storage holds named tables, each table being an ordered list of flat rows
(dictionaries of JSON-serializable values).  :any:`AbstractStorage` implements
every table operation over an in-memory dictionary; subclasses only decide how
that dictionary is loaded and persisted.

Every mutating operation calls :any:`AbstractStorage.write`.  Inside a
``with storage:`` block the writes are deferred and performed once when the
outermost block exits::

    with USER_STORAGE as database:
        database.push('users', {'id': 1, 'name': 'Ann'})
        database.push('users', {'id': 2, 'name': 'Bo'})
    # users.json written once here
"""

from abc import ABCMeta, abstractmethod
from typing import Callable, Dict, List, Optional
from docmodel import logger
from docmodel.error import StorageError

LOGGER = logger.get_logger(__name__)

__all__ = ['AbstractStorage', 'StorageError', 'matches', 'strictly_equal']


def strictly_equal(lhs, rhs) -> bool:
    # True == 1 in Python, not in JSON
    return lhs == rhs and isinstance(lhs, bool) == isinstance(rhs, bool)


def matches(row: dict, matcher: dict) -> bool:
    """True if `row` holds every key of `matcher` with an equal value."""
    return all(key in row and strictly_equal(row[key], value)
               for key, value in matcher.items())


class AbstractStorage(metaclass=ABCMeta):
    """Abstract base class for document storage.

    Attributes:
        name (str): Name of the storage level, e.g. 'project'.
    """

    def __init__(self, name):
        self.name = name
        self._database = None
        self._transaction_count = 0
        self._pending_write = False

    def __str__(self):
        return self.name

    def __enter__(self):
        """Open a write batch. Nested blocks are flattened into the outermost one."""
        self._transaction_count += 1
        return self

    def __exit__(self, ex_type, value, traceback):
        self._transaction_count -= 1
        if self._transaction_count == 0 and self._pending_write:
            self._pending_write = False
            self._flush(self.database)
        return False

    @abstractmethod
    def _load(self) -> Dict[str, List[dict]]:
        """Return the tables held by the storage."""

    @abstractmethod
    def _flush(self, database: Dict[str, List[dict]]):
        """Persist `database` to the underlying medium."""

    @property
    def database(self) -> Dict[str, List[dict]]:
        if self._database is None:
            self._database = self._load()
        return self._database

    def reload(self):
        """Drop the in-memory state, the next access reads the medium again."""
        self._database = None
        self._pending_write = False

    def write(self):
        """Persist the in-memory state, or schedule it when batching."""
        if self._transaction_count:
            self._pending_write = True
            return
        self._flush(self.database)

    def has_table(self, table_name: str) -> bool:
        return table_name in self.database

    def create_table(self, table_name: str):
        """Initialize `table_name` to an empty table."""
        self.database[table_name] = []
        LOGGER.debug("%s: created table '%s'", self.name, table_name)
        self.write()

    def table(self, table_name: str) -> List[dict]:
        """The rows of `table_name`, in insertion order.

        The list is the storage's own: mutating it changes the in-memory state
        without persisting it.
        """
        return self.database.get(table_name, [])

    def tables(self) -> List[str]:
        return list(self.database)

    def count(self, table_name: str) -> int:
        return len(self.table(table_name))

    def find_one(self, table_name: str, matcher: dict) -> Optional[dict]:
        """Return the first row matching every item of `matcher`, or None."""
        for row in self.table(table_name):
            if matches(row, matcher):
                return row
        return None

    def filter(self, table_name: str,
               predicate: Callable[[dict], bool]) -> List[dict]:
        """Return all rows for which `predicate` is true, order preserved."""
        return [row for row in self.table(table_name) if predicate(row)]

    def push(self, table_name: str, row: dict) -> dict:
        """Append a copy of `row` to `table_name` and write."""
        stored = dict(row)
        self.database.setdefault(table_name, []).append(stored)
        self.write()
        return stored

    def assign(self, table_name: str, matcher: dict,
               partial: dict) -> Optional[dict]:
        """Shallow-merge `partial` onto the first row matching `matcher`.

        Returns:
            dict: The updated row, or None if no row matched. Nothing is
            written in the latter case.
        """
        row = self.find_one(table_name, matcher)
        if row is None:
            return None
        row.update(partial)
        self.write()
        return row

    def remove(self, table_name: str, matcher: dict) -> int:
        """Remove every row matching `matcher` and return how many went."""
        rows = self.table(table_name)
        kept = [row for row in rows if not matches(row, matcher)]
        removed = len(rows) - len(kept)
        if removed:
            self.database[table_name] = kept
            LOGGER.debug("%s: removed %d row(s) from '%s'", self.name,
                         removed, table_name)
            self.write()
        return removed

    def purge(self, table_name: str):
        """Delete every row of `table_name`, keeping the table."""
        self.database[table_name] = []
        self.write()
