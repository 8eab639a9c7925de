"""
Controller definition of the MVC architecture
"""

from docmodel import logger

LOGGER = logger.get_logger(__name__)


class Controller():
    """The "C" in `MVC`_.

    Controllers are not bound to any particular row: they operate on the
    whole table of a model.  Get one with :any:`Model.controller`.

    Attributes:
        model (type): Model class.
        storage (AbstractStorage): Record storage.

    .. _MVC: https://en.wikipedia.org/wiki/Model-view-controller
    """

    def __init__(self, model_cls, storage):
        self.model = model_cls
        self.storage = storage

    def _instance(self):
        return self.model(storage=self.storage)

    def one(self, key):
        """Get a record.

        Args:
            key: Primary key of the record.

        Returns:
            Model: The model for the matching record or None if no such record exists.
        """
        instance = self._instance().find(key)
        return instance if instance.exists else None

    def all(self):
        """Get all records.

        Returns:
            list: Models for all records or an empty lists if no records exist.
        """
        return [
            self._instance().hydrate(row)
            for row in self.storage.table(self.model.table)
        ]

    def count(self):
        """Return the number of records.

        Returns:
            int: Effectively ``len(self.all())``
        """
        return self.storage.count(self.model.table)

    def where(self, filters, limit=None):
        """See :any:`Model.where`."""
        return self._instance().where(filters, limit)

    def exists(self, filters):
        """Check if a record exists.

        Args:
            filters (dict): Raw attribute values to match, getters are not applied.

        Returns:
            bool: True if a record matching `filters` exists, False otherwise.
        """
        return self.storage.find_one(self.model.table, filters) is not None

    def create(self, data):
        """Store a new record.

        Args:
            data (dict): Attributes to fill, non-fillable ones are ignored.

        Returns:
            Model: The newly created record.
        """
        return self._instance().fill(data).save()

    def delete(self, filters):
        """Delete every record whose raw attributes match `filters`.

        Returns:
            int: Number of deleted records.

        Raises:
            ValueError: `filters` is empty, which would match every record.
        """
        if not filters:
            raise ValueError("Refusing to delete with an empty filter")
        removed = self.storage.remove(self.model.table, filters)
        LOGGER.debug("%s: deleted %d record(s) matching %s", self.model.name,
                     removed, filters)
        return removed
