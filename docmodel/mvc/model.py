"""
Model definition of the MVC architecture
"""

import uuid
from enum import Enum
from docmodel import logger, util
from docmodel.error import ModelError
from docmodel.cf.storage import strictly_equal
from docmodel.cf.storage.levels import default_storage
from docmodel.mvc.relation import Relation, RelationKind
from docmodel.mvc.controller import Controller

LOGGER = logger.get_logger(__name__)

# Suppress debugging messages in optimized code
if __debug__:
    _heavy_debug = LOGGER.debug  # pylint: disable=invalid-name
else:

    def _heavy_debug(*args, **kwargs):
        # pylint: disable=unused-argument
        pass


_REGISTRY = {}


class SetResult(Enum):
    """Outcome of a guarded attribute write, see :any:`Model.assign`."""
    APPLIED = 'applied'
    REJECTED_NOT_FILLABLE = 'rejected_not_fillable'


class Model():
    """The "M" in `MVC`_.

    A model instance is one row of the model's table: a dictionary of raw
    attributes and the set of attributes written since the last :any:`save`.
    Subclasses declare their attribute policy as class attributes:

    * ``fillables``: names that :any:`set`, :any:`fill` and :any:`update` may
      write. Writes to other names are ignored.
    * ``hidden``: names left out of :any:`to_object`.
    * ``getters`` / ``setters``: name to ``value -> value`` function, applied
      when reading (:any:`get`, :any:`where`, :any:`save`) and when writing
      (:any:`set`).
    * ``relations``: name to :any:`Relation`, see :py:mod:`docmodel.mvc.relation`.
    * ``auto_increment``: integer identifiers when True, UUID strings otherwise.
    * ``primary_key``: name of the identifier attribute.
    * ``__storage__``: storage holding the table, the configured default level
      when None.

    Example::

        class User(Model):
            fillables = ['name', 'email', 'password']
            hidden = ['password']
            setters = {'email': str.lower}
            relations = {'posts': has_many('Post')}

        user = User().set('name', 'Ann').save()
        User(user.id).get('name')  # 'Ann'

    .. _MVC: https://en.wikipedia.org/wiki/Model-view-controller
    """

    fillables = ()
    hidden = ()
    getters = {}
    setters = {}
    relations = {}
    auto_increment = True
    primary_key = 'id'

    name = 'Model'
    snake_case = 'model'
    table = 'models'
    foreign_key = 'model_id'

    __storage__ = None
    __controller__ = Controller

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.name = cls.__name__
        cls.snake_case = util.snake_case(cls.__name__)
        cls.foreign_key = f"{cls.snake_case}_id"
        if 'table' not in cls.__dict__:
            cls.table = util.pluralize(cls.snake_case)

        for attr, relation in cls.relations.items():
            if not isinstance(relation, Relation):
                raise ModelError(
                    cls, f"relation '{attr}' is not declared with belongs_to, "
                    "has_one or has_many")

        _REGISTRY[cls.__name__] = cls

    @staticmethod
    def registered(name):
        """Return the model class declared as `name`.

        Raises:
            ModelError: No model with that name was declared.
        """
        try:
            return _REGISTRY[name]
        except KeyError as err:
            raise ModelError(name, "no such model was declared") from err

    @classmethod
    def get_storage(cls):
        return cls.__storage__ or default_storage()

    @classmethod
    def controller(cls, storage=None):
        return cls.__controller__(cls, storage or cls.get_storage())

    def __init__(self, id=None, defaults=None, storage=None):  # pylint: disable=redefined-builtin
        """Create an instance, optionally loading or creating its row.

        Args:
            id: Primary key to look up. A dictionary is also filled into the
                instance before the lookup.
            defaults (dict): When given, a row is created with these
                attributes if the lookup fails, see :any:`find_or_create`.
            storage (AbstractStorage): Storage to use instead of the class'.
        """
        self._data = {}
        self._dirty = set()
        self.storage = storage or self.get_storage()

        if not self.has_store():
            self.create_store()

        if not id and not isinstance(id, dict):
            return

        if isinstance(id, dict):
            self.fill(id)

        if isinstance(defaults, dict):
            instance = self.find_or_create(id, defaults)
            if instance is not self:
                self._data = dict(instance._data)
                self._dirty = set(instance._dirty)
            return

        self.find(id)

    def __repr__(self):
        return f"<{self.name} {self.primary_key}={self.id!r}>"

    @property
    def id(self):
        return self.get_raw(self.primary_key)

    @property
    def next_id(self):
        """Identifier for the next inserted row.

        Auto-increment scans the table for the highest numeric identifier, it
        is only safe with a single writer.
        """
        if not self.auto_increment:
            return str(uuid.uuid4())

        ids = [
            row[self.primary_key]
            for row in self.storage.table(self.table)
            if isinstance(row.get(self.primary_key), (int, float))
            and not isinstance(row.get(self.primary_key), bool)
        ]

        if ids:
            return max(ids) + 1

        return 1

    @property
    def exists(self):
        """True if the instance has an identifier and its row is stored."""
        if not self.id:
            return False

        return self.storage.find_one(self.table,
                                     {self.primary_key: self.id}) is not None

    @property
    def dirty(self):
        return self.is_dirty()

    @property
    def object(self):
        return self.to_object()

    @property
    def attributes(self):
        return dict(self._data)

    def has_attribute(self, attr):
        return attr in self._data

    def has_relation(self, attr):
        return attr in self.relations

    def has_getter(self, attr):
        return attr in self.getters

    def has_setter(self, attr):
        return attr in self.setters

    def is_fillable(self, attr):
        return attr in self.fillables

    def is_hidden(self, attr):
        return attr in self.hidden

    def is_dirty(self, attr=None):
        if attr is not None:
            return attr in self._dirty

        return bool(self._dirty)

    def get_raw(self, attr):
        return self._data.get(attr)

    def set_raw(self, attr, value):
        self._data[attr] = value
        return self

    def set_dirty(self, attr):
        self._dirty.add(attr)
        return self

    def clear_dirty(self, attr=None):
        if attr is not None:
            self._dirty.discard(attr)
        else:
            self._dirty.clear()
        return self

    def hydrate(self, row):
        """Copy every attribute of a stored row, bypassing the fillable policy."""
        for attr, value in row.items():
            self.set_raw(attr, value)
        return self

    def get(self, attr):
        """Read an attribute or resolve a relation.

        Returns:
            The getter-transformed value of a present attribute, else the
            resolved relation named `attr`, else None.
        """
        if self.has_attribute(attr):
            if self.has_getter(attr):
                return self.getters[attr](self.get_raw(attr))

            return self.get_raw(attr)

        if self.has_relation(attr):
            return self.get_relation(attr)

        return None

    def get_relation(self, attr):
        """Resolve the relation declared as `attr`.

        Every call queries the storage again, results are not cached.

        Returns:
            Model: For ``BELONGS_TO`` and ``HAS_ONE``, the related instance or
            None if it does not exist.
            list: For ``HAS_MANY``, every related instance in storage order.
            None: When no relation is declared as `attr`.
        """
        relation = self.relations.get(attr)
        if relation is None:
            return None

        # Targets without a declared storage share the owner's
        target = relation.target()
        instance = target(storage=target.__storage__ or self.storage)

        if relation.kind is RelationKind.BELONGS_TO:
            instance = instance.find(
                self.get_raw(relation.key or target.foreign_key))

            if instance.exists:
                return instance
            return None

        # An unsaved instance has no rows pointing at it
        if relation.kind is RelationKind.HAS_ONE:
            if self.id is None:
                return None
            instance = instance.where({relation.key or self.foreign_key: self.id}, 1)

            if instance.exists:
                return instance
            return None

        if relation.kind is RelationKind.HAS_MANY:
            if self.id is None:
                return []
            instances = instance.where({relation.key or self.foreign_key: self.id})

            return [match for match in instances if match.exists]

        return None

    def assign(self, attr, value):
        """Write an attribute if the model allows it.

        The attribute is marked dirty even if `value` equals the current one.

        Returns:
            SetResult: APPLIED, or REJECTED_NOT_FILLABLE when `attr` is not in
            ``fillables``, in which case nothing changes.
        """
        if not self.is_fillable(attr):
            _heavy_debug("%s: ignoring write to non-fillable attribute '%s'",
                         self.name, attr)
            return SetResult.REJECTED_NOT_FILLABLE

        self.set_dirty(attr)

        if self.has_setter(attr):
            self.set_raw(attr, self.setters[attr](value))
        else:
            self.set_raw(attr, value)

        return SetResult.APPLIED

    def set(self, attr, value):
        self.assign(attr, value)
        return self

    def fill(self, data):
        for attr, value in data.items():
            self.set(attr, value)
        return self

    def has_store(self):
        return self.storage.has_table(self.table)

    def create_store(self):
        self.storage.create_table(self.table)
        return self

    def find(self, id):  # pylint: disable=redefined-builtin
        """Load the row whose primary key is `id`.

        The instance is returned whether a row matched or not, check
        :any:`exists`.
        """
        data = self.storage.find_one(self.table, {self.primary_key: id})

        if data is not None:
            self.hydrate(data)

        return self

    def find_or_create(self, id, defaults=None):  # pylint: disable=redefined-builtin
        """Load the row for `id`, or store a new one filled with `defaults`.

        The created row gets the next identifier of the table, which is not
        necessarily `id`.
        """
        instance = self.find(id)

        if instance.exists:
            return instance

        instance = self.__class__(storage=self.storage)

        instance.fill(defaults or {})
        instance.save()

        return instance

    def where(self, filters, limit=None):
        """Return the instances whose rows match every item of `filters`.

        A row matches when it has every filtered attribute and its value,
        transformed by the attribute's getter if any, equals the filter's.

        Args:
            filters (dict): Attribute values to match.
            limit (int): Maximum number of instances to return.

        Returns:
            list: All matches in storage order when no limit is given, at most
            `limit` of them otherwise.
            Model: The first match when `limit` is 1, or this very instance,
            unchanged, if nothing matched.
        """

        def _matches(row):
            for attr, value in filters.items():
                if attr not in row:
                    return False

                if self.has_getter(attr):
                    remote = self.getters[attr](row[attr])
                else:
                    remote = row[attr]

                if not strictly_equal(remote, value):
                    return False

            return True

        data = self.storage.filter(self.table, _matches)

        if isinstance(data, dict):
            return self.hydrate(data)

        instances = []
        for index, row in enumerate(data):
            if limit and index == limit:
                break

            instances.append(self.__class__(storage=self.storage).hydrate(row))

        if limit == 1:
            return instances[0] if instances else self

        return instances

    def update(self, attrs=None, value=None):
        """Set one attribute or a dictionary of attributes, then save."""
        if isinstance(attrs, str):
            self.set(attrs, value)
        elif isinstance(attrs, dict):
            self.fill(attrs)

        return self.save()

    def save(self):
        """Write the fillable attributes to the storage.

        Existing rows are merged with the fillable attributes present on the
        instance, other stored fields are left untouched. Otherwise the
        instance gets the next identifier and a new row is appended.
        """
        data = {
            fillable: self.get(fillable)
            for fillable in self.fillables if self.has_attribute(fillable)
        }

        if self.exists:
            self.storage.assign(self.table, {self.primary_key: self.id}, data)
            _heavy_debug("%s: updated row %s=%s", self.name, self.primary_key,
                         self.id)
        else:
            self.set_raw(self.primary_key, self.next_id)
            self.storage.push(self.table, {self.primary_key: self.id, **data})
            _heavy_debug("%s: inserted row %s=%s", self.name, self.primary_key,
                         self.id)

        self.clear_dirty()

        return self

    def delete(self):
        """Remove the instance's row from the storage.

        The attributes stay in memory, :any:`exists` becomes False.

        Returns:
            bool: True if a row was removed.
        """
        if not self.id:
            return False

        removed = self.storage.remove(self.table, {self.primary_key: self.id})
        _heavy_debug("%s: deleted row %s=%s", self.name, self.primary_key,
                     self.id)
        return bool(removed)

    def to_object(self):
        """Serialize the present attributes, hidden ones excluded."""
        return {
            attr: self.get(attr)
            for attr in self._data if not self.is_hidden(attr)
        }
