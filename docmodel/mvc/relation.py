"""
Relation descriptors.

A model declares its relations as a mapping from attribute name to
:any:`Relation`::

    class Post(Model):
        fillables = ['title', 'user_id']
        relations = {
            'author': belongs_to('User', key='user_id'),
            'comments': has_many('Comment'),
        }

The foreign key lives on the declaring model for ``BELONGS_TO`` and on the
target model for ``HAS_ONE`` and ``HAS_MANY``.  When `key` is omitted it
defaults to the foreign key of the model *not* holding it: the target's for
``BELONGS_TO`` (``user_id`` above), the declaring model's otherwise
(``post_id`` on comments).
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union


class RelationKind(Enum):
    BELONGS_TO = 'belongsTo'
    HAS_ONE = 'hasOne'
    HAS_MANY = 'hasMany'


@dataclass(frozen=True)
class Relation:
    """Static relation declaration.

    Attributes:
        kind (RelationKind): Direction and cardinality of the relation.
        model: Target model class, or its class name.
        key (str): Foreign key name override.
    """
    kind: RelationKind
    model: Union[type, str]
    key: Optional[str] = None

    def target(self):
        """Resolve the target model class.

        Raises:
            ModelError: The target is named but no such model was declared.
        """
        if isinstance(self.model, str):
            from docmodel.mvc.model import Model
            return Model.registered(self.model)
        return self.model


def belongs_to(model, key=None):
    return Relation(RelationKind.BELONGS_TO, model, key)


def has_one(model, key=None):
    return Relation(RelationKind.HAS_ONE, model, key)


def has_many(model, key=None):
    return Relation(RelationKind.HAS_MANY, model, key)
