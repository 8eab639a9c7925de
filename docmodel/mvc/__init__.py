"""docmodel core software architecture.

docmodel follows the `Model-View-Controller (MVC)`_ architectural pattern,
minus the view.  A :any:`Model` subclass declares a record type backed by a
table of a document storage; its instances are single rows.  A
:any:`Controller` operates on a whole table.

A model declares which attributes callers may write (``fillables``), which are
kept out of serialization (``hidden``), how values are transformed on read and
write (``getters``, ``setters``) and how it relates to other models
(``relations``).  Relations are built with :any:`belongs_to`, :any:`has_one`
and :any:`has_many`, and name their target by class or class name.

Examples:

    *Belongs to*
    ::

        class Brewery(Model):
            fillables = ['address']

        class Beer(Model):
            fillables = ['color', 'ibu', 'brewery_id']
            relations = {'brewery': belongs_to('Brewery')}

    A Beer row holds the identifier of its Brewery in ``brewery_id``, the
    default foreign key of Brewery.  ``beer.get('brewery')`` looks up the
    Brewery row with that identifier and returns None if there is none.

    *One to many*
    ::

        class Brewery(Model):
            fillables = ['address']
            relations = {'brews': has_many('Beer')}

    ``brewery.get('brews')`` returns every Beer whose ``brewery_id`` is the
    Brewery's identifier, in storage order.  Relations are queried on every
    access, never cached.

    *Foreign key override*
    ::

        class Beer(Model):
            fillables = ['color', 'ibu', 'origin']
            relations = {'origin_brewery': belongs_to('Brewery', key='origin')}

    Example data::

        {
         "breweries": [{"id": 1, "address": "4615 Hollins Ferry Rd, Halethorpe, MD 21227"}],
         "beers": [{"id": 10, "origin": 1, "color": "gold", "ibu": 45},
                   {"id": 12, "origin": 1, "color": "dark", "ibu": 15}]
        }

.. _Model-View-Controller (MVC): https://en.wikipedia.org/wiki/Model-view-controller
"""
