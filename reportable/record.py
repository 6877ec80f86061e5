'''
Record is the base class for anything that can be projected into report rows. It only
asks four things of a subtype, making up the capability interface the projection engine
depends on:

- ``attributes(only, exclude)``: the record's own scalar fields
- ``invoke(name)``: call a named zero-argument method
- ``resolve(name)``: related records behind a named relationship
- ``type_name``: identifier used to qualify field names of related records

Relationship registration syntax:

.. code-block:: python

    class Book(Record):
        def __init__(self, title, author):
            self.title = title
            self._author = author

        @relationship
        def author(self):
            return self._author

        @relationship('reviews')
        def _fetch_reviews(self):
            ...
'''
import re
import inspect
import logging
from collections.abc import Iterable, Mapping

from reportable.errors import UnknownOperation, UnknownRelationship


logger = logging.getLogger(__name__)

_INTERFACE = frozenset(('attributes', 'invoke', 'resolve'))

def relationship(name=None):
    '''
    Relationship decorator for Record subtypes.

    Dynamic decorator; can be used as ``relationship`` without any arguments, in which
    case the method name is the relationship name, or with an explicit name. The
    decorated method takes no arguments and returns ``None``, a single record, or an
    iterable of records.
    '''
    func = None
    if inspect.isfunction(name):
        func = name
        name = func.__name__

    def decorator(f):
        f._relationship_name = name if name is not None else f.__name__
        return f

    if func is not None:
        return decorator(func)

    return decorator

def underscore(name: str) -> str:
    '''
    Convert a CamelCase class name to snake_case, e.g., ``BookAuthor`` -> ``book_author``.
    '''
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
    return name.lower()

class RelationshipRegistryMeta(type):
    '''
    Metaclass handling relationship registry at the class level.
    '''
    def __new__(cls, name, bases, attrs):
        relationship_registry = {}

        def register_relationship(attr_name, method):
            if hasattr(method, '_relationship_name'):
                relationship_registry[method._relationship_name] = attr_name

        # add registered superclass methods; iterate over bases, then each base's chain
        # down (reversed) so subclasses overwrite their parents
        for base in bases:
            for _class in reversed(base.mro()):
                methods = inspect.getmembers(_class, predicate=inspect.isfunction)
                for attr_name, method in methods:
                    register_relationship(attr_name, method)

        for attr_name, attr_value in attrs.items():
            register_relationship(attr_name, attr_value)

        attrs['relationship_registry'] = relationship_registry

        return super().__new__(cls, name, bases, attrs)

class Record(metaclass=RelationshipRegistryMeta):
    '''
    Projectable record base class.

    Subtypes may set ``type_name`` as a class attribute; otherwise the underscored class
    name is used.
    '''
    type_name: str = 'record'

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if 'type_name' not in cls.__dict__:
            cls.type_name = underscore(cls.__name__)

    def attributes(self, only=None, exclude=None) -> dict:
        '''
        Return the record's scalar fields, by default all public instance variables in
        definition order. ``only`` restricts output to the named fields that exist on the
        record; otherwise ``exclude`` drops the named fields.
        '''
        attrs = {k: v for k, v in vars(self).items() if not k.startswith('_')}
        return select_attributes(attrs, only, exclude)

    def invoke(self, name: str):
        if (
            name.startswith('_')
            or name in _INTERFACE
            or name in self.relationship_registry
        ):
            raise UnknownOperation(self, name)

        method = getattr(self, name, None)
        if not callable(method):
            raise UnknownOperation(self, name)

        return method()

    def resolve(self, name: str) -> list:
        attr_name = self.relationship_registry.get(name)
        if attr_name is None:
            raise UnknownRelationship(self, name)

        # dispatch by attribute so plain subclass overrides are honored
        related = related_list(getattr(self, attr_name)())
        logger.debug(
            f'Relationship "{name}" on "{self.type_name}" resolved {len(related)} record(s)'
        )

        return related

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.attributes()!r}>'


class MappingRecord(Record):
    '''
    Dictionary-backed record for ad-hoc data.

    Parameters:
        type_name:     identifier used for qualification
        attributes:    field name to value mapping
        relationships: relationship name to a record, a list of records, or a
                       zero-argument callable producing either
        methods:       method name to a callable taking the record
    '''
    def __init__(
        self,
        type_name     : str,
        attributes    : Mapping,
        relationships : Mapping | None = None,
        methods       : Mapping | None = None,
    ):
        self.type_name      = type_name
        self._attributes    = dict(attributes)
        self._relationships = dict(relationships or {})
        self._methods       = dict(methods or {})

    def attributes(self, only=None, exclude=None) -> dict:
        return select_attributes(self._attributes, only, exclude)

    def invoke(self, name: str):
        method = self._methods.get(name)
        if method is None:
            raise UnknownOperation(self, name)

        return method(self)

    def resolve(self, name: str) -> list:
        if name not in self._relationships:
            raise UnknownRelationship(self, name)

        related = self._relationships[name]
        if callable(related) and not isinstance(related, Record):
            related = related()

        return related_list(related)


def select_attributes(attrs: Mapping, only=None, exclude=None) -> dict:
    if only is not None:
        return {k: attrs[k] for k in only if k in attrs}

    if exclude is not None:
        exclude = set(exclude)
        return {k: v for k, v in attrs.items() if k not in exclude}

    return dict(attrs)

def related_list(related) -> list:
    '''
    Normalize a relationship's return value to a list of records.
    '''
    if related is None:
        return []

    if isinstance(related, Record):
        return [related]

    if isinstance(related, Iterable) and not isinstance(related, (str, bytes, Mapping)):
        return [r for r in related if r is not None]

    raise TypeError(
        f'Relationship resolved to {type(related).__name__}; expected records'
    )
