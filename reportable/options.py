'''
Projection options

Immutable description of what to pull out of a record and which relationships to follow.
Options can be written out as plain dictionaries, mirroring the keyword style commonly
used for report definitions:

.. code-block:: python

    {
        'only': ['title'],
        'methods': ['page_count'],
        'include': {
            'author': {'only': ['name']},
            'reviews': None,
        },
    }

and are normalized once at the call boundary with ``ProjectionOptions.coerce``. After
normalization, every selection is a tuple and ``include`` is an ordered tuple of
``(relationship, nested options | None)`` pairs, regardless of whether it was given as a
list of names or as a mapping.
'''
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Self

from reportable.errors import InvalidOptions


_OPTION_KEYS = {'only', 'except', 'exclude', 'methods', 'include', 'qualify_attribute_names'}


def _coerce_names(key: str, value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None

    if isinstance(value, str):
        return (value,)

    if isinstance(value, Iterable) and not isinstance(value, Mapping):
        names = tuple(value)
        for name in names:
            if not isinstance(name, str):
                raise InvalidOptions(
                    f'Option "{key}" expects attribute/method names, got {name!r}'
                )
        return names

    raise InvalidOptions(
        f'Option "{key}" expects a name or a sequence of names, got {type(value).__name__}'
    )


@dataclass(frozen=True)
class ProjectionOptions:
    '''
    Parameters:
        only:    attribute names to keep; takes precedence over ``exclude``
        exclude: attribute names to drop from the full attribute set (``except`` in
                 dictionary form)
        methods: names of zero-argument record methods to add as extra fields
        include: ordered ``(relationship, options | None)`` pairs to traverse
        qualify_attribute_names: prefix attribute fields with the record's type name
    '''
    only:    tuple[str, ...] | None = None
    exclude: tuple[str, ...] | None = None
    methods: tuple[str, ...] | None = None
    include: tuple[tuple[str, Self | None], ...] | None = None

    qualify_attribute_names: bool = field(default=False)

    @classmethod
    def coerce(cls, value: Self | Mapping | None) -> Self:
        '''
        Normalize user-provided options into a ``ProjectionOptions`` instance.

        Raises:
            InvalidOptions: on unknown keys or values of the wrong shape
        '''
        if value is None:
            return cls()

        if isinstance(value, cls):
            return value

        if not isinstance(value, Mapping):
            raise InvalidOptions(
                f'Projection options must be a mapping, got {type(value).__name__}'
            )

        unknown = set(value) - _OPTION_KEYS
        if unknown:
            raise InvalidOptions(f'Unknown projection option(s): {sorted(unknown)}')

        if 'except' in value and 'exclude' in value:
            raise InvalidOptions('Options "except" and "exclude" are aliases; pass only one')

        exclude_key = 'except' if 'except' in value else 'exclude'

        return cls(
            only    = _coerce_names('only', value.get('only')),
            exclude = _coerce_names(exclude_key, value.get(exclude_key)),
            methods = _coerce_names('methods', value.get('methods')),
            include = cls._coerce_include(value.get('include')),
            qualify_attribute_names = bool(value.get('qualify_attribute_names', False)),
        )

    @classmethod
    def _coerce_include(cls, include):
        if include is None:
            return None

        if isinstance(include, str):
            return ((include, None),)

        if isinstance(include, Mapping):
            pairs = []
            for name, nested in include.items():
                if not isinstance(name, str):
                    raise InvalidOptions(f'Relationship names must be strings, got {name!r}')

                pairs.append((name, None if nested is None else cls.coerce(nested)))
            return tuple(pairs)

        if isinstance(include, Iterable):
            return tuple((name, None) for name in _coerce_names('include', include))

        raise InvalidOptions(
            f'Option "include" expects relationship names or a mapping of relationship '
            f'options, got {type(include).__name__}'
        )

    @property
    def has_report_options(self) -> bool:
        return any(
            opt is not None
            for opt in (self.only, self.exclude, self.methods, self.include)
        )

    def attribute_options(self) -> Self:
        '''
        Options with relationship traversal removed, i.e., those relevant to a single
        record's own fields.
        '''
        return replace(self, include=None)

    def merge_defaults(self, defaults: Self | Mapping | None) -> Self:
        '''
        Fall back to ``defaults`` when these options carry no report options of their
        own. Explicit options always fully replace the defaults; they are never combined
        key by key.
        '''
        if self.has_report_options or defaults is None:
            return self

        defaults = ProjectionOptions.coerce(defaults)
        return replace(
            defaults,
            qualify_attribute_names=(
                self.qualify_attribute_names or defaults.qualify_attribute_names
            ),
        )

    def relationships(self) -> list[tuple[str, Self]]:
        '''
        Relationship names to traverse, in order, paired with the options each related
        record is projected with. Related records are always qualified.
        '''
        if self.include is None:
            return []

        return [
            (name, replace(nested or ProjectionOptions(), qualify_attribute_names=True))
            for name, nested in self.include
        ]

    def relationship_names(self) -> list[str]:
        return [name for name, _ in self.include or ()]
