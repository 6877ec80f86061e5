'''
SQL-backed records

Exposes rows of SQLAlchemy tables as records. Relationships and computed methods are
declared per table on an ``SQLSource``, which then hands out ``TableRecord`` instances:

.. code-block:: python

    source = SQLSource(engine)
    source.relate(book_table, 'author', author_table, local='author_id', remote='id')
    source.compute(book_table, 'shout', lambda r: r.row['title'].upper())

    books = source.find(book_table, order_by=book_table.c.id)
    rows, columns = flatten(books, {'include': ['author']})

Relationship rows are fetched when resolved, one SELECT per record and relationship.
Errors raised by SQLAlchemy are not wrapped.
'''
import logging
from typing import Callable, NamedTuple
from collections import defaultdict

import sqlalchemy as sa

from reportable.util import db
from reportable.record import Record, select_attributes
from reportable.accessors.sql import SQLAccessor


logger = logging.getLogger(__name__)


class TableRelationship(NamedTuple):
    target : sa.Table
    local  : str
    remote : str


class SQLSource:
    '''
    Declarations of relationships and computed methods over a set of tables, plus the
    accessor used to fetch their rows.

    Parameters:
        engine: SQLAlchemy engine the tables live in
    '''
    def __init__(self, engine: sa.Engine):
        self.accessor = SQLAccessor(engine)

        self.relationships: dict[sa.Table, dict[str, TableRelationship]] = defaultdict(dict)
        self.computed: dict[sa.Table, dict[str, Callable]] = defaultdict(dict)

    def relate(
        self,
        table  : sa.Table,
        name   : str,
        target : sa.Table,
        local  : str,
        remote : str,
    ) -> None:
        '''
        Declare relationship ``name`` on ``table``: the rows of ``target`` whose
        ``remote`` column equals the record's ``local`` column.
        '''
        if local not in table.c:
            raise ValueError(f'Column "{local}" not in table "{table.name}"')
        if remote not in target.c:
            raise ValueError(f'Column "{remote}" not in table "{target.name}"')

        self.relationships[table][name] = TableRelationship(target, local, remote)

    def compute(
        self,
        table : sa.Table,
        name  : str,
        func  : Callable[['TableRecord'], object],
    ) -> None:
        '''
        Declare a computed method ``name`` for records of ``table``; ``func`` receives
        the record.
        '''
        self.computed[table][name] = func

    def find(
        self,
        table    : sa.Table,
        where    = None,
        order_by = None,
        limit    = 0,
    ) -> list['TableRecord']:
        if order_by is None:
            order_by = db.primary_key_columns(table) or None

        rows = self.accessor.select(table, where=where, order_by=order_by, limit=limit)
        return [TableRecord(self, table, row) for row in rows]

    def related(self, record: 'TableRecord', name: str) -> list['TableRecord'] | None:
        '''
        Fetch related records, or ``None`` if ``name`` is not declared for the record's
        table.
        '''
        rel = self.relationships.get(record.table, {}).get(name)
        if rel is None:
            return None

        value = record.row.get(rel.local)
        if value is None:
            return []

        return self.find(rel.target, where=rel.target.c[rel.remote] == value)


class TableRecord(Record):
    '''
    Record over one table row. The type name is the table name.
    '''
    def __init__(self, source: SQLSource, table: sa.Table, row: dict):
        self.source = source
        self.table  = table
        self.row    = row

    @property
    def type_name(self):
        return self.table.name

    def attributes(self, only=None, exclude=None) -> dict:
        return select_attributes(self.row, only, exclude)

    def invoke(self, name: str):
        func = self.source.computed.get(self.table, {}).get(name)
        if func is None:
            return super().invoke(name)

        return func(self)

    def resolve(self, name: str) -> list[Record]:
        related = self.source.related(self, name)
        if related is None:
            # fall back to relationship methods declared on subclasses
            return super().resolve(name)

        logger.debug(
            f'Relationship "{name}" on "{self.type_name}" resolved {len(related)} row(s)'
        )
        return related
