'''
SQL accessor

Read access to SQLAlchemy tables for SQL-backed records. Only plain constrained SELECTs
are exposed; building and optimizing queries is left to the caller.
'''
import logging

import sqlalchemy as sa

from reportable.util import db


logger = logging.getLogger(__name__)


class SQLAccessor:
    '''
    Access wrapper for SELECT queries returning rows as dictionaries.

    Parameters:
        engine: SQLAlchemy engine to use for queries
    '''
    def __init__(self, engine: sa.Engine):
        self.engine = engine

    def select(
        self,
        table    : sa.Table,
        where    = None,
        order_by = None,
        limit    = 0,
    ) -> list[dict]:
        '''
        Perform a SELECT query against the provided table.

        Parameters:
            where:    SQLAlchemy boolean clause; all rows if not provided
            order_by: column or list of columns to order results by (can use
                      <col>.desc() to order by descending)
            limit:    maximum number of rows; no limit if not positive

        Returns:
            list of column name-indexed dicts
        '''
        if where is None:
            where = sa.true()

        stmt = sa.select(table).where(where)

        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                stmt = stmt.order_by(*order_by)
            else:
                stmt = stmt.order_by(order_by)

        if limit > 0:
            stmt = stmt.limit(limit)

        rows = db.sa_exec_dicts(self.engine, stmt)
        logger.debug(f'Selected {len(rows)} row(s) from table "{table.name}"')

        return rows
