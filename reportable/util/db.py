'''
Example usage for this file's utilities:

# execute a single SA statement, fetching rows as dictionaries
select_dicts = db.sa_exec_dicts(engine, sa.select(<table>))
'''
import sqlalchemy as sa


def result_dicts(results):
    '''
    Parse SQLAlchemy results into Python dicts, keyed by column name.
    '''
    return [dict(r) for r in results.mappings().all()]

def sa_exec_dicts(engine, stmt):
    '''
    Execute a statement and fetch all rows as dicts inside of the connect context; safe
    to access outside.
    '''
    with engine.connect() as conn:
        return result_dicts(conn.execute(stmt))

def primary_key_columns(table: sa.Table) -> list[sa.Column]:
    return list(table.primary_key.columns)
