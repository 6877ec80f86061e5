'''
reportable projects graphs of records (a root record plus the records reachable through
named relationships) into flat, rectangular rows for reporting.

.. code-block:: python

    from reportable import flatten

    rows, columns = flatten(
        book,
        {'only': ['title'], 'include': {'author': {'only': ['name']}}},
    )
    # rows    -> [{'title': 'Dune', 'author.name': 'Herbert'}]
    # columns -> ['title', 'author.name']
'''
from reportable.errors    import ReportableError, UnknownOperation, UnknownRelationship, InvalidOptions
from reportable.options   import ProjectionOptions
from reportable.record    import Record, MappingRecord, relationship
from reportable.projector import project
from reportable.flattener import ColumnSet, flatten
from reportable.table     import Table
from reportable.mapper    import Mapper
