'''
Mapper

Registration layer attaching default projection options to record types, and the entry
point for building report tables from them.

Example:

.. code-block:: python

    mapper = Mapper()
    mapper.attach(Book, {'only': ['title'], 'include': {'author': {'only': ['name']}}})

    table = mapper.report_table(books)

Defaults are only consulted when a call passes no report options (``only``, ``except``,
``methods`` or ``include``) of its own; explicit options always replace them entirely.
Defaults are merged once, for the root records' type, before flattening begins. Related
records are projected with the options nested under the relationship.
'''
import logging
from collections.abc import Mapping

from reportable.table import Table
from reportable.record import Record
from reportable.options import ProjectionOptions
from reportable.flattener import ColumnSet, flatten


logger = logging.getLogger(__name__)


class Mapper:
    '''
    Holds default projection options per record type. Attach types during setup; report
    calls only read the registry.
    '''
    def __init__(self):
        self.type_options: dict[type[Record], ProjectionOptions] = {}

    def attach(
        self,
        type_ref : type[Record],
        options  : ProjectionOptions | Mapping | None = None,
    ) -> None:
        '''
        Parameters:
            type_ref: Record subtype to register
            options:  default projection options for the type
        '''
        if not (isinstance(type_ref, type) and issubclass(type_ref, Record)):
            raise TypeError(f'Can only attach Record subtypes, got {type_ref!r}')

        self.type_options[type_ref] = ProjectionOptions.coerce(options)

    def get_options(self, type_ref: type[Record]) -> ProjectionOptions:
        '''
        Default options of the most specific attached class in ``type_ref``'s hierarchy.
        '''
        for _cls in type_ref.__mro__:
            if _cls in self.type_options:
                return self.type_options[_cls]

        return ProjectionOptions()

    def resolve_options(
        self,
        type_ref : type[Record],
        options  : ProjectionOptions | Mapping | None = None,
    ) -> ProjectionOptions:
        options = ProjectionOptions.coerce(options)
        return options.merge_defaults(self.get_options(type_ref))

    def include_names(
        self,
        type_ref : type[Record],
        options  : ProjectionOptions | Mapping | None = None,
    ) -> list[str]:
        '''
        Relationship names a report on ``type_ref`` will traverse at the top level,
        e.g., to let a data layer preload them.
        '''
        return self.resolve_options(type_ref, options).relationship_names()

    def report_data(
        self,
        records,
        options  : ProjectionOptions | Mapping | None = None,
        progress : bool = False,
    ) -> tuple[list[dict], ColumnSet]:
        '''
        Flatten records with options merged against the attached defaults of the root
        records' type.

        Parameters:
            records:  a single record or an ordered iterable of records of one type
            options:  call options; when they carry no report options, the type defaults
                      are used
            progress: show a progress bar over the root records
        '''
        if isinstance(records, Record):
            records = [records]
        else:
            records = list(records)

        if not records:
            return [], ColumnSet()

        type_ref = type(records[0])
        options = self.resolve_options(type_ref, options)

        rows, columns = flatten(records, options, progress=progress)
        logger.info(
            f'Report on {len(records)} "{records[0].type_name}" record(s) produced '
            f'{len(rows)} row(s) over {len(columns)} column(s)'
        )

        return rows, columns

    def report_table(
        self,
        records,
        options  : ProjectionOptions | Mapping | None = None,
        progress : bool = False,
    ) -> Table:
        rows, columns = self.report_data(records, options, progress=progress)
        return Table(data=rows, column_names=columns)
