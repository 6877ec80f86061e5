'''
Graph flattener

Flattens a record and the records reachable through its requested relationships into a
list of flat rows. Each relationship is folded into the current rows in order:

- no related records: rows are carried forward unchanged
- N related records: every current row is merged with every row produced by the related
  records (existing-row-major cross product), so row counts multiply by the fan-out

Related records are flattened recursively with their own nested options, so
relationships may nest to any depth. When merged fields share a name, the related
record's value wins.

Columns are gathered into a ``ColumnSet`` created per call (or supplied by the caller),
never into shared state, so concurrent flattening of independent graphs is safe.
'''
import logging
from collections.abc import Iterable, Mapping

from tqdm.auto import tqdm

from reportable.record import Record
from reportable.options import ProjectionOptions
from reportable.projector import project


logger = logging.getLogger(__name__)


class ColumnSet:
    '''
    Ordered, append-only set of field names; first appearance order is preserved.
    '''
    def __init__(self, names: Iterable[str] = ()):
        self._names = {}
        self.update(names)

    def add(self, name: str) -> None:
        self._names.setdefault(name, None)

    def update(self, names: Iterable[str]) -> None:
        for name in names:
            self.add(name)

    def __contains__(self, name):
        return name in self._names

    def __iter__(self):
        return iter(self._names)

    def __len__(self):
        return len(self._names)

    def __eq__(self, other):
        if isinstance(other, ColumnSet):
            return list(self) == list(other)
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self):
        return f'ColumnSet({list(self)!r})'


def flatten(
    records,
    options  : ProjectionOptions | Mapping | None = None,
    columns  : ColumnSet | None = None,
    progress : bool = False,
) -> tuple[list[dict], ColumnSet]:
    '''
    Flatten one or more root records into rows.

    Parameters:
        records:  a single record or an ordered iterable of root records
        options:  projection options, including any ``include`` relationships
        columns:  column accumulator; a new one is created if not provided
        progress: show a progress bar over the root records

    Returns:
        rows for all roots (in root order) and the columns seen across all of them

    Raises:
        UnknownOperation:    a requested method is missing on some record
        UnknownRelationship: a requested relationship is not declared on some record
        InvalidOptions:      malformed options
    '''
    options = ProjectionOptions.coerce(options)
    if columns is None:
        columns = ColumnSet()

    if isinstance(records, Record):
        records = [records]

    rows = []
    for record in tqdm(records, desc='Flattening records', disable=not progress):
        rows.extend(_flatten_record(record, options, columns))

    logger.debug(f'Flattened records into {len(rows)} row(s), {len(columns)} column(s)')

    return rows, columns

def _flatten_record(
    record  : Record,
    options : ProjectionOptions,
    columns : ColumnSet,
) -> list[dict]:
    rows = [project(record, options.attribute_options(), columns)]

    for name, rel_options in options.relationships():
        related = record.resolve(name)

        if not related:
            logger.debug(
                f'No "{name}" records for "{record.type_name}"; carrying {len(rows)} row(s)'
            )
            continue

        related_rows = []
        for rel_record in related:
            related_rows.extend(_flatten_record(rel_record, rel_options, columns))

        rows = _cross_merge(rows, related_rows, columns)

    return rows

def _cross_merge(
    rows         : list[dict],
    related_rows : list[dict],
    columns      : ColumnSet,
) -> list[dict]:
    '''
    Merge every existing row with every related row, existing-row-major.
    '''
    merged = []
    for row in rows:
        for related_row in related_rows:
            merged_row = {**row, **related_row}
            columns.update(merged_row.keys())
            merged.append(merged_row)

    return merged
