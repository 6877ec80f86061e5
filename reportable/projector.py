'''
Record projector

Turns a single record into one flat field mapping: the record's selected attributes,
optionally qualified with its type name, followed by any requested method values.
Relationships are not followed here; see ``reportable.flattener``.
'''
import logging
from collections.abc import Mapping

from reportable.record import Record
from reportable.options import ProjectionOptions


logger = logging.getLogger(__name__)

def project(
    record  : Record,
    options : ProjectionOptions | Mapping | None = None,
    columns = None,
) -> dict:
    '''
    Project one record into a flat row.

    Parameters:
        record:  record to project
        options: projection options; ``include`` is ignored
        columns: optional ``ColumnSet`` receiving every produced field name

    Raises:
        UnknownOperation: if a requested method is not defined on the record
    '''
    options = ProjectionOptions.coerce(options)

    only = options.only
    exclude = options.exclude if only is None else None
    attrs = record.attributes(only=only, exclude=exclude)

    if options.qualify_attribute_names:
        prefix = record.type_name
        attrs = {f'{prefix}.{name}': value for name, value in attrs.items()}

    # method fields are never qualified and may shadow an attribute
    for method in options.methods or ():
        attrs[method] = record.invoke(method)

    if columns is not None:
        columns.update(attrs.keys())

    return attrs
