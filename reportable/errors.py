'''
Errors raised while projecting records into report rows.

Every error aborts the whole projection; there is no partial or best-effort mode.
Exceptions raised by a record's own data layer (e.g., SQLAlchemy errors during
relationship resolution) are not wrapped and reach the caller unchanged.
'''


class ReportableError(Exception):
    pass


class UnknownOperation(ReportableError, AttributeError):
    '''
    A requested method name is not defined (or not callable) on a record.
    '''
    def __init__(self, record, name):
        self.record = record
        self.name   = name
        super().__init__(
            f'Method "{name}" is not defined on record type "{record.type_name}"'
        )


class UnknownRelationship(ReportableError, KeyError):
    '''
    A requested relationship name is not declared for a record.
    '''
    def __init__(self, record, name):
        self.record = record
        self.name   = name
        super().__init__(
            f'Relationship "{name}" is not declared on record type "{record.type_name}"'
        )

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class InvalidOptions(ReportableError, ValueError):
    pass
