'''
Table

Rectangular container for flattened rows. Columns are kept in the order given, and any
row lacking a column holds ``None`` for it. Rendering to output formats is left to
whatever consumes the table.
'''
from collections.abc import Iterable, Mapping


class Table:
    def __init__(
        self,
        data         : Iterable[Mapping] = (),
        column_names : Iterable[str] | None = None,
    ):
        '''
        Parameters:
            data:         flat rows (field name to value mappings)
            column_names: column order; defaults to the first-seen order of row keys
        '''
        self._data = [dict(row) for row in data]

        if column_names is None:
            column_names = {}
            for row in self._data:
                column_names.update(dict.fromkeys(row))

        self.column_names = list(column_names)

    @property
    def rows(self) -> list[list]:
        return [
            [row.get(name) for name in self.column_names]
            for row in self._data
        ]

    def to_dicts(self) -> list[dict]:
        return [
            {name: row.get(name) for name in self.column_names}
            for row in self._data
        ]

    def column(self, name: str) -> list:
        if name not in self.column_names:
            raise KeyError(name)

        return [row.get(name) for row in self._data]

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f'<Table {len(self)} rows x {len(self.column_names)} columns>'
