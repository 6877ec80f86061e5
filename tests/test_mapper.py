import pytest

from reportable import Mapper, Table, UnknownOperation

from setups import books


mapper = Mapper()
mapper.attach(books.Book, {'only': ['title'], 'include': {'author': {'only': ['name']}}})
mapper.attach(books.EBook, {'only': ['title', 'format']})

def test_mapper_get_options():
    assert mapper.get_options(books.Book).only == ('title',)
    assert mapper.get_options(books.EBook).only == ('title', 'format')
    assert not mapper.get_options(books.Author).has_report_options

def test_mapper_get_options_inherited():
    class PaperBook(books.Book):
        pass

    assert mapper.get_options(PaperBook) is mapper.get_options(books.Book)

def test_mapper_attach_rejects_non_records():
    with pytest.raises(TypeError):
        Mapper().attach(dict, {})

def test_mapper_report_table_defaults():
    table = mapper.report_table([books.dune(), books.dune_coauthored()])

    assert isinstance(table, Table)
    assert table.column_names == ['title', 'author.name']
    assert table.rows == [
        ['Dune', 'Herbert'],
        ['Dune', 'Herbert'],
        ['Dune', 'Anderson'],
    ]

def test_mapper_explicit_options_replace_defaults():
    rows, columns = mapper.report_data(books.dune(), {'methods': ['shout']})

    assert rows == [{'title': 'Dune', 'shout': 'DUNE'}]
    assert columns == ['title', 'shout']

def test_mapper_include_names():
    assert mapper.include_names(books.Book) == ['author']
    assert mapper.include_names(books.Book, {'include': ['reviews']}) == ['reviews']
    assert mapper.include_names(books.EBook) == []

def test_mapper_report_empty():
    rows, columns = mapper.report_data([])
    assert rows == []
    assert list(columns) == []

    assert len(mapper.report_table([])) == 0

def test_mapper_report_fills_missing_columns():
    table = mapper.report_table([books.dune(), books.Book('Emma')])

    assert table.rows == [['Dune', 'Herbert'], ['Emma', None]]

def test_mapper_errors_abort_report():
    with pytest.raises(UnknownOperation):
        mapper.report_table(books.dune(), {'methods': ['page_count']})
