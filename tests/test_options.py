import pytest

from reportable import ProjectionOptions, InvalidOptions


def test_options_coerce_empty():
    options = ProjectionOptions.coerce(None)

    assert options == ProjectionOptions()
    assert not options.has_report_options
    assert options.relationships() == []

def test_options_coerce_names():
    options = ProjectionOptions.coerce({
        'only': 'title',
        'except': ['id'],
        'methods': ['shout', 'page_total'],
    })

    assert options.only == ('title',)
    assert options.exclude == ('id',)
    assert options.methods == ('shout', 'page_total')
    assert options.has_report_options

def test_options_passthrough():
    options = ProjectionOptions(only=('title',))
    assert ProjectionOptions.coerce(options) is options

def test_options_include_sequence():
    options = ProjectionOptions.coerce({'include': ['author', 'reviews']})

    assert options.relationship_names() == ['author', 'reviews']
    for name, nested in options.relationships():
        assert nested == ProjectionOptions(qualify_attribute_names=True)

def test_options_include_single_name():
    options = ProjectionOptions.coerce({'include': 'author'})
    assert options.relationship_names() == ['author']

def test_options_include_mapping():
    options = ProjectionOptions.coerce({
        'include': {
            'author': {'only': ['name'], 'include': ['agent']},
            'reviews': None,
        }
    })

    (author_name, author_opts), (review_name, review_opts) = options.relationships()

    assert author_name == 'author'
    assert author_opts.only == ('name',)
    assert author_opts.qualify_attribute_names
    assert author_opts.relationship_names() == ['agent']

    assert review_name == 'reviews'
    assert review_opts == ProjectionOptions(qualify_attribute_names=True)

@pytest.mark.parametrize('bad', [
    {'include': 5},
    {'include': {'author': 5}},
    {'include': {1: None}},
    {'only': 5},
    {'only': ['title', 3]},
    {'methods': {'a': 1}},
    {'columns': ['title']},
    {'except': ['a'], 'exclude': ['b']},
    ['only'],
])
def test_options_invalid(bad):
    with pytest.raises(InvalidOptions):
        ProjectionOptions.coerce(bad)

def test_options_merge_defaults():
    defaults = {'only': ['title'], 'include': ['author']}

    merged = ProjectionOptions.coerce(None).merge_defaults(defaults)
    assert merged.only == ('title',)
    assert merged.relationship_names() == ['author']

    # any explicit report option replaces the defaults entirely
    explicit = ProjectionOptions.coerce({'methods': ['shout']}).merge_defaults(defaults)
    assert explicit.only is None
    assert explicit.include is None
    assert explicit.methods == ('shout',)

    qualified = ProjectionOptions(qualify_attribute_names=True).merge_defaults(defaults)
    assert qualified.qualify_attribute_names
    assert qualified.only == ('title',)

def test_options_attribute_options():
    options = ProjectionOptions.coerce({'only': ['title'], 'include': ['author']})

    assert options.attribute_options().include is None
    assert options.attribute_options().only == ('title',)
