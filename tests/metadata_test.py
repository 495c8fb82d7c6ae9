import pytest
import yaml

from pelicanpost.metadata import ParsedDocument, dump_yaml, parse, serialize


POST = """Title: test article
Date: 2025-07-16
Slug: test-article
Status: draft
Tags: vscode, pelican
Category: Articles
Summary: My test summary

# Test Article

This is the content of the test article.

## Section 1

Some more content here."""


def test_parse_valid_post():
    result = parse(POST)
    assert result.metadata == {
        'title': 'test article',
        'date': '2025-07-16',
        'slug': 'test-article',
        'status': 'draft',
        'tags': ['vscode', 'pelican'],
        'category': 'Articles',
        'summary': 'My test summary',
    }
    assert list(result.metadata) == ['title', 'date', 'slug', 'status', 'tags', 'category', 'summary']
    assert result.body.startswith('# Test Article\n\nThis is the content')
    assert result.body.endswith('Some more content here.')


def test_quoted_values():
    text = '''Title: "Test Article with Quotes"
Date: 2025-07-16
Summary: "This is a summary with: colons and spaces"

Content here.'''
    result = parse(text)
    assert result.metadata == {
        'title': 'Test Article with Quotes',
        'date': '2025-07-16',
        'summary': 'This is a summary with: colons and spaces',
    }
    assert result.body == 'Content here.'


@pytest.mark.parametrize('line, expected', [
    ("Title: 'single'", 'single'),
    ("Title: 'A \"B'", 'A "B'),
    ('Title: ""quoted twice""', '"quoted twice"'),
    ('Title: "mismatched\'', '"mismatched\''),
    ('Title: "open', '"open'),
])
def test_strips_one_matching_pair_of_quotes(line, expected):
    assert parse(line).metadata['title'] == expected


def test_tags_always_a_list():
    assert parse('Tags: a, b').metadata['tags'] == ['a', 'b']
    assert parse('Tags: solo').metadata['tags'] == ['solo']
    assert parse('Tags: a,,b').metadata['tags'] == ['a', '', 'b']
    assert parse('Tags: "x, y"').metadata['tags'] == ['x', 'y']


def test_other_fields_with_commas_stay_scalar():
    assert parse('Category: a, b').metadata['category'] == 'a, b'


def test_empty_values_are_omitted():
    text = '''Title: test article
Tags:
Summary: ""
Slug:
Date: 2025-07-16

Content here.'''
    result = parse(text)
    assert result.metadata == {'title': 'test article', 'date': '2025-07-16'}
    assert 'tags' not in result.metadata


def test_keys_are_lowercased():
    assert parse('CreatedAt: today').metadata == {'createdat': 'today'}


def test_no_blank_line_means_empty_body():
    result = parse('Title: x\nDate: 2025-07-16')
    assert result.metadata == {'title': 'x', 'date': '2025-07-16'}
    assert result.body == ''


def test_whitespace_only_line_ends_header():
    result = parse('Title: x\n   \t\nDate: 2025-07-16')
    assert result.metadata == {'title': 'x'}
    assert result.body == 'Date: 2025-07-16'


def test_text_without_header_is_all_body():
    text = '# Just a regular markdown file\n\nThis has no metadata.'
    assert parse(text) == ParsedDocument({}, text)


def test_leading_blank_line_ends_empty_header():
    result = parse('\nTitle: x')
    assert result.metadata == {}
    assert result.body == 'Title: x'


def test_malformed_line_inside_header_is_skipped():
    result = parse('Title: x\n---\nnot a header line\nDate: 2025-07-16\n\nBody')
    assert result.metadata == {'title': 'x', 'date': '2025-07-16'}
    assert result.body == 'Body'


def test_key_must_be_letters_only():
    result = parse('Title2: x\n\nBody')
    assert result.metadata == {}
    assert result.body == 'Title2: x\n\nBody'


def test_empty_text():
    assert parse('') == ParsedDocument({}, '')


def test_prose_looking_like_a_header_is_misread():
    result = parse('Note: this is just a sentence.\nMore prose.')
    assert result.metadata == {'note': 'this is just a sentence.'}


def test_serialize():
    metadata = {
        'title': 'My Post',
        'date': '2025-07-16',
        'summary': 'a:b',
        'tags': ['x', 'y'],
        'slug': None,
    }
    assert serialize(metadata, 'Body\n') == (
        'Title: "My Post"\n'
        'Date: 2025-07-16\n'
        'Summary: "a:b"\n'
        'Tags: x, y\n'
        '\n'
        'Body\n'
    )


def test_serialize_only_capitalizes_first_letter():
    assert serialize({'createdat': 'now'}, '') == 'Createdat: now\n\n'


def test_serialize_empty_metadata():
    assert serialize({}, 'Body') == '\n\nBody'


def test_reserialized_fields_survive():
    text = "TITLE: 'quoted'\nTags: a , b\nbogus line\n\nBody\n\n\nmore"
    first = parse(text)
    second = parse(serialize(first.metadata, first.body))
    assert second.metadata == first.metadata == {'title': 'quoted', 'tags': ['a', 'b']}
    assert second.body == first.body


def test_dump_yaml_keeps_order():
    dumped = dump_yaml({'title': 'T', 'tags': ['a', 'b']})
    assert dumped.startswith('title: T\n')
    assert yaml.safe_load(dumped) == {'title': 'T', 'tags': ['a', 'b']}


def test_empty_header_lines_before_prose_stay_in_body():
    text = 'Tags:\n# Heading\n\nBody'
    assert parse(text) == ParsedDocument({}, text)
