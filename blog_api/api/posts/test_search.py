# blog_api/api/posts/test_search.py
import mongomock
import pytest

from blog_api.api.posts.search import build_filter, SEARCH_FIELDS


@pytest.fixture
def posts():
    collection = mongomock.MongoClient().db.posts
    collection.insert_many([
        {'_id': 1, 'title': 'Flask Tips', 'content': 'Blueprints keep routes tidy', 'category': 'Python'},
        {'_id': 2, 'title': 'Learning C++ fast', 'content': 'templates', 'category': 'cpp'},
        {'_id': 3, 'title': 'Gardening', 'content': 'Tomatoes and basil', 'category': 'outdoor'},
        {'_id': 4, 'title': 'Old post', 'content': 'written before categories existed'},
    ])
    return collection


def _ids(collection, search):
    return sorted(doc['_id'] for doc in collection.find(build_filter(search)))


@pytest.mark.parametrize('search', [None, '', '   '])
def test_blank_term_matches_everything(posts, search):
    assert build_filter(search) == {}
    assert _ids(posts, search) == [1, 2, 3, 4]


def test_filter_covers_title_content_and_category():
    clauses = build_filter('flask')['$or']
    assert [next(iter(clause)) for clause in clauses] == list(SEARCH_FIELDS)
    assert all(clause[field]['$options'] == 'i' for clause, field in zip(clauses, SEARCH_FIELDS))


@pytest.mark.parametrize('search, expected', [
    ('flask', [1]),        # title
    ('TIDY', [1]),         # content, different case
    ('pyth', [1]),         # category, partial word
    ('  tomatoes  ', [3]), # surrounding whitespace is ignored
    ('t', [1, 2, 3, 4]),
])
def test_substring_in_any_field_matches(posts, search, expected):
    assert _ids(posts, search) == expected


def test_non_matching_term(posts):
    assert _ids(posts, 'django') == []


def test_term_is_literal_not_a_pattern(posts):
    assert _ids(posts, '.*') == []
    assert _ids(posts, 'c++') == [2]


def test_missing_category_does_not_break_matching(posts):
    assert _ids(posts, 'categories') == [4]
