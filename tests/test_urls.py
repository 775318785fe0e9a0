from urllib.parse import parse_qs, urlsplit

import pytest

from wattpad import urls


def _query(url):
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


def test_story_by_id_keeps_fields_selector_readable():
    url = urls.story_by_id(336166598)
    assert url == 'https://www.wattpad.com/api/v3/stories/336166598?fields=' + urls.STORY_DETAIL_FIELDS


def test_part_by_id_nests_story_fields_under_group():
    url = urls.part_by_id(1321853334)
    assert urlsplit(url).path == '/api/v4/parts/1321853334'
    assert _query(url)['fields'] == 'text_url,group(' + urls.STORY_DETAIL_FIELDS + ')'


def test_search_stories_encodes_query():
    url = urls.search_stories('love & war', mature=True, limit=5)
    assert urlsplit(url).path == '/v4/search/stories'
    assert 'love%20%26%20war' in url
    q = _query(url)
    assert q['query'] == 'love & war'
    assert q['mature'] == 'true'
    assert q['limit'] == '5'
    assert q['fields'] == urls.STORY_SEARCH_FIELDS


def test_search_users_and_topics():
    q = _query(urls.search_users('jane', limit=10, offset=20))
    assert (q['query'], q['limit'], q['offset']) == ('jane', '10', '20')
    topics = urls.browse_topics(2)
    assert urlsplit(topics).path == '/v5/browse/topics'
    assert _query(topics)['language'] == '2'


def test_base_url_override():
    url = urls.story_by_id(1, base_url='http://localhost:8080/')
    assert url.startswith('http://localhost:8080/api/v3/stories/1?')


def test_part_text_resolves_relative_and_keeps_absolute():
    assert urls.part_text('/apiv2/?m=storytext&id=1') == 'https://www.wattpad.com/apiv2/?m=storytext&id=1'
    absolute = 'https://www.wattpad.com/apiv2/?m=storytext&id=2'
    assert urls.part_text(absolute) == absolute


@pytest.mark.parametrize('value', ['', '   '])
def test_part_text_rejects_empty(value):
    with pytest.raises(ValueError):
        urls.part_text(value)
