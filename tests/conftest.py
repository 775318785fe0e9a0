import copy
import json

import pytest

from wattpad.config import WattpadClientConfig


STORY_JSON = {
    'id': 336166598,
    'title': 'Wounded Love',
    'description': 'A story about second chances.',
    'url': 'https://www.wattpad.com/story/336166598-wounded-love',
    'cover': 'https://img.wattpad.com/cover/336166598-256-k1.jpg',
    'user': {
        'name': 'Jane Doe',
        'username': 'janedoe',
        'avatar': 'https://img.wattpad.com/useravatar/janedoe.128.jpg',
    },
    'isPaywalled': False,
    'lastPublishedPart': {
        'id': 1321853999,
        'createDate': '2023-04-01T12:30:00Z',
    },
    'parts': [
        {'id': 1321853334, 'title': "Author's Note", 'text_url': {'text': 'https://www.wattpad.com/apiv2/?m=storytext&id=1321853334'}},
        {'id': 1321853999, 'title': 'Chapter 1', 'text_url': {'text': '/apiv2/?m=storytext&id=1321853999'}},
    ],
    'tags': ['romance', 5, 'drama'],
}

PART_HTML = (
    '<p data-p-id="a1">It was <b>cold</b> that   night.</p>'
    '<p>no id, skipped</p>'
    '<p data-p-id="a2"><img src="/img/scene.png"></p>'
)


class FakeResponse:

    def __init__(self, status_code=200, text='', reason='OK'):
        self.status_code = status_code
        self.text = text
        self.reason = reason
        self.encoding = None


class FakeSession:
    """Stands in for requests.Session; maps URL -> FakeResponse or exception."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self.closed = False

    def add_json(self, url, payload, status_code=200):
        self.responses[url] = FakeResponse(status_code, json.dumps(payload))

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        resp = self.responses[url]
        if isinstance(resp, Exception):
            raise resp
        return resp

    def close(self):
        self.closed = True


@pytest.fixture
def story_json():
    return copy.deepcopy(STORY_JSON)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def no_cache_config():
    return WattpadClientConfig(use_cache=False, page_delay=0.0)


@pytest.fixture
def cache_config(tmp_path):
    return WattpadClientConfig(use_cache=True, cache_dir=str(tmp_path / 'cache'), page_delay=0.0)
