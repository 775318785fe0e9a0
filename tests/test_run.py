import pytest

import run
from conftest import PART_HTML, FakeResponse
from wattpad import urls
from wattpad.client import WattpadClient
from wattpad.console import Console
from wattpad.models import Part, RenderedPage, Story
from wattpad.html import HTMLContent, HTMLWord


@pytest.fixture
def patched_client(monkeypatch, session):
    monkeypatch.setattr(run, 'setup_logging', lambda level: None)
    monkeypatch.setattr(run, 'WattpadClient', lambda config: WattpadClient(config, session=session))
    return session


def test_truncate():
    assert run.truncate(None, 5) == ''
    assert run.truncate('short', 5) == 'short'
    assert run.truncate('longer text', 6) == 'longer...'


def test_pick_part_skips_front_matter(story_json):
    story = Story.from_json(story_json)
    assert run.pick_part(story).title == 'Chapter 1'
    story.parts = [Part(1, 'Prologue'), Part(2, 'Aesthetics')]
    assert run.pick_part(story).id == 1
    story.parts = []
    assert run.pick_part(story) is None


def test_format_page():
    page = RenderedPage('One', [HTMLContent.text([HTMLWord(' hi ')]), HTMLContent.image('https://img/1.png')])
    assert run.format_page(page).splitlines() == [
        '--- START OF PART: One ---', 'hi', '', '[IMAGE: https://img/1.png]', '', '--- END OF PART ---',
    ]


def test_story_command_renders_first_chapter(patched_client, story_json, capsys, tmp_path):
    patched_client.add_json(urls.story_by_id(336166598), story_json)
    patched_client.responses['https://www.wattpad.com/apiv2/?m=storytext&id=1321853999'] = FakeResponse(200, PART_HTML)

    code = run.main(['--no-cache', 'story', '336166598', '--render', '--dump', str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert 'Title: Wounded Love' in out
    assert 'Author: Jane Doe (@janedoe)' in out
    assert "Rendering Part: 'Chapter 1'" in out
    assert 'It was cold that night.' in out
    assert '[IMAGE: https://www.wattpad.com/img/scene.png]' in out
    assert (tmp_path / 'story_336166598.json').is_file()


def test_missing_story_exits_with_error(patched_client):
    patched_client.responses[urls.story_by_id(1)] = FakeResponse(404, '', 'Not Found')
    assert run.main(['--no-cache', 'story', '1']) == 1


def test_clear_cache_command(patched_client, tmp_path):
    cache_dir = tmp_path / 'cache'
    cache_dir.mkdir()
    (cache_dir / 'abc.cache').write_text('x')
    assert run.main(['--cache-dir', str(cache_dir), 'clear-cache', '--yes']) == 0
    assert not (cache_dir / 'abc.cache').exists()


def test_dump_to_existing_file_exits_with_error(patched_client, story_json, tmp_path):
    patched_client.add_json(urls.story_by_id(336166598), story_json)
    target = tmp_path / 'file.txt'
    target.write_text('x')
    assert run.main(['--no-cache', 'story', '336166598', '--dump', str(target)]) == 1


def test_malformed_story_payload_exits_with_error(patched_client, story_json):
    story_json['parts'][0]['id'] = {'x': 1}
    patched_client.add_json(urls.story_by_id(336166598), story_json)
    assert run.main(['--no-cache', 'story', '336166598']) == 1


def test_interactive_accepts_story_id_zero(monkeypatch, session, no_cache_config, story_json, capsys):
    monkeypatch.setattr(Console, 'input_int', staticmethod(lambda prompt: 0))
    monkeypatch.setattr(Console, 'confirm', staticmethod(lambda prompt: False))
    session.add_json(urls.story_by_id(0), story_json)
    app = run.App(WattpadClient(no_cache_config, session=session))
    assert app.interactive(None) == 0
    assert session.calls == [urls.story_by_id(0)]
    assert 'Title: Wounded Love' in capsys.readouterr().out


def test_interactive_quit_fetches_nothing(monkeypatch, session, no_cache_config):
    monkeypatch.setattr(Console, 'input_int', staticmethod(lambda prompt: None))
    app = run.App(WattpadClient(no_cache_config, session=session))
    assert app.interactive(None) == 0
    assert session.calls == []
