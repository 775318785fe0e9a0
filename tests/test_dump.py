import json

from wattpad.dump import dump_story
from wattpad.html import HTMLContent, HTMLStyle, HTMLWord
from wattpad.models import RenderedPage, Story


def test_dump_story_writes_json_and_text(tmp_path, story_json):
    story = Story.from_json(story_json)
    part = story.parts[1]
    page = RenderedPage(part.title, [
        HTMLContent.text([HTMLWord('Hi', HTMLStyle.BOLD)]),
        HTMLContent.image('https://img/1.png'),
    ])
    out = dump_story(dump_dir=tmp_path / 'dumps', story=story, rendered=[(part, page)], meta={'run': 1})

    assert out.name == f"story_{story.id}.json"
    data = json.loads(out.read_text(encoding='utf-8'))
    assert data['story']['title'] == 'Wounded Love'
    assert data['story']['last_published_part']['create_date'] == '2023-04-01T12:30:00'
    assert data['parts_count'] == 2
    assert data['meta'] == {'run': 1}
    blocks = data['rendered'][0]['blocks']
    assert blocks[0] == {'type': 'text', 'words': [{'data': 'Hi', 'style': 'bold'}]}
    assert blocks[1] == {'type': 'image', 'url': 'https://img/1.png'}
    text = (tmp_path / 'dumps' / f"story_{story.id}_part_{part.id}.txt").read_text(encoding='utf-8')
    assert text == 'Hi\n\n[Image: https://img/1.png]'
