from __future__ import annotations
"""Story dump helper.

Writes a fetched story (and any rendered parts) to ``<dump_dir>/story_<id>.json``
plus one ``story_<id>_part_<part id>.txt`` per rendered part, for offline
reading and for diffing parser output between runs.
"""
import json
from dataclasses import asdict
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Iterable, Tuple

from .html import HTMLType
from .models import Part, RenderedPage, Story


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"not JSON serializable: {type(value).__name__}")


def _page_payload(part: Part, page: RenderedPage) -> dict:
    blocks = []
    for block in page.content_stack:
        if block.type is HTMLType.IMAGE:
            blocks.append({'type': 'image', 'url': block.image_url})
        else:
            blocks.append({
                'type': 'text',
                'words': [{'data': w.data, 'style': w.style.value} for w in block.words],
            })
    return {'part_id': part.id, 'title': page.title, 'blocks': blocks}


def dump_story(*, dump_dir: Path, story: Story, rendered: Iterable[Tuple[Part, RenderedPage]] = (),
               meta: dict | None = None, write_text: bool = True) -> Path:
    dump_dir = Path(dump_dir)
    dump_dir.mkdir(parents=True, exist_ok=True)
    pages = []
    for part, page in rendered:
        pages.append(_page_payload(part, page))
        if write_text:
            (dump_dir / f"story_{story.id}_part_{part.id}.txt").write_text(page.full_text, encoding='utf-8')
    payload = {
        'story': asdict(story),
        'fetched_at': datetime.now(UTC).isoformat(),
        'parts_count': len(story.parts),
        'rendered': pages,
        'meta': meta or {},
    }
    out_path = dump_dir / f"story_{story.id}.json"
    out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2, default=_json_default), encoding='utf-8')
    return out_path
