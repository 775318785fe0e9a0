"""Command line demo for the Wattpad client.

Sub-commands:
    story <id> [--render] [--dump DIR]   story details, optionally render one part
    part <part id> [--render]            look up the story that owns a part
    search <query> [--limit N] [--pages N] [--mature]
    users <query> [--limit N] [--offset N]
    topics [--language ID]
    clear-cache

Without a sub-command the story id is asked for interactively.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from wattpad.client import WattpadClient
from wattpad.config import load_config
from wattpad.console import Console
from wattpad.constants import __title__, __version__
from wattpad.dump import dump_story
from wattpad.html import HTMLType
from wattpad.logger import Logger, setup_logging
from wattpad.models import Part, RenderedPage, Story


log = Logger.bind('run')

SKIP_TITLE_WORDS = ("author's note", "aesthetics", "prologue")
DESCRIPTION_PREVIEW = 150


def truncate(text: Optional[str], max_length: int) -> str:
    if not text:
        return ''
    if len(text) <= max_length:
        return text
    return text[:max_length] + '...'


def pick_part(story: Story) -> Optional[Part]:
    """First part that is not an author's note, aesthetics or prologue page."""
    if not story.parts:
        return None
    for part in story.parts:
        lower = part.title.lower()
        if not any(word in lower for word in SKIP_TITLE_WORDS):
            return part
    return story.parts[0]


def format_page(page: RenderedPage) -> str:
    lines = [f"--- START OF PART: {page.title} ---"]
    for block in page.content_stack:
        if block.type is HTMLType.TEXT:
            lines.append(block.sanitized_text.strip())
        else:
            lines.append(f"[IMAGE: {block.image_url}]")
        lines.append('')
    lines.append('--- END OF PART ---')
    return '\n'.join(lines)


class App:

    def __init__(self, client: WattpadClient):
        self.client = client

    def show_story(self, story: Story, render: bool = False, dump_dir: Optional[Path] = None) -> None:
        last = story.last_published_part
        print(f"Title: {story.title}")
        print(f"Author: {story.author.name} (@{story.author.username})")
        print(f"Description: {truncate(story.description, DESCRIPTION_PREVIEW)}")
        print(f"Tags: {', '.join(story.tags)}")
        print(f"Parts: {len(story.parts)}")
        print(f"URL: {story.url}")
        print(f"Cover: {story.cover_url}")
        print(f"Is Paywalled: {story.is_paywalled}")
        print(f"Last Update: {last.create_date if last and last.create_date else 'N/A'}")
        rendered = []
        if render:
            part = pick_part(story)
            if part is None:
                print("\nCould not find a suitable part to render.")
            else:
                print(f"\nRendering Part: '{part.title}' (ID: {part.id})")
                page = part.render_with(self.client)
                print(format_page(page))
                rendered.append((part, page))
        if dump_dir is not None:
            path = dump_story(dump_dir=dump_dir, story=story, rendered=rendered, meta={'client': f"{__title__}/{__version__}"})
            log.info(f"{path} written.")

    def story(self, args: argparse.Namespace) -> int:
        log.info(f"fetch story id={args.story_id}")
        story = Story.from_id(args.story_id, self.client)
        self.show_story(story, render=args.render, dump_dir=args.dump)
        return 0

    def part(self, args: argparse.Namespace) -> int:
        log.info(f"fetch story by part id={args.part_id}")
        story = Story.from_part_id(args.part_id, self.client)
        self.show_story(story, render=args.render, dump_dir=args.dump)
        return 0

    def search(self, args: argparse.Namespace) -> int:
        count = 0
        for listing in self.client.iter_search_stories(args.query, mature=args.mature, limit=args.limit, max_pages=args.pages):
            count += 1
            print(f"{listing.id}\t{listing.title}\t{listing.author_name or '-'}\tparts={listing.num_parts} reads={listing.read_count}")
        log.info(f"search done query={args.query!r} results={count}")
        return 0

    def users(self, args: argparse.Namespace) -> int:
        for user in self.client.search_users(args.query, limit=args.limit, offset=args.offset):
            print(f"@{user.username}\t{user.name or '-'}\tfollowers={user.num_followers} stories={user.num_stories_published}")
        return 0

    def topics(self, args: argparse.Namespace) -> int:
        for topic in self.client.browse_topics(args.language):
            print(f"{topic.category_id if topic.category_id is not None else '-'}\t{topic.name}")
        return 0

    def clear_cache(self, args: argparse.Namespace) -> int:
        if not args.yes and not Console.confirm('Delete all cached responses?'):
            return 0
        removed = self.client.clear_cache()
        log.info(f"cache cleared files={removed}")
        return 0

    def interactive(self, args: argparse.Namespace) -> int:
        story_id = Console.input_int('story id')
        if story_id is None:
            log.debug("no story id, exit.")
            return 0
        story = Story.from_id(story_id, self.client)
        self.show_story(story, render=Console.confirm('Render a part?'))
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='wattpad-demo', description=f"{__title__} {__version__}")
    parser.add_argument('--version', action='version', version=f"{__title__} {__version__}")
    parser.add_argument('--debug', action='store_true', help='DEBUG level logging')
    parser.add_argument('--config', type=Path, default=None, help='path to config.json')
    parser.add_argument('--no-cache', action='store_true', help='bypass the disk cache')
    parser.add_argument('--cache-dir', default=None, help='override cache directory')
    sub = parser.add_subparsers(dest='command')

    for name, id_arg in (('story', 'story_id'), ('part', 'part_id')):
        p = sub.add_parser(name)
        p.add_argument(id_arg, type=int)
        p.add_argument('--render', action='store_true', help='render the first chapter-like part')
        p.add_argument('--dump', type=Path, default=None, metavar='DIR', help='write JSON/text dump to DIR')

    p = sub.add_parser('search')
    p.add_argument('query')
    p.add_argument('--limit', type=int, default=15)
    p.add_argument('--pages', type=int, default=1)
    p.add_argument('--mature', action='store_true')

    p = sub.add_parser('users')
    p.add_argument('query')
    p.add_argument('--limit', type=int, default=15)
    p.add_argument('--offset', type=int, default=0)

    p = sub.add_parser('topics')
    p.add_argument('--language', type=int, default=1)

    p = sub.add_parser('clear-cache')
    p.add_argument('-y', '--yes', action='store_true', help='skip confirmation')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO)

    overrides = {}
    if args.no_cache:
        overrides['use_cache'] = False
    if args.cache_dir:
        overrides['cache_dir'] = args.cache_dir
    config = load_config(args.config).merged(overrides)

    handlers = {
        'story': App.story,
        'part': App.part,
        'search': App.search,
        'users': App.users,
        'topics': App.topics,
        'clear-cache': App.clear_cache,
        None: App.interactive,
    }
    try:
        with WattpadClient(config) as client:
            return handlers[args.command](App(client), args)
    except Exception as e:  # noqa: BLE001
        log.exception(e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
