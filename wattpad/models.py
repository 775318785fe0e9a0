from __future__ import annotations
"""Data model for API payloads.

Each model has a ``from_json`` classmethod taking the decoded dict. Required
fields that are missing raise ParseException; optional ones fall back to
None / empty values.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .exceptions import ParseException
from .html import HTMLContent
from .logger import Logger

if TYPE_CHECKING:  # pragma: no cover
    from .client import WattpadClient


log = Logger.bind(__name__)

_RE_URL_ID_SUFFIX = re.compile(r'-\d+$')
# extended ISO-8601 date and time, seconds and offset optional
_RE_ISO_DATETIME = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}')


def _require(data: Dict[str, Any], key: str, what: str) -> Any:
    value = data.get(key)
    if value is None:
        raise ParseException(f"{what} JSON is missing required '{key}' field")
    return value


def _to_int(value: Any, key: str, what: str) -> int:
    # bools are ints in Python but never valid ids or counts
    if isinstance(value, bool):
        raise ParseException(f"{what} JSON field '{key}' is not an integer: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ParseException(f"{what} JSON field '{key}' is not an integer: {value!r}") from e


def _require_int(data: Dict[str, Any], key: str, what: str) -> int:
    return _to_int(_require(data, key, what), key, what)


def _optional_int(data: Dict[str, Any], key: str, what: str, default: Optional[int] = 0) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return default
    return _to_int(value, key, what)


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return None if value is None else str(value)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an API timestamp such as ``2023-04-01T12:30:00Z``.

    Offsets are honoured for parsing and then dropped, leaving the naive wall
    time the API reported.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseException(f"Could not parse date value: {value!r}")
    text = value.strip()
    # fromisoformat also takes date-only and compact forms the API never sends
    if not _RE_ISO_DATETIME.match(text):
        raise ParseException(f"Could not parse date string: '{value}'")
    candidate = text[:-1] + '+00:00' if text.endswith('Z') else text
    try:
        return datetime.fromisoformat(candidate).replace(tzinfo=None)
    except ValueError as e:
        raise ParseException(f"Could not parse date string: '{value}'") from e


def sanitize_story_url(url: Optional[str]) -> Optional[str]:
    """Drop a trailing ``-<digits>`` from the last path segment."""
    if not url:
        return url
    head, sep, last = url.rpartition('/')
    match = _RE_URL_ID_SUFFIX.search(last)
    if not match:
        return url
    return f"{head}{sep}{last[:match.start()]}"


@dataclass
class User:
    name: str
    username: str
    avatar: Optional[str] = None

    @classmethod
    def from_json(cls, data: Optional[Dict[str, Any]]) -> "User":
        if not isinstance(data, dict):
            raise ParseException("Cannot create User from non-object JSON")
        avatar = _optional_str(data, 'avatar')
        # search payloads use fullname/name, story payloads use name/username
        if data.get('fullname') is not None:
            if data.get('name') is None:
                raise ParseException("User JSON has 'fullname' but is missing the 'name' field required for username")
            return cls(name=str(data['fullname']), username=str(data['name']), avatar=avatar)
        name = _require(data, 'name', 'User')
        username = _require(data, 'username', 'User')
        return cls(name=str(name), username=str(username), avatar=avatar)


@dataclass
class PublishedPart:
    id: int
    create_date: Optional[datetime]
    title: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PublishedPart":
        return cls(
            id=_require_int(data, 'id', 'PublishedPart'),
            create_date=parse_timestamp(data.get('createDate')),
            title=_optional_str(data, 'title'),
        )


@dataclass
class Part:
    id: int
    title: str
    text_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Part":
        if not isinstance(data, dict):
            raise ParseException(f"Failed to parse Part from JSON: {data!r}")
        raw_text_url = data.get('text_url')
        if isinstance(raw_text_url, dict):
            text_url = _optional_str(raw_text_url, 'text')
        elif isinstance(raw_text_url, str):
            text_url = raw_text_url
        else:
            text_url = None
        return cls(
            id=_require_int(data, 'id', 'Part'),
            title=str(_require(data, 'title', 'Part')),
            text_url=text_url,
        )

    def render_with(self, client: "WattpadClient") -> "RenderedPage":
        return client.render_part(self)


@dataclass
class Story:
    id: int
    title: str
    author: User
    description: str = ''
    cover: Optional[str] = None
    url: Optional[str] = None
    last_published_part: Optional[PublishedPart] = None
    parts: List[Part] = field(default_factory=list)
    is_paywalled: bool = False
    tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.url = sanitize_story_url(self.url)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Story":
        if not isinstance(data, dict):
            raise ParseException("Story JSON is not an object")
        story_id = _require_int(data, 'id', 'Story')
        user = data.get('user')
        if not isinstance(user, dict):
            raise ParseException("Story JSON is missing a valid 'user' object.")

        last_published = None
        raw_last = data.get('lastPublishedPart')
        if isinstance(raw_last, dict):
            last_published = PublishedPart.from_json(raw_last)
        elif raw_last is not None:
            log.warn(f"lastPublishedPart is not an object story={story_id}")

        raw_parts = data.get('parts')
        parts = [Part.from_json(p) for p in raw_parts] if isinstance(raw_parts, list) else []
        raw_tags = data.get('tags')
        tags = [t for t in raw_tags if isinstance(t, str)] if isinstance(raw_tags, list) else []

        return cls(
            id=story_id,
            title=str(_require(data, 'title', 'Story')),
            author=User.from_json(user),
            description=data.get('description') or '',
            cover=_optional_str(data, 'cover'),
            url=_optional_str(data, 'url'),
            last_published_part=last_published,
            parts=parts,
            is_paywalled=bool(data.get('isPaywalled', False)),
            tags=tags,
        )

    @classmethod
    def from_part_response(cls, data: Dict[str, Any]) -> "Story":
        group = data.get('group') if isinstance(data, dict) else None
        if not isinstance(group, dict):
            raise ParseException("Invalid part response JSON: Missing 'group' object.")
        return cls.from_json(group)

    @classmethod
    def from_id(cls, story_id: int, client: "WattpadClient") -> "Story":
        return client.get_story_by_id(story_id)

    @classmethod
    def from_part_id(cls, part_id: int, client: "WattpadClient") -> "Story":
        return client.get_story_by_part_id(part_id)

    @property
    def cover_url(self) -> Optional[str]:
        return self.cover


@dataclass
class RenderedPage:
    title: str
    content_stack: List[HTMLContent] = field(default_factory=list)

    @property
    def full_text(self) -> str:
        """Plain text of the page; image blocks appear as placeholders."""
        return '\n\n'.join(block.sanitized_text for block in self.content_stack)


# ---- search / browse ----

@dataclass
class StoryListing:
    id: int
    title: str
    description: str = ''
    author_name: Optional[str] = None
    url: Optional[str] = None
    cover: Optional[str] = None
    num_parts: int = 0
    completed: bool = False
    mature: bool = False
    is_paywalled: bool = False
    vote_count: int = 0
    read_count: int = 0
    comment_count: int = 0
    tags: List[str] = field(default_factory=list)
    last_published: Optional[datetime] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "StoryListing":
        if not isinstance(data, dict):
            raise ParseException("Story listing JSON is not an object")
        user = data.get('user') if isinstance(data.get('user'), dict) else {}
        last = data.get('lastPublishedPart') if isinstance(data.get('lastPublishedPart'), dict) else {}
        raw_tags = data.get('tags')
        return cls(
            id=_require_int(data, 'id', 'Story listing'),
            title=str(_require(data, 'title', 'Story listing')),
            description=data.get('description') or '',
            author_name=_optional_str(user, 'name'),
            url=sanitize_story_url(_optional_str(data, 'url')),
            cover=_optional_str(data, 'cover'),
            num_parts=_optional_int(data, 'numParts', 'Story listing'),
            completed=bool(data.get('completed', False)),
            mature=bool(data.get('mature', False)),
            is_paywalled=bool(data.get('isPaywalled', False)),
            vote_count=_optional_int(data, 'voteCount', 'Story listing'),
            read_count=_optional_int(data, 'readCount', 'Story listing'),
            comment_count=_optional_int(data, 'commentCount', 'Story listing'),
            tags=[t for t in raw_tags if isinstance(t, str)] if isinstance(raw_tags, list) else [],
            last_published=parse_timestamp(last.get('createDate')),
            raw=data,
        )


@dataclass
class StorySearchPage:
    stories: List[StoryListing]
    total: int = 0
    next_url: Optional[str] = None
    tags: List[Any] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "StorySearchPage":
        raw_stories = data.get('stories')
        if raw_stories is not None and not isinstance(raw_stories, list):
            raise ParseException("Search response 'stories' is not an array")
        return cls(
            stories=[StoryListing.from_json(s) for s in raw_stories or []],
            total=_optional_int(data, 'total', 'Search response'),
            next_url=_optional_str(data, 'nextUrl') or None,
            tags=list(data.get('tags') or []),
        )


@dataclass
class UserListing:
    username: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    description: str = ''
    num_lists: int = 0
    num_followers: int = 0
    num_stories_published: int = 0
    following: bool = False
    badges: List[Any] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "UserListing":
        if not isinstance(data, dict):
            raise ParseException("User listing JSON is not an object")
        return cls(
            username=str(_require(data, 'username', 'User listing')),
            name=_optional_str(data, 'name'),
            avatar=_optional_str(data, 'avatar'),
            description=data.get('description') or '',
            num_lists=_optional_int(data, 'numLists', 'User listing'),
            num_followers=_optional_int(data, 'numFollowers', 'User listing'),
            num_stories_published=_optional_int(data, 'numStoriesPublished', 'User listing'),
            following=bool(data.get('following', False)),
            badges=list(data.get('badges') or []),
            raw=data,
        )


@dataclass
class Topic:
    name: str
    category_id: Optional[int] = None
    browse_url: Optional[str] = None
    tag_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Topic":
        if not isinstance(data, dict):
            raise ParseException("Topic JSON is not an object")
        return cls(
            name=str(_require(data, 'name', 'Topic')),
            category_id=_optional_int(data, 'categoryID', 'Topic', default=None),
            browse_url=_optional_str(data, 'browseURL'),
            tag_url=_optional_str(data, 'tagURL'),
        )
