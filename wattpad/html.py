from __future__ import annotations
"""Part text HTML -> structured content blocks.

A part's text endpoint returns a fragment of ``<p data-p-id="...">`` paragraphs.
Each paragraph becomes zero or more IMAGE blocks followed by at most one TEXT
block made of styled words.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .logger import Logger


log = Logger.bind(__name__)

_RE_WS_RUN = re.compile(r'[ \t\n\r\f\xa0]+')
_RE_TOKEN = re.compile(r'[^ ]+| ')


class HTMLStyle(Enum):
    GENERAL = 'general'
    BOLD = 'bold'
    ITALIC = 'italic'


class HTMLType(Enum):
    TEXT = 'text'
    IMAGE = 'image'


STYLE_TAGS = {
    'b': HTMLStyle.BOLD,
    'strong': HTMLStyle.BOLD,
    'i': HTMLStyle.ITALIC,
    'em': HTMLStyle.ITALIC,
}


@dataclass(frozen=True)
class HTMLWord:
    data: str
    style: HTMLStyle = HTMLStyle.GENERAL

    def __str__(self) -> str:
        return self.data


class HTMLContent:
    """One rendered block: either styled text or an image URL."""

    def __init__(self, *, words: Optional[List[HTMLWord]] = None, image_url: Optional[str] = None):
        if (words is None) == (image_url is None):
            raise ValueError("exactly one of words or image_url is required")
        self._words = list(words) if words is not None else None
        self._image_url = image_url
        self.type = HTMLType.TEXT if words is not None else HTMLType.IMAGE

    @classmethod
    def text(cls, words: Iterable[HTMLWord]) -> "HTMLContent":
        return cls(words=list(words))

    @classmethod
    def image(cls, url: str) -> "HTMLContent":
        return cls(image_url=url)

    @property
    def words(self) -> List[HTMLWord]:
        if self.type is not HTMLType.TEXT:
            raise TypeError("Cannot get text data for non-TEXT content")
        return self._words

    @property
    def image_url(self) -> str:
        if self.type is not HTMLType.IMAGE:
            raise TypeError("Cannot get image URL for non-IMAGE content")
        return self._image_url

    @property
    def sanitized_text(self) -> str:
        if self.type is HTMLType.TEXT:
            return ''.join(w.data for w in self._words)
        return f"[Image: {self._image_url}]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HTMLContent):
            return NotImplemented
        return (self.type, self._words, self._image_url) == (other.type, other._words, other._image_url)

    def __repr__(self) -> str:
        return f"HTMLContent(type={self.type.name}, text={self.sanitized_text!r})"

    def __str__(self) -> str:
        return self.sanitized_text


def tokenize(text: str, style: HTMLStyle = HTMLStyle.GENERAL) -> List[HTMLWord]:
    """Collapse whitespace runs, then split into words and single spaces."""
    collapsed = _RE_WS_RUN.sub(' ', text)
    return [HTMLWord(tok, style) for tok in _RE_TOKEN.findall(collapsed)]


def _collect_words(node: Tag, style: HTMLStyle, out: List[HTMLWord]) -> None:
    for child in node.children:
        if isinstance(child, NavigableString):
            # comments, CDATA, doctypes
            if isinstance(child, PreformattedString):
                continue
            out.extend(tokenize(str(child), style))
        elif isinstance(child, Tag):
            child_style = STYLE_TAGS.get(child.name.lower(), style)
            _collect_words(child, child_style, out)


def parse_part_html(html: str, base_url: str) -> List[HTMLContent]:
    soup = BeautifulSoup(html, 'lxml')
    stack: List[HTMLContent] = []
    paragraphs = soup.select('p[data-p-id]')
    for p in paragraphs:
        images = p.select('img[src]')
        for img in images:
            src = (img.get('src') or '').strip()
            if src:
                stack.append(HTMLContent.image(urljoin(base_url, src)))
        if images and not p.get_text().strip():
            continue
        words: List[HTMLWord] = []
        _collect_words(p, HTMLStyle.GENERAL, words)
        if words:
            stack.append(HTMLContent.text(words))
    log.debug(f"part html parsed paragraphs={len(paragraphs)} blocks={len(stack)}")
    return stack


__all__ = ["HTMLStyle", "HTMLType", "HTMLWord", "HTMLContent", "tokenize", "parse_part_html"]
