from __future__ import annotations
"""HTTP client for Wattpad's JSON API and part text endpoints."""
import json
import time
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter, Retry

from . import urls
from .cache import SimpleDiskCache
from .config import WattpadClientConfig, load_config
from .exceptions import APIException, NotFoundException, NotJsonException, WattpadException
from .html import parse_part_html
from .logger import Logger
from .models import Part, RenderedPage, Story, StoryListing, StorySearchPage, Topic, UserListing


log = Logger.bind(__name__)


class WattpadClient:
    """Fetches stories, parts and search results, with an optional disk cache.

    A ready ``requests.Session`` may be passed in; otherwise one is built with
    GET retries on 429 / 5xx. Timeouts from the config apply per request.

        with WattpadClient() as client:
            story = client.get_story_by_id(336166598)
            page = story.parts[0].render_with(client)
    """

    def __init__(self, config: Optional[WattpadClientConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or load_config()
        self.session = session if session is not None else self._build_session()
        self.cache: Optional[SimpleDiskCache] = SimpleDiskCache(self.config.cache_dir) if self.config.use_cache else None

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        retries = Retry(
            total=self.config.max_retries,
            backoff_factor=self.config.backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET", ),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "application/json,text/html;q=0.9,*/*;q=0.8",
        })
        return session

    # ---- core fetch ----
    def fetch_raw(self, url: str, use_cache: bool = True) -> str:
        """GET ``url`` and return the body text, consulting the cache first."""
        cached = self.cache is not None and use_cache
        if cached:
            body = self.cache.get(url)
            if body is not None:
                log.debug(f"cache hit url={url}")
                return body
            log.debug(f"cache miss url={url}")

        start = time.time()
        log.debug(f"http get start url={url}")
        try:
            resp = self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise WattpadException(f"Network error while fetching URL: {url}") from e
        elapsed = time.time() - start
        log.debug(f"http get done url={url} elapsed={elapsed:.2f}s status={resp.status_code}")

        if resp.status_code == 404:
            raise NotFoundException(url)
        if not 200 <= resp.status_code < 300:
            status = f"{resp.status_code} {resp.reason}" if resp.reason else str(resp.status_code)
            raise APIException(f"HTTP Error: {status} for URL: {url}")

        # the API and text endpoints serve UTF-8, sometimes without a charset
        resp.encoding = 'utf-8'
        body = resp.text
        if not body:
            raise WattpadException(f"Received empty response body for URL: {url}")
        if cached:
            self.cache.put(url, body)
        return body

    def fetch_json(self, url: str, use_cache: bool = True) -> Dict[str, Any]:
        body = self.fetch_raw(url, use_cache=use_cache)
        try:
            data = json.loads(body)
        except ValueError as e:
            raise NotJsonException(f"Failed to parse response as JSON for URL: {url}", body) from e
        if not isinstance(data, dict):
            raise NotJsonException(f"Expected JSON object but got different structure for URL: {url}", body)
        error = data.get('error')
        if error is not None and not isinstance(error, (dict, list)):
            code = data.get('code', -1)
            raise APIException(f"API returned an error: {error} (Code: {code})", data)
        if 'error_code' in data:
            raise APIException("API returned an error", data)
        return data

    # ---- stories & parts ----
    def get_story_by_id(self, story_id: int) -> Story:
        data = self.fetch_json(urls.story_by_id(story_id, base_url=self.config.base_url))
        return Story.from_json(data)

    def get_story_by_part_id(self, part_id: int) -> Story:
        data = self.fetch_json(urls.part_by_id(part_id, base_url=self.config.base_url))
        return Story.from_part_response(data)

    def render_part(self, part: Part) -> RenderedPage:
        if not part.text_url or not part.text_url.strip():
            raise WattpadException(f"Part {part.id} has no text URL.")
        try:
            text_url = urls.part_text(part.text_url, base_url=self.config.base_url)
        except ValueError as e:
            raise WattpadException(f"Invalid text URL format for part {part.id}: {part.text_url}") from e
        done = log.time_block(f"render part={part.id}")
        html = self.fetch_raw(text_url)
        page = RenderedPage(title=part.title, content_stack=parse_part_html(html, text_url))
        done()
        return page

    # ---- search & browse ----
    def search_stories(self, query: str, mature: bool = False, limit: int = 15) -> StorySearchPage:
        _check_positive('limit', limit)
        url = urls.search_stories(query, mature=mature, limit=limit, base_url=self.config.base_url)
        return StorySearchPage.from_json(self.fetch_json(url))

    def iter_search_stories(self, query: str, mature: bool = False, limit: int = 15,
                            max_pages: Optional[int] = None) -> Iterator[StoryListing]:
        """Yield listings across result pages by following ``nextUrl``."""
        if max_pages is not None:
            _check_positive('max_pages', max_pages)
        page = self.search_stories(query, mature=mature, limit=limit)
        pages_fetched = 1
        log.info(f"search page done page=1 records={len(page.stories)} total={page.total}")
        seen_urls = set()
        while True:
            yield from page.stories
            if not page.next_url or not page.stories:
                log.debug(f"no next search page pages_fetched={pages_fetched}")
                return
            if max_pages is not None and pages_fetched >= max_pages:
                return
            next_url = urljoin(self.config.base_url.rstrip('/') + '/', page.next_url)
            if next_url in seen_urls:
                log.warn(f"search pagination loop url={next_url}")
                return
            seen_urls.add(next_url)
            time.sleep(max(0.0, self.config.page_delay))
            page = StorySearchPage.from_json(self.fetch_json(next_url))
            pages_fetched += 1
            log.info(f"search page done page={pages_fetched} records={len(page.stories)}")

    def search_users(self, query: str, limit: int = 15, offset: int = 0) -> List[UserListing]:
        _check_positive('limit', limit)
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        url = urls.search_users(query, limit=limit, offset=offset, base_url=self.config.base_url)
        data = self.fetch_json(url)
        return [UserListing.from_json(u) for u in data.get('users') or []]

    def browse_topics(self, language_id: int = 1) -> List[Topic]:
        data = self.fetch_json(urls.browse_topics(language_id, base_url=self.config.base_url))
        return [Topic.from_json(t) for t in data.get('topics') or []]

    # ---- cache & lifecycle ----
    def clear_cache(self) -> int:
        if self.cache is None:
            return 0
        return self.cache.clear()

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def _check_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


__all__ = ["WattpadClient"]
