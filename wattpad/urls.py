from __future__ import annotations
"""Endpoint URL builders. Every function returns an absolute URL string."""
from urllib.parse import quote, urlencode, urljoin

from .constants import BASE_URL


STORY_DETAIL_FIELDS = ("id,title,description,url,cover,user(name,username,avatar),isPaywalled,"
                       "lastPublishedPart(id,createDate),parts(id,title,text_url),tags")
STORY_GROUP_FIELDS = f"group({STORY_DETAIL_FIELDS})"
PART_DETAIL_FIELDS = f"text_url,{STORY_GROUP_FIELDS}"

STORY_SEARCH_FIELDS = ("stories(id,title,voteCount,readCount,commentCount,description,mature,completed,"
                       "cover,url,numParts,isPaywalled,paidModel,length,language(id),user(name),"
                       "lastPublishedPart(createDate),promoted,sponsor(name,avatar),tags,"
                       "tracking(clickUrl,impressionUrl,thirdParty(impressionUrls,clickUrls)),"
                       "contest(endDate,ctaLabel,ctaURL)),total,tags,nextUrl")
USER_SEARCH_FIELDS = ("users(username,name,avatar,description,numLists,numFollowers,"
                      "numStoriesPublished,badges,following)")
BROWSE_TOPICS_FIELDS = "topics(name,categoryID,browseURL,tagURL)"


def _build(base_url: str, path: str, params: list[tuple[str, str]]) -> str:
    # keep ( ) , readable in the fields selector
    query = urlencode(params, quote_via=quote, safe='(),')
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}?{query}"


def _flag(value: bool) -> str:
    return 'true' if value else 'false'


def story_by_id(story_id: int, base_url: str = BASE_URL) -> str:
    return _build(base_url, f"api/v3/stories/{int(story_id)}", [('fields', STORY_DETAIL_FIELDS)])


def part_by_id(part_id: int, base_url: str = BASE_URL) -> str:
    return _build(base_url, f"api/v4/parts/{int(part_id)}", [('fields', PART_DETAIL_FIELDS)])


def part_text(text_url: str, base_url: str = BASE_URL) -> str:
    """Resolve a part's text URL, usually relative like ``/apiv2/?m=storytext&id=1``."""
    if not text_url or not text_url.strip():
        raise ValueError("empty text url")
    return urljoin(base_url.rstrip('/') + '/', text_url.strip())


def search_stories(query: str, mature: bool = False, limit: int = 15, base_url: str = BASE_URL) -> str:
    return _build(base_url, "v4/search/stories", [
        ('query', query),
        ('mature', _flag(mature)),
        ('limit', str(limit)),
        ('fields', STORY_SEARCH_FIELDS),
    ])


def search_users(query: str, limit: int = 15, offset: int = 0, base_url: str = BASE_URL) -> str:
    return _build(base_url, "v4/search/users", [
        ('query', query),
        ('limit', str(limit)),
        ('offset', str(offset)),
        ('fields', USER_SEARCH_FIELDS),
    ])


def browse_topics(language_id: int = 1, base_url: str = BASE_URL) -> str:
    return _build(base_url, "v5/browse/topics", [
        ('language', str(language_id)),
        ('fields', BROWSE_TOPICS_FIELDS),
    ])
