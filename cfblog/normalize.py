"""Mapping from WordPress wire shapes to cfblog models.

Every function here is pure: it takes the decoded JSON of one API object
and returns the matching immutable model. WordPress wraps titles, excerpts
and content in ``{"rendered": "..."}`` envelopes, keys avatars by pixel
size, and may nest comment replies; all of that is flattened here.
"""

import hashlib
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from urllib.parse import unquote

from .config import DEFAULT_AVATAR_HOST
from .models import Comment, Link, Page, Post, SiteInfo, Term, User

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 180
ELLIPSIS = "…"
GUEST_NAME = "访客"
GRAVATAR_HOST = "www.gravatar.com"
AVATAR_SIZES = ("96", "48", "24")
MAX_COMMENT_DEPTH = 32

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")
# An encoded slug is ASCII made of URL-safe characters and %XX triplets only
_ENCODED_SLUG_RE = re.compile(r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=:@]|%[0-9A-Fa-f]{2})*$")


def unwrap_rendered(field: Any) -> Optional[str]:
    """Return the ``rendered`` string of an envelope, or None."""
    if isinstance(field, Mapping):
        rendered = field.get("rendered")
        return rendered if isinstance(rendered, str) else None
    return None


def html_to_text(html: Optional[str], max_len: int = EXCERPT_LENGTH) -> Optional[str]:
    """Strip HTML down to a single line of plain text.

    Script and style blocks are dropped with their contents, remaining tags
    are removed and whitespace runs collapse to one space. Text longer than
    ``max_len`` is cut and gets a trailing ellipsis.

    Args:
        html: HTML fragment
        max_len: Maximum number of characters kept before the ellipsis

    Returns:
        Plain text, or None for empty input
    """
    if not html:
        return None
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _SPACE_RE.sub(" ", text).strip()
    if len(text) > max_len:
        return text[:max_len] + ELLIPSIS
    return text


def decode_slug(slug: str) -> str:
    """Percent-decode a slug once.

    Slugs that are not a well-formed percent-encoded ASCII string are
    treated as already decoded and returned unchanged. Applying this to its
    own output is a no-op unless the decoded slug itself contains a %XX
    triplet, which needs an encoded "%25" on the wire; WordPress never
    produces one.
    """
    if "%" not in slug or not _ENCODED_SLUG_RE.match(slug):
        return slug
    try:
        return unquote(slug, errors="strict")
    except UnicodeDecodeError:
        return slug


def map_post(raw: Union[Mapping[str, Any], Post], excerpt_length: int = EXCERPT_LENGTH) -> Post:
    """Normalize a post from /wp/v2/posts."""
    if isinstance(raw, Post):
        return raw
    return Post(
        id=raw["id"],
        slug=decode_slug(raw.get("slug") or ""),
        title=unwrap_rendered(raw.get("title")) or "",
        excerpt=html_to_text(unwrap_rendered(raw.get("excerpt")), excerpt_length),
        content=unwrap_rendered(raw.get("content")),
        date=raw["date"],
        modified=raw.get("modified") or raw["date"],
        author=raw.get("author") or 0,
        categories=raw.get("categories") or [],
        tags=raw.get("tags") or [],
    )


def map_page(raw: Mapping[str, Any]) -> Page:
    """Normalize a page from /wp/v2/pages. Page slugs are kept as sent."""
    return Page(
        id=raw["id"],
        slug=raw.get("slug") or "",
        title=unwrap_rendered(raw.get("title")) or "",
        content=unwrap_rendered(raw.get("content")),
        date=raw["date"],
        modified=raw.get("modified") or raw["date"],
    )


def map_term(raw: Mapping[str, Any]) -> Term:
    return Term(
        id=raw["id"],
        name=raw.get("name") or "",
        slug=raw.get("slug") or "",
        count=raw.get("count"),
        description=raw.get("description"),
    )


def map_link(raw: Mapping[str, Any]) -> Link:
    return Link(
        id=raw["id"],
        name=raw.get("name") or "",
        url=raw.get("url") or "",
        description=raw.get("description"),
        avatar=raw.get("avatar"),
        category=raw.get("category") or None,
        target=raw.get("target"),
        visible=raw.get("visible"),
        rating=raw.get("rating"),
        sort_order=raw.get("sort_order"),
        created_at=raw.get("created_at"),
        updated_at=raw.get("updated_at"),
    )


def filter_visible_links(raw_links: Iterable[Mapping[str, Any]]) -> List[Link]:
    """Map links and keep those whose ``visible`` flag is "yes" or unset."""
    links = [map_link(raw) for raw in raw_links]
    return [link for link in links if link.is_visible]


def gravatar_url(email: str, size: int = 160, avatar_host: str = DEFAULT_AVATAR_HOST) -> str:
    """Build an identicon avatar URL from an email address."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return hash_avatar_url(digest, size, avatar_host)


def hash_avatar_url(avatar_hash: str, size: int = 96, avatar_host: str = DEFAULT_AVATAR_HOST) -> str:
    return f"https://{avatar_host}/avatar/{avatar_hash}?s={size}&d=identicon"


def _sized_avatar(avatar_urls: Optional[Mapping[str, str]]) -> Optional[str]:
    avatar_urls = avatar_urls or {}
    for size in AVATAR_SIZES:
        url = avatar_urls.get(size) or avatar_urls.get(int(size))
        if url:
            return url
    return None


def resolve_comment_avatar(raw: Mapping[str, Any], avatar_host: str = DEFAULT_AVATAR_HOST) -> Optional[str]:
    """Pick a comment avatar: hash-derived URL first, then 96, 48 and 24px."""
    avatar_hash = raw.get("author_avatar_hash")
    if avatar_hash:
        return hash_avatar_url(avatar_hash, 96, avatar_host)
    return _sized_avatar(raw.get("author_avatar_urls"))


def rewrite_avatar_host(url: Optional[str], avatar_host: str = DEFAULT_AVATAR_HOST) -> Optional[str]:
    """Point a gravatar URL at the alternate avatar host."""
    if not url:
        return url
    return url.replace(GRAVATAR_HOST, avatar_host)


def _map_comment(raw: Mapping[str, Any], depth: int, child_ids: List[int], avatar_host: str) -> Comment:
    return Comment(
        id=raw["id"],
        post=raw.get("post") or 0,
        parent=raw.get("parent") or 0,
        author_name=raw.get("author_name") or GUEST_NAME,
        author_url=raw.get("author_url") or None,
        avatar=resolve_comment_avatar(raw, avatar_host),
        avatar_hash=raw.get("author_avatar_hash"),
        post_title=raw.get("post_title"),
        date=raw["date"],
        content_html=unwrap_rendered(raw.get("content")) or "",
        depth=depth,
        child_ids=tuple(child_ids),
    )


def map_comments(
    raw_comments: Iterable[Mapping[str, Any]],
    avatar_host: str = DEFAULT_AVATAR_HOST,
    max_depth: int = MAX_COMMENT_DEPTH,
) -> List[Comment]:
    """Flatten comments, including nested ``children``, into a list.

    Comments come out in thread order. Replies nested deeper than
    ``max_depth`` are dropped. ``author_ip`` is never copied.
    """
    comments: List[Comment] = []
    stack = [(raw, 0) for raw in reversed(list(raw_comments))]
    dropped = 0

    while stack:
        raw, depth = stack.pop()
        children = raw.get("children")
        children = children if isinstance(children, list) else []
        if depth >= max_depth:
            dropped += len(children)
            children = []

        comments.append(_map_comment(raw, depth, [c["id"] for c in children], avatar_host))
        for child in reversed(children):
            stack.append((child, depth + 1))

    if dropped:
        logger.warning("Dropped %d comment replies nested deeper than %d levels", dropped, max_depth)
    return comments


def map_user(raw: Mapping[str, Any], avatar_host: str = DEFAULT_AVATAR_HOST) -> User:
    """Normalize a user from /wp/v2/users."""
    return User(
        id=raw["id"],
        name=raw.get("name") or GUEST_NAME,
        url=raw.get("url") or None,
        description=raw.get("description") or None,
        slug=raw.get("slug"),
        avatar=rewrite_avatar_host(_sized_avatar(raw.get("avatar_urls")), avatar_host),
        email=raw.get("email"),
        role=raw.get("role"),
    )


def map_site_info(raw: Optional[Dict[str, Any]]) -> SiteInfo:
    """Normalize the API root document."""
    raw = raw or {}
    return SiteInfo(
        name=raw.get("name") or "CFBlog",
        description=raw.get("description"),
        url=raw.get("url"),
        home=raw.get("home"),
    )
