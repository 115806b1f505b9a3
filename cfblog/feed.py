"""RSS feed assembly.

Builds an RSS 2.0 document from the most recent posts. Category ids are
resolved to names with one request per batch of ids, not one per post.
"""

import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Dict, List, Optional, Sequence
from urllib.parse import quote
from xml.etree import ElementTree as ET

from pydantic import BaseModel, ConfigDict

from .exceptions import FeedError
from .models import Post, SiteInfo

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
DEFAULT_TITLE = "CFBlog"
DEFAULT_DESCRIPTION = "基于 WordPress REST API 的 Astro 博客"
FAILURE_BODY = "RSS Feed generation failed"
CATEGORY_BATCH = 100

ET.register_namespace("atom", ATOM_NS)


class FeedItem(BaseModel):
    """One entry of the feed."""

    model_config = ConfigDict(frozen=True)

    title: str
    pub_date: datetime
    description: str = ""
    link: str
    categories: List[str] = []


class FeedResponse(BaseModel):
    """HTTP-style result of feed generation."""

    model_config = ConfigDict(frozen=True)

    status: int
    body: str
    content_type: str


def _category_names(client, posts: Sequence[Post]) -> Dict[int, str]:
    ids = list(dict.fromkeys(cid for post in posts for cid in post.categories))
    names: Dict[int, str] = {}
    for start in range(0, len(ids), CATEGORY_BATCH):
        for term in client.get_categories_by_ids(ids[start:start + CATEGORY_BATCH]):
            names[term.id] = term.name
    return names


def build_feed_items(client, limit: int = 100) -> List[FeedItem]:
    """Turn the latest posts into feed items.

    Args:
        client: WordPressClient used for posts and categories
        limit: Maximum number of posts to include

    Returns:
        Feed items in post order with category names resolved
    """
    posts = client.get_all_posts(limit)[:limit]
    names = _category_names(client, posts)
    return [
        FeedItem(
            title=post.title,
            pub_date=post.date,
            description=post.excerpt or "",
            link=f"/post/{post.slug}",
            categories=[names[cid] for cid in post.categories if cid in names],
        )
        for post in posts
    ]


def _rfc822(value: datetime) -> str:
    # WordPress "date" fields carry no offset; they are treated as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _absolute(site_url: str, path: str) -> str:
    return f"{site_url.rstrip('/')}{quote(path)}"


def render_rss(
    site: SiteInfo,
    items: Sequence[FeedItem],
    site_url: str,
    language: str = "zh-CN",
) -> str:
    """Serialize feed items as an RSS 2.0 document."""
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = site.name or DEFAULT_TITLE
    ET.SubElement(channel, "description").text = site.description or DEFAULT_DESCRIPTION
    ET.SubElement(channel, "link").text = site_url.rstrip("/") + "/"
    ET.SubElement(channel, "language").text = language
    ET.SubElement(channel, f"{{{ATOM_NS}}}link", {
        "href": _absolute(site_url, "/rss.xml"),
        "rel": "self",
        "type": "application/rss+xml",
    })

    for item in items:
        entry = ET.SubElement(channel, "item")
        url = _absolute(site_url, item.link)
        ET.SubElement(entry, "title").text = item.title
        ET.SubElement(entry, "link").text = url
        ET.SubElement(entry, "guid", {"isPermaLink": "true"}).text = url
        ET.SubElement(entry, "description").text = item.description
        ET.SubElement(entry, "pubDate").text = _rfc822(item.pub_date)
        for name in item.categories:
            ET.SubElement(entry, "category").text = name

    body = ET.tostring(rss, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>' + body


def assemble_feed(client, site_url: Optional[str] = None, limit: int = 100) -> str:
    """Build the complete feed document.

    Raises:
        FeedError: If any part of the feed could not be fetched or rendered
    """
    profile = client.profile
    try:
        items = build_feed_items(client, limit)
        site = client.get_site_info()
        return render_rss(site, items, site_url or profile.site_url, profile.language)
    except Exception as e:
        raise FeedError(f"Failed to assemble RSS feed: {e}") from e


def generate_rss(client, site_url: Optional[str] = None, limit: int = 100) -> FeedResponse:
    """Produce the feed response; a failure yields a 500, never a partial feed."""
    try:
        body = assemble_feed(client, site_url, limit)
    except FeedError:
        logger.exception("RSS generation failed")
        return FeedResponse(status=500, body=FAILURE_BODY, content_type="text/plain; charset=utf-8")
    return FeedResponse(status=200, body=body, content_type="application/rss+xml; charset=utf-8")
