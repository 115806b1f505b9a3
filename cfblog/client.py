"""WordPress REST API client.

This module provides the content gateway used by the blog frontend. It
builds request URLs, fetches and decodes JSON, normalizes WordPress
responses into cfblog models and walks paginated endpoints. All requests
are unauthenticated GETs and are never retried.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

import requests
from requests.structures import CaseInsensitiveDict

from .cache import SiteInfoCache
from .config import Profile
from .exceptions import DecodeError, UpstreamRequestError
from .models import Comment, CommentTree, Link, Page, Post, PostsPage, Settings, SiteInfo, Term, User
from .normalize import (
    filter_visible_links,
    gravatar_url,
    map_comments,
    map_page,
    map_post,
    map_site_info,
    map_term,
    map_user,
)
from .pagination import collect_pages
from .result import FetchResult

logger = logging.getLogger(__name__)

ParamValue = Union[str, int, float, bool, None]

POST_FIELDS = "id,slug,title,excerpt,content,date,modified,author,categories,tags"
PAGE_FIELDS = "id,slug,title,content,date,modified"
TERM_FIELDS = "id,name,slug,count,description"
MAX_PER_PAGE = 100


def build_url(path: str, params: Optional[Mapping[str, ParamValue]] = None) -> str:
    """Build an absolute URL with query parameters.

    Args:
        path: Absolute base URL
        params: Query parameters; None values are left out

    Returns:
        URL with the parameters appended to any existing query string
    """
    if not params:
        return path

    parts = urlsplit(path)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


def _header_int(headers: Mapping[str, str], name: str) -> int:
    value = headers.get(name)
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def _dedupe(values: Sequence[Any]) -> List[Any]:
    return list(dict.fromkeys(values))


class WordPressClient:
    """High-level client for the WordPress REST API."""

    def __init__(
        self,
        profile: Optional[Profile] = None,
        session: Optional[requests.Session] = None,
        site_cache: Optional[SiteInfoCache] = None,
    ) -> None:
        """Initialize WordPress API client.

        Args:
            profile: Configuration profile; the built-in defaults are used
                when omitted
            session: HTTP session, created when omitted
            site_cache: Cache for site information, one per client when
                omitted
        """
        self.profile = profile or Profile(name="default")
        self.api_root = self.profile.api_root
        self.wp_v2 = self.profile.wp_v2
        self.timeout = self.profile.timeout
        self.session = session or requests.Session()
        self.site_cache: SiteInfoCache = site_cache or SiteInfoCache()

    def fetch_json(self, url: str) -> Tuple[Any, CaseInsensitiveDict]:
        """GET a URL and decode its JSON body.

        Args:
            url: Fully built URL

        Returns:
            Decoded body and the response headers

        Raises:
            UpstreamRequestError: For non-2xx responses
            DecodeError: If the body is not valid JSON
        """
        logger.debug("GET %s", url)
        response = self.session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
        logger.debug("Response status: %s", response.status_code)

        if not 200 <= response.status_code < 300:
            try:
                body = response.text
            except (requests.exceptions.RequestException, UnicodeDecodeError, ValueError):
                body = ""
            raise UpstreamRequestError(response.status_code, response.reason or "", body)

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(
                f"Invalid JSON from {url}: {e}",
                status_code=response.status_code,
            ) from e
        return data, response.headers

    # Posts API methods
    def _posts_page(self, params: Dict[str, ParamValue]) -> PostsPage:
        url = build_url(f"{self.wp_v2}/posts", {**params, "_embed": 1, "_fields": POST_FIELDS})
        data, headers = self.fetch_json(url)
        return PostsPage(
            posts=[map_post(p, self.profile.excerpt_length) for p in data or []],
            total=_header_int(headers, "X-WP-Total"),
            total_pages=_header_int(headers, "X-WP-TotalPages"),
        )

    def get_posts(self, page: int = 1, per_page: Optional[int] = None) -> PostsPage:
        """Get one page of posts.

        Args:
            page: Page number
            per_page: Posts per page, defaults to the profile page size

        Returns:
            Posts with the totals reported in the response headers
        """
        return self._posts_page({"page": page, "per_page": per_page or self.profile.page_size})

    def get_posts_by_category(self, category_id: int, page: int = 1, per_page: Optional[int] = None) -> PostsPage:
        return self._posts_page({
            "categories": category_id,
            "page": page,
            "per_page": per_page or self.profile.page_size,
        })

    def get_posts_by_tag(self, tag_id: int, page: int = 1, per_page: Optional[int] = None) -> PostsPage:
        return self._posts_page({
            "tags": tag_id,
            "page": page,
            "per_page": per_page or self.profile.page_size,
        })

    def get_post_by_slug(self, slug: str) -> Optional[Post]:
        """Get a post by slug, or None if no post matches."""
        url = build_url(f"{self.wp_v2}/posts", {"slug": slug, "_embed": 1, "_fields": POST_FIELDS})
        data, _ = self.fetch_json(url)
        if not data:
            return None
        return map_post(data[0], self.profile.excerpt_length)

    def get_total_pages(self, per_page: Optional[int] = None) -> int:
        """Number of post listing pages, at least 1."""
        return self.get_posts(1, per_page).total_pages or 1

    def get_all_post_slugs(
        self,
        limit: int = 1000,
        per_page: Optional[int] = None,
        concurrency: Optional[int] = None,
    ) -> List[str]:
        """Collect the slugs of all posts.

        A page that fails to load ends the traversal; the slugs gathered
        before it are returned.
        """
        def fetch(page: int) -> Tuple[List[str], int]:
            result = self.get_posts(page, per_page)
            return [p.slug for p in result.posts], result.total_pages

        slugs = collect_pages(
            fetch,
            limit,
            label="post slugs",
            partial_on_error=True,
            concurrency=concurrency or self.profile.fetch_concurrency,
        )
        unique = _dedupe(slugs)
        logger.info("Collected %d unique post slugs", len(unique))
        return unique

    def get_all_posts(
        self,
        limit: int = 2000,
        per_page: Optional[int] = None,
        concurrency: Optional[int] = None,
    ) -> List[Post]:
        """Collect all posts, newest first. Errors propagate."""
        def fetch(page: int) -> Tuple[List[Post], int]:
            result = self.get_posts(page, per_page)
            return result.posts, result.total_pages

        posts = collect_pages(
            fetch,
            limit,
            label="posts",
            concurrency=concurrency or self.profile.fetch_concurrency,
        )
        unique: Dict[int, Post] = {}
        for post in posts:
            unique.setdefault(post.id, post)
        return list(unique.values())

    # Taxonomy methods
    def _terms(self, taxonomy: str, params: Dict[str, ParamValue]) -> List[Term]:
        url = build_url(f"{self.wp_v2}/{taxonomy}", {**params, "_fields": TERM_FIELDS})
        data, _ = self.fetch_json(url)
        return [map_term(t) for t in data or []]

    def get_categories(self, per_page: int = MAX_PER_PAGE) -> List[Term]:
        return self._terms("categories", {"per_page": per_page})

    def get_tags(self, per_page: int = MAX_PER_PAGE) -> List[Term]:
        return self._terms("tags", {"per_page": per_page})

    def get_categories_by_ids(self, ids: Optional[Sequence[int]] = None) -> List[Term]:
        """Get the categories with the given ids; no request for an empty list."""
        if not ids:
            return []
        return self._terms("categories", {
            "include": ",".join(str(i) for i in ids),
            "per_page": max(len(ids), 1),
        })

    def get_tags_by_ids(self, ids: Optional[Sequence[int]] = None) -> List[Term]:
        """Get the tags with the given ids; no request for an empty list."""
        if not ids:
            return []
        return self._terms("tags", {
            "include": ",".join(str(i) for i in ids),
            "per_page": max(len(ids), 1),
        })

    # Pages API methods
    def get_page_by_slug(self, slug: str) -> Optional[Page]:
        """Get a page by slug, or None if no page matches."""
        url = build_url(f"{self.wp_v2}/pages", {"slug": slug, "_fields": PAGE_FIELDS})
        data, _ = self.fetch_json(url)
        if not data:
            return None
        return map_page(data[0])

    def get_all_page_slugs(
        self,
        limit: int = 1000,
        per_page: int = 50,
        concurrency: Optional[int] = None,
    ) -> List[str]:
        """Collect the slugs of all pages. Errors propagate."""
        def fetch(page: int) -> Tuple[List[str], int]:
            url = build_url(f"{self.wp_v2}/pages", {"page": page, "per_page": per_page, "_fields": "slug"})
            data, headers = self.fetch_json(url)
            slugs = [item.get("slug") for item in data or [] if isinstance(item, dict)]
            return [s for s in slugs if s], _header_int(headers, "X-WP-TotalPages")

        slugs = collect_pages(
            fetch,
            limit,
            label="page slugs",
            concurrency=concurrency or self.profile.fetch_concurrency,
        )
        return _dedupe(slugs)

    # Comments API methods
    def get_comments_by_post_id(self, post_id: int, per_page: int = MAX_PER_PAGE) -> List[Comment]:
        """Get the comments of a post as a flat, thread-ordered list."""
        url = build_url(f"{self.wp_v2}/comments", {"post": post_id, "per_page": per_page})
        data, _ = self.fetch_json(url)
        return map_comments(data or [], self.profile.avatar_host)

    def get_comment_tree(self, post_id: int, per_page: int = MAX_PER_PAGE) -> CommentTree:
        return CommentTree(self.get_comments_by_post_id(post_id, per_page))

    # User methods
    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user, or None if the user does not exist."""
        try:
            data, _ = self.fetch_json(f"{self.wp_v2}/users/{user_id}")
        except UpstreamRequestError as e:
            if e.status_code == 404:
                logger.debug("User %s not found", user_id)
                return None
            raise
        return map_user(data, self.profile.avatar_host) if data else None

    def gravatar_url(self, email: str, size: int = 160) -> str:
        return gravatar_url(email, size, self.profile.avatar_host)

    # Site information methods
    def get_site_info(self) -> SiteInfo:
        """Get site name and description, cached after the first success."""
        cached = self.site_cache.get()
        if cached is not None:
            return cached
        data, _ = self.fetch_json(self.api_root)
        return self.site_cache.set(map_site_info(data if isinstance(data, dict) else None))

    def fetch_settings(self) -> FetchResult[Settings]:
        """Get site settings without raising."""
        try:
            data, _ = self.fetch_json(f"{self.wp_v2}/settings")
            settings = Settings(**data) if data else Settings()
        except Exception as e:
            logger.warning("Could not fetch WordPress settings, using defaults: %s", e)
            return FetchResult.failed(Settings(), e)
        return FetchResult(value=settings, status="ok" if data else "empty")

    def get_settings(self) -> Settings:
        """Site settings; an empty Settings when they cannot be fetched."""
        return self.fetch_settings().value

    def fetch_links(self, per_page: int = 200) -> FetchResult[List[Link]]:
        """Get visible links without raising."""
        try:
            data, _ = self.fetch_json(build_url(f"{self.wp_v2}/links", {"per_page": per_page}))
            links = filter_visible_links(data or [])
        except Exception as e:
            logger.warning("Could not fetch links: %s", e)
            return FetchResult.failed([], e)
        return FetchResult.of(links)

    def get_links(self, per_page: int = 200) -> List[Link]:
        """Visible links; an empty list when they cannot be fetched."""
        return self.fetch_links(per_page).value

    # Utility methods
    def test_connection(self) -> bool:
        """Check the API root answers."""
        try:
            self.fetch_json(self.api_root)
            return True
        except (requests.exceptions.RequestException, UpstreamRequestError, DecodeError) as e:
            logger.debug("Connection test failed: %s", e)
            return False
