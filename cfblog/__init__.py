"""cfblog content gateway.

A client for the WordPress REST API that backs a server-rendered blog.
Provides URL building, JSON fetching, normalization of WordPress
responses into immutable models, paginated collection fetches, RSS
feed assembly and a command-line interface.
"""

__version__ = "0.1.0"
__description__ = "WordPress content gateway and RSS builder for a server-rendered blog"

from .client import WordPressClient, build_url
from .config import ConfigManager, Profile
from .cache import SiteInfoCache
from .result import FetchResult
from .pagination import PaginationWindow, calc_pagination, collect_pages
from .feed import FeedItem, FeedResponse, build_feed_items, generate_rss, render_rss
from .markup import is_probably_markdown, md_to_html
from .exceptions import (
    CFBlogError,
    ConfigError,
    APIError,
    UpstreamRequestError,
    DecodeError,
    FeedError,
    OutputFormatError,
)

__all__ = [
    "__version__",
    "__description__",
    "WordPressClient",
    "build_url",
    "ConfigManager",
    "Profile",
    "SiteInfoCache",
    "FetchResult",
    "PaginationWindow",
    "calc_pagination",
    "collect_pages",
    "FeedItem",
    "FeedResponse",
    "build_feed_items",
    "generate_rss",
    "render_rss",
    "is_probably_markdown",
    "md_to_html",
    "CFBlogError",
    "ConfigError",
    "APIError",
    "UpstreamRequestError",
    "DecodeError",
    "FeedError",
    "OutputFormatError",
]
