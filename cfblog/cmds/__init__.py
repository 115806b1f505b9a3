"""Command modules for the cfblog CLI.

This module exports all command groups (Typer apps) that can be registered
with the main application.
"""

from .posts import app as posts_app
from .pages import app as pages_app
from .terms import app as terms_app
from .comments import app as comments_app
from .site import app as site_app
from .feed import app as feed_app
from .config import app as config_app

__all__ = [
    "posts_app",
    "pages_app",
    "terms_app",
    "comments_app",
    "site_app",
    "feed_app",
    "config_app",
]
