"""Data models for cfblog.

This package contains Pydantic models for the WordPress entities the
gateway exposes: posts, pages, terms, links, comments, users and site
metadata. All models are immutable once constructed.
"""

from .post import Post, PostsPage, Page
from .term import Term
from .link import Link, LinkCategory
from .comment import Comment, CommentTree
from .user import User
from .site import SiteInfo, Settings

__all__ = [
    "Post",
    "PostsPage",
    "Page",
    "Term",
    "Link",
    "LinkCategory",
    "Comment",
    "CommentTree",
    "User",
    "SiteInfo",
    "Settings",
]
