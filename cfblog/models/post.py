"""Post and Page models for WordPress content."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class Post(BaseModel):
    """Normalized WordPress post."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    title: str
    excerpt: Optional[str] = None
    content: Optional[str] = None
    date: datetime
    modified: datetime
    author: int = 0
    categories: List[int] = []
    tags: List[int] = []


class PostsPage(BaseModel):
    """One page of posts with the totals reported by the API."""

    model_config = ConfigDict(frozen=True)

    posts: List[Post]
    total: int = 0
    total_pages: int = 0


class Page(BaseModel):
    """Normalized WordPress page."""

    model_config = ConfigDict(frozen=True)

    id: int
    slug: str
    title: str
    content: Optional[str] = None
    date: datetime
    modified: datetime
