"""Comment models for WordPress discussions."""

from datetime import datetime
from typing import Dict, Iterator, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict


class Comment(BaseModel):
    """Normalized comment.

    Replies are referenced by id through ``child_ids`` instead of being nested,
    so a thread of any depth stays a flat list.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    post: int
    parent: int = 0
    author_name: str
    author_url: Optional[str] = None
    avatar: Optional[str] = None
    avatar_hash: Optional[str] = None
    post_title: Optional[str] = None
    date: datetime
    content_html: str = ""
    depth: int = 0
    child_ids: Tuple[int, ...] = ()


class CommentTree:
    """Id-indexed view over a flat list of comments."""

    def __init__(self, comments: List[Comment]) -> None:
        self._comments: Dict[int, Comment] = {}
        self._children: Dict[int, List[int]] = {}

        for comment in comments:
            self._comments.setdefault(comment.id, comment)

        for comment in self._comments.values():
            child_ids = list(comment.child_ids)
            self._children.setdefault(comment.id, []).extend(child_ids)

        # Flat API responses only carry parent ids
        for comment in self._comments.values():
            if comment.parent and comment.parent in self._comments:
                siblings = self._children.setdefault(comment.parent, [])
                if comment.id not in siblings:
                    siblings.append(comment.id)

    def __len__(self) -> int:
        return len(self._comments)

    def __contains__(self, comment_id: int) -> bool:
        return comment_id in self._comments

    def get(self, comment_id: int) -> Optional[Comment]:
        return self._comments.get(comment_id)

    @property
    def roots(self) -> List[Comment]:
        """Top-level comments, plus replies whose parent is not in the tree."""
        return [
            c for c in self._comments.values()
            if not c.parent or c.parent not in self._comments
        ]

    def children_of(self, comment_id: int) -> List[Comment]:
        return [
            self._comments[child_id]
            for child_id in self._children.get(comment_id, [])
            if child_id in self._comments
        ]

    def walk(self) -> Iterator[Tuple[int, Comment]]:
        """Yield ``(level, comment)`` in thread order without recursion."""
        seen = set()
        stack = [(0, c) for c in reversed(self.roots)]
        while stack:
            level, comment = stack.pop()
            if comment.id in seen:
                continue
            seen.add(comment.id)
            yield level, comment
            for child in reversed(self.children_of(comment.id)):
                stack.append((level + 1, child))
