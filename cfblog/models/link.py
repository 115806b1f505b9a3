"""Link model for the WordPress links endpoint."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class LinkCategory(BaseModel):
    """Category a link belongs to."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    slug: str


class Link(BaseModel):
    """Blogroll entry."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    url: str
    description: Optional[str] = None
    avatar: Optional[str] = None
    category: Optional[LinkCategory] = None
    target: Optional[str] = None
    visible: Optional[str] = None
    rating: Optional[int] = None
    sort_order: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_visible(self) -> bool:
        """Links are public unless explicitly hidden."""
        return (self.visible or "yes") == "yes"
