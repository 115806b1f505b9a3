"""User model for WordPress authors."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Normalized WordPress user."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    url: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None
    avatar: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
