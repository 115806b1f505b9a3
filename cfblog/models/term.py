"""Term model for WordPress categories and tags."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class Term(BaseModel):
    """Category or tag."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    slug: str
    count: Optional[int] = None
    description: Optional[str] = None
