"""Site information and settings models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class SiteInfo(BaseModel):
    """Site metadata served at the API root."""

    model_config = ConfigDict(frozen=True)

    name: str = "CFBlog"
    description: Optional[str] = None
    url: Optional[str] = None
    home: Optional[str] = None


class Settings(BaseModel):
    """Site-wide settings from /wp/v2/settings.

    Every field is optional; unknown keys are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    # Theme settings
    admin_email: Optional[str] = None
    site_footer_text: Optional[str] = None
    site_title: Optional[str] = None
    site_description: Optional[str] = None
    site_url: Optional[str] = None
    site_logo: Optional[str] = None
    site_favicon: Optional[str] = None
    site_author: Optional[str] = None
    site_keywords: Optional[str] = None
    head_html: Optional[str] = None

    # WordPress core settings
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None
    language: Optional[str] = None
    timezone: Optional[str] = None
