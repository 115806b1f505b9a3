"""Configuration management for cfblog.

This module provides configuration profile management, including creating,
deleting, and switching between different WordPress content sources.
"""

import os
import tomllib
import json
from pathlib import Path
from typing import Dict, List, Optional, Any
from urllib.parse import urlparse
import re

from pydantic import BaseModel, Field, field_validator

from .exceptions import ConfigError

DEFAULT_API_URL = "https://cfblog.zxd.im"
DEFAULT_SITE_URL = "http://localhost:4321"
DEFAULT_AVATAR_HOST = "cravatar.cn"
PAGE_SIZE = 9


class Profile(BaseModel):
    """Configuration profile for a WordPress content source."""

    name: str = Field(..., description="Profile name")
    api_url: str = Field(default=DEFAULT_API_URL, description="WordPress site root (without /wp-json)")
    site_url: str = Field(default=DEFAULT_SITE_URL, description="Public URL of the blog frontend")
    page_size: int = Field(default=PAGE_SIZE, description="Posts per listing page")
    timeout: Optional[float] = Field(default=None, description="Request timeout in seconds, None waits indefinitely")
    avatar_host: str = Field(default=DEFAULT_AVATAR_HOST, description="Host serving avatar images")
    excerpt_length: int = Field(default=180, description="Maximum excerpt length in characters")
    language: str = Field(default="zh-CN", description="Feed language")
    fetch_concurrency: int = Field(default=1, description="Parallel page fetches for bulk operations")
    active: bool = Field(default=False, description="Whether this is the active profile")

    @field_validator("api_url", "site_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format and drop the trailing slash."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Invalid URL: {v}")
        return v.rstrip("/")

    @field_validator("avatar_host")
    @classmethod
    def validate_avatar_host(cls, v: str) -> str:
        """Validate avatar host is a bare host name."""
        if not re.match(r"^[A-Za-z0-9.-]+(:\d+)?$", v):
            raise ValueError("Avatar host must be a host name without scheme or path")
        return v

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size against the WordPress per_page ceiling."""
        if v < 1 or v > 100:
            raise ValueError("Page size must be between 1 and 100")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        """Validate timeout value."""
        if v is None:
            return v
        if v <= 0:
            raise ValueError("Timeout must be greater than 0")
        if v > 300:  # 5 minutes max
            raise ValueError("Timeout cannot exceed 300 seconds")
        return v

    @field_validator("excerpt_length")
    @classmethod
    def validate_excerpt_length(cls, v: int) -> int:
        """Validate excerpt length."""
        if v < 1:
            raise ValueError("Excerpt length must be positive")
        return v

    @field_validator("fetch_concurrency")
    @classmethod
    def validate_fetch_concurrency(cls, v: int) -> int:
        """Validate fetch concurrency value."""
        if v < 1:
            raise ValueError("Fetch concurrency must be at least 1")
        if v > 16:
            raise ValueError("Fetch concurrency cannot exceed 16")
        return v

    @property
    def api_root(self) -> str:
        """Root of the WordPress REST API."""
        return f"{self.api_url}/wp-json"

    @property
    def wp_v2(self) -> str:
        """Base URL of the wp/v2 namespace."""
        return f"{self.api_root}/wp/v2"


def apply_environment(profile: Profile) -> Profile:
    """Return a copy of the profile with environment overrides applied.

    ``CFBLOG_API`` replaces the API URL and ``SITE_URL`` the frontend URL.
    """
    overrides: Dict[str, Any] = {}
    env_api = os.getenv("CFBLOG_API")
    env_site = os.getenv("SITE_URL")
    if env_api:
        overrides["api_url"] = env_api
    if env_site:
        overrides["site_url"] = env_site
    if not overrides:
        return profile
    return Profile(**{**profile.model_dump(), **overrides})


class ConfigManager:
    """Manages configuration profiles for WordPress content sources."""

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_dir: Configuration directory path. If None, uses default.
        """
        self.config_dir = config_dir or Path.home() / ".cfblog"
        self.config_file = self.config_dir / "config.toml"
        self.profiles_dir = self.config_dir / "profiles"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.profiles_dir.mkdir(exist_ok=True)

        self._profiles: Dict[str, Profile] = {}
        self._active_profile: Optional[str] = None
        self._load_config()

    def create_profile(self, name: str, **settings: Any) -> Profile:
        """Create a new configuration profile.

        Args:
            name: Profile name
            **settings: Profile fields (api_url, site_url, page_size, ...)

        Returns:
            Created profile

        Raises:
            ConfigError: If profile creation fails
        """
        if name in self._profiles:
            raise ConfigError(f"Profile '{name}' already exists")

        try:
            profile = Profile(name=name, **settings)
        except ValueError as e:
            raise ConfigError(f"Failed to create profile: {e}")

        self._profiles[name] = profile
        self._save_profile(profile)
        if self._active_profile is None:
            self._active_profile = name
        self._save_config()
        return profile

    def list_profiles(self) -> List[Dict[str, Any]]:
        """List all available profiles.

        Returns:
            List of profile configurations
        """
        profiles = []
        for profile in self._profiles.values():
            profile_dict = profile.model_dump()
            profile_dict["active"] = profile.name == self._active_profile
            profiles.append(profile_dict)

        return profiles

    def set_active_profile(self, name: str) -> None:
        """Set the active profile.

        Raises:
            ConfigError: If profile doesn't exist
        """
        if name not in self._profiles:
            raise ConfigError(f"Profile '{name}' not found")

        self._active_profile = name
        self._save_config()

    def get_active_profile(self) -> Optional[str]:
        """Get the name of the active profile."""
        return self._active_profile

    def get_profile(self, name: str) -> Profile:
        """Get a specific profile by name.

        Raises:
            ConfigError: If profile doesn't exist
        """
        if name not in self._profiles:
            raise ConfigError(f"Profile '{name}' not found")

        return self._profiles[name]

    def get_default_profile(self) -> Profile:
        """Get the active profile, or a built-in default when none is set.

        The returned profile has environment overrides applied.
        """
        if self._active_profile:
            profile = self._profiles[self._active_profile]
        else:
            profile = Profile(name="default")
        return apply_environment(profile)

    def delete_profile(self, name: str) -> None:
        """Delete a configuration profile.

        Raises:
            ConfigError: If profile doesn't exist
        """
        if name not in self._profiles:
            raise ConfigError(f"Profile '{name}' not found")

        if self._active_profile == name:
            self._active_profile = None

        del self._profiles[name]

        profile_file = self.profiles_dir / f"{name}.json"
        if profile_file.exists():
            profile_file.unlink()

        self._save_config()

    def export_profile(self, name: str, file_path: Path) -> None:
        """Export a profile to a JSON file.

        Raises:
            ConfigError: If profile doesn't exist or export fails
        """
        profile = self.get_profile(name)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(profile.model_dump(exclude={"active"}), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to export profile: {e}")

    def import_profile(self, file_path: Path, overwrite: bool = False) -> Profile:
        """Import a profile from a JSON file.

        Args:
            file_path: Path to import file
            overwrite: Whether to overwrite existing profile

        Raises:
            ConfigError: If import fails
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                profile_data = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to import profile: {e}")

        name = profile_data.get("name")
        if not name:
            raise ConfigError("Profile name not found in import file")

        if name in self._profiles and not overwrite:
            raise ConfigError(f"Profile '{name}' already exists. Use overwrite=True to replace.")

        try:
            profile = Profile(**profile_data)
        except ValueError as e:
            raise ConfigError(f"Failed to import profile: {e}")

        self._profiles[name] = profile
        self._save_profile(profile)
        self._save_config()
        return profile

    def _load_config(self) -> None:
        """Load configuration from disk."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "rb") as f:
                    config_data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                raise ConfigError(f"Failed to load configuration: {e}")
            self._active_profile = config_data.get("active_profile") or None

        for profile_file in self.profiles_dir.glob("*.json"):
            try:
                with open(profile_file, "r", encoding="utf-8") as f:
                    profile = Profile(**json.load(f))
            except (OSError, ValueError) as e:
                raise ConfigError(f"Failed to load profile {profile_file}: {e}")
            self._profiles[profile.name] = profile

        if self._active_profile not in self._profiles:
            self._active_profile = None

    def _save_config(self) -> None:
        """Save configuration to file."""
        # tomllib is read-only, so the file is written by hand
        toml_content = '# cfblog configuration\nversion = "1.0"\n'
        if self._active_profile:
            toml_content += f'active_profile = "{self._active_profile}"\n'

        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                f.write(toml_content)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}")

    def _save_profile(self, profile: Profile) -> None:
        """Save individual profile to file."""
        profile_file = self.profiles_dir / f"{profile.name}.json"
        try:
            with open(profile_file, "w", encoding="utf-8") as f:
                json.dump(profile.model_dump(exclude={"active"}), f, indent=2)
        except OSError as e:
            raise ConfigError(f"Failed to save profile: {e}")
