"""Unit tests for config.py module.

Tests the Profile model and ConfigManager for profile validation, file
storage, profile switching and environment overrides.
"""

import json

import pytest
from pydantic import ValidationError

from cfblog.config import ConfigManager, Profile, apply_environment
from cfblog.exceptions import ConfigError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep real environment overrides out of the tests."""
    monkeypatch.delenv("CFBLOG_API", raising=False)
    monkeypatch.delenv("SITE_URL", raising=False)


class TestProfile:
    """Test cases for the Profile model."""

    def test_defaults(self):
        """Test the built-in defaults."""
        profile = Profile(name="default")

        assert profile.api_url == "https://cfblog.zxd.im"
        assert profile.site_url == "http://localhost:4321"
        assert profile.page_size == 9
        assert profile.timeout is None
        assert profile.avatar_host == "cravatar.cn"
        assert profile.excerpt_length == 180
        assert profile.fetch_concurrency == 1
        assert profile.active is False

    def test_api_paths(self):
        """Test the API root and wp/v2 base are derived from the site root."""
        profile = Profile(name="p", api_url="https://wp.example.com/")

        assert profile.api_url == "https://wp.example.com"
        assert profile.api_root == "https://wp.example.com/wp-json"
        assert profile.wp_v2 == "https://wp.example.com/wp-json/wp/v2"

    @pytest.mark.parametrize("url", ["wp.example.com", "ftp://wp.example.com", "https://"])
    def test_invalid_url(self, url):
        """Test URLs without an http(s) scheme and host are rejected."""
        with pytest.raises(ValidationError):
            Profile(name="p", api_url=url)

    @pytest.mark.parametrize("page_size", [0, 101])
    def test_page_size_bounds(self, page_size):
        with pytest.raises(ValidationError):
            Profile(name="p", page_size=page_size)

    @pytest.mark.parametrize("timeout", [0, -1, 301])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            Profile(name="p", timeout=timeout)

    @pytest.mark.parametrize("concurrency", [0, 17])
    def test_fetch_concurrency_bounds(self, concurrency):
        with pytest.raises(ValidationError):
            Profile(name="p", fetch_concurrency=concurrency)

    def test_avatar_host_must_be_bare(self):
        """Test avatar hosts with a scheme are rejected."""
        with pytest.raises(ValidationError):
            Profile(name="p", avatar_host="https://cravatar.cn")


class TestEnvironment:
    """Test cases for environment overrides."""

    def test_no_overrides(self):
        """Test the profile is returned unchanged without overrides."""
        profile = Profile(name="p")
        assert apply_environment(profile) is profile

    def test_overrides(self, monkeypatch):
        """Test CFBLOG_API and SITE_URL replace the configured URLs."""
        monkeypatch.setenv("CFBLOG_API", "https://env-api.test/")
        monkeypatch.setenv("SITE_URL", "https://env-site.test")

        profile = apply_environment(Profile(name="p", page_size=5))

        assert profile.api_url == "https://env-api.test"
        assert profile.site_url == "https://env-site.test"
        assert profile.page_size == 5

    def test_invalid_override(self, monkeypatch):
        """Test an invalid environment URL is rejected."""
        monkeypatch.setenv("CFBLOG_API", "not a url")

        with pytest.raises(ValidationError):
            apply_environment(Profile(name="p"))


class TestConfigManager:
    """Test cases for ConfigManager."""

    @pytest.fixture
    def manager(self, tmp_path):
        """ConfigManager rooted in a temporary directory."""
        return ConfigManager(tmp_path / "cfblog")

    def test_creates_directories(self, manager):
        assert manager.config_dir.is_dir()
        assert manager.profiles_dir.is_dir()

    def test_first_profile_becomes_active(self, manager):
        """Test the first created profile is activated."""
        manager.create_profile("main", api_url="https://wp.example.com")
        manager.create_profile("staging", api_url="https://staging.example.com")

        assert manager.get_active_profile() == "main"
        assert [p["active"] for p in manager.list_profiles()] == [True, False]

    def test_duplicate_profile(self, manager):
        manager.create_profile("main")
        with pytest.raises(ConfigError, match="already exists"):
            manager.create_profile("main")

    def test_invalid_settings(self, manager):
        """Test invalid settings surface as ConfigError."""
        with pytest.raises(ConfigError, match="Failed to create profile"):
            manager.create_profile("bad", page_size=0)

    def test_profiles_persist(self, manager):
        """Test profiles and the active profile are read back from disk."""
        manager.create_profile("main", api_url="https://wp.example.com", page_size=12)
        manager.create_profile("staging")
        manager.set_active_profile("staging")

        reloaded = ConfigManager(manager.config_dir)

        assert reloaded.get_active_profile() == "staging"
        assert reloaded.get_profile("main").page_size == 12
        assert "active_profile = \"staging\"" in manager.config_file.read_text()

    def test_unknown_profile(self, manager):
        with pytest.raises(ConfigError, match="not found"):
            manager.get_profile("missing")
        with pytest.raises(ConfigError, match="not found"):
            manager.set_active_profile("missing")
        with pytest.raises(ConfigError, match="not found"):
            manager.delete_profile("missing")

    def test_default_profile_without_config(self, manager):
        """Test the built-in profile is used when nothing is configured."""
        profile = manager.get_default_profile()

        assert profile.name == "default"
        assert profile.api_url == "https://cfblog.zxd.im"

    def test_default_profile_with_environment(self, manager, monkeypatch):
        """Test environment overrides apply to the active profile."""
        manager.create_profile("main", api_url="https://wp.example.com", page_size=4)
        monkeypatch.setenv("CFBLOG_API", "https://env.test")

        profile = manager.get_default_profile()

        assert profile.api_url == "https://env.test"
        assert profile.page_size == 4

    def test_delete_active_profile(self, manager):
        """Test deleting the active profile clears the selection."""
        manager.create_profile("main")
        manager.delete_profile("main")

        assert manager.get_active_profile() is None
        assert not (manager.profiles_dir / "main.json").exists()
        assert manager.list_profiles() == []

    def test_export_import(self, manager, tmp_path):
        """Test a profile survives export and import."""
        manager.create_profile("main", api_url="https://wp.example.com", timeout=15)
        export_file = tmp_path / "main.json"
        manager.export_profile("main", export_file)

        exported = json.loads(export_file.read_text())
        assert "active" not in exported

        other = ConfigManager(tmp_path / "other")
        imported = other.import_profile(export_file)

        assert imported.api_url == "https://wp.example.com"
        assert imported.timeout == 15

    def test_import_existing_requires_overwrite(self, manager, tmp_path):
        manager.create_profile("main")
        export_file = tmp_path / "main.json"
        manager.export_profile("main", export_file)

        with pytest.raises(ConfigError, match="already exists"):
            manager.import_profile(export_file)
        assert manager.import_profile(export_file, overwrite=True).name == "main"

    def test_import_invalid_file(self, manager, tmp_path):
        """Test unreadable and nameless import files."""
        broken = tmp_path / "broken.json"
        broken.write_text("{not json")
        nameless = tmp_path / "nameless.json"
        nameless.write_text(json.dumps({"api_url": "https://wp.example.com"}))

        with pytest.raises(ConfigError, match="Failed to import"):
            manager.import_profile(broken)
        with pytest.raises(ConfigError, match="name not found"):
            manager.import_profile(nameless)

    def test_corrupt_config_file(self, tmp_path):
        """Test an unparsable config file raises ConfigError."""
        config_dir = tmp_path / "cfblog"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("active_profile = ")

        with pytest.raises(ConfigError, match="Failed to load configuration"):
            ConfigManager(config_dir)

    def test_stale_active_profile(self, tmp_path):
        """Test an active profile without a profile file is ignored."""
        config_dir = tmp_path / "cfblog"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text('active_profile = "gone"\n')

        assert ConfigManager(config_dir).get_active_profile() is None
