"""Tests for the Settings dataclass, persistence and validation."""

import json

import pytest

from src.settings import ENV_GATEWAY_KEY, ENV_GATEWAY_URL, Settings
from src.settings._backup import _create_settings_backup, _recover_from_backup
from src.utils.exceptions import ConfigError


@pytest.fixture
def settings_file(tmp_path):
    """Path the autouse isolation fixture points SETTINGS_FILE at."""
    return tmp_path / "settings.json"


class TestDefaults:
    """Tests for default values."""

    def test_defaults_validate(self):
        """The defaults are a valid configuration."""
        settings = Settings()
        assert settings.validate() is False
        assert settings.edit_password == "life2024"
        assert settings.password_error_seconds == 2.0
        assert settings.gateway_timeout is None
        assert not settings.gateway_configured


class TestValidation:
    """Tests for Settings.validate()."""

    def test_trailing_slash_normalized(self):
        """A trailing slash on the gateway URL is removed and reported."""
        settings = Settings(gateway_url="https://db.example.com/")
        assert settings.validate() is True
        assert settings.gateway_url == "https://db.example.com"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"log_level": "TRACE"},
            {"gateway_url": "db.example.com"},
            {"gateway_timeout": 0},
            {"edit_password": "   "},
            {"password_error_seconds": -1.0},
            {"thought_position_min": 50.0, "thought_position_span": 60.0},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        """Each invalid field raises ValueError."""
        with pytest.raises(ValueError):
            Settings(**overrides).validate()


class TestGatewayResolution:
    """Tests for environment overrides of the gateway credentials."""

    def test_falls_back_to_settings(self):
        """Without environment variables the JSON values are used."""
        settings = Settings(gateway_url="https://file.example.com", gateway_api_key="k")
        assert settings.resolved_gateway_url() == "https://file.example.com"
        assert settings.resolved_gateway_key() == "k"
        assert settings.gateway_configured

    def test_environment_wins(self, monkeypatch):
        """Environment variables override settings.json."""
        monkeypatch.setenv(ENV_GATEWAY_URL, "https://env.example.com/")
        monkeypatch.setenv(ENV_GATEWAY_KEY, "env-key")
        settings = Settings(gateway_url="https://file.example.com", gateway_api_key="k")

        assert settings.resolved_gateway_url() == "https://env.example.com"
        assert settings.resolved_gateway_key() == "env-key"

    def test_dotenv_file_loaded(self, tmp_path, monkeypatch):
        """A .env file next to the project supplies the credentials."""
        # Register both variables so monkeypatch removes what load_dotenv sets
        for name in (ENV_GATEWAY_URL, ENV_GATEWAY_KEY):
            monkeypatch.setenv(name, "placeholder")
            monkeypatch.delenv(name)
        env_file = tmp_path / ".env"
        env_file.write_text(f"{ENV_GATEWAY_URL}=https://dotenv.example.com\n{ENV_GATEWAY_KEY}=dk\n")

        settings = Settings.load(use_cache=False)

        assert settings.resolved_gateway_url() == "https://dotenv.example.com"
        assert settings.resolved_gateway_key() == "dk"

    def test_environment_credentials_never_saved(self, settings_file, monkeypatch):
        """Resolved environment values are not written to settings.json."""
        monkeypatch.setenv(ENV_GATEWAY_KEY, "secret-from-env")
        settings = Settings.load(use_cache=False)
        settings.save()

        assert "secret-from-env" not in settings_file.read_text()


class TestLoadAndSave:
    """Tests for Settings.load() and Settings.save()."""

    def test_load_creates_file_with_defaults(self, settings_file):
        """First load writes the defaults to disk."""
        settings = Settings.load(use_cache=False)

        assert settings_file.exists()
        assert json.loads(settings_file.read_text())["site_title"] == settings.site_title

    def test_round_trip(self, settings_file):
        """Saved values come back on the next load."""
        settings = Settings.load(use_cache=False)
        settings.owner_name = "Sam"
        settings.save()

        Settings.clear_cache()
        assert Settings.load().owner_name == "Sam"

    def test_load_is_cached(self):
        """Repeated loads return the same instance until the cache is cleared."""
        first = Settings.load()
        assert Settings.load() is first
        Settings.clear_cache()
        assert Settings.load() is not first

    def test_obsolete_keys_dropped_and_new_keys_added(self, settings_file):
        """Stored files are migrated to the current field set."""
        settings_file.write_text(json.dumps({"owner_name": "Kai", "legacy_theme": "x"}))

        settings = Settings.load(use_cache=False)
        stored = json.loads(settings_file.read_text())

        assert settings.owner_name == "Kai"
        assert "legacy_theme" not in stored
        assert "edit_password" in stored

    def test_corrupt_file_recovers_from_backup(self, settings_file):
        """Invalid JSON falls back to the .bak copy and is preserved aside."""
        settings_file.with_suffix(".json.bak").write_text(json.dumps({"owner_name": "Backup"}))
        settings_file.write_text("{not json")

        settings = Settings.load(use_cache=False)

        assert settings.owner_name == "Backup"
        assert settings_file.with_suffix(".json.corrupt").exists()

    @pytest.mark.parametrize("stored", [{"log_level": 5}, {"password_error_seconds": "2"}])
    def test_wrong_type_raises_config_error(self, settings_file, stored):
        """A stored value of the wrong type is a ConfigError."""
        settings_file.write_text(json.dumps(stored))
        with pytest.raises(ConfigError):
            Settings.load(use_cache=False)

    def test_invalid_stored_value_raises(self, settings_file):
        """Stored values that fail validation surface as ValueError."""
        settings_file.write_text(json.dumps({"log_level": "LOUD"}))
        with pytest.raises(ValueError):
            Settings.load(use_cache=False)

    def test_save_creates_backup(self, settings_file):
        """Saving over an existing file keeps the previous content as .bak."""
        Settings.load(use_cache=False)
        settings = Settings.load()
        settings.owner_name = "Changed"
        settings.save()

        backup = json.loads(settings_file.with_suffix(".json.bak").read_text())
        assert backup["owner_name"] == ""


class TestBackupHelpers:
    """Tests for _create_settings_backup() and _recover_from_backup()."""

    def test_skips_missing_and_empty(self, tmp_path):
        """Nothing to copy means no backup."""
        path = tmp_path / "settings.json"
        assert _create_settings_backup(path) is False
        path.write_text("")
        assert _create_settings_backup(path) is False

    def test_skips_non_object(self, tmp_path):
        """A JSON list is never copied over the backup."""
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        assert _create_settings_backup(path) is False

    def test_recover_requires_object(self, tmp_path):
        """An empty or non-object backup recovers nothing."""
        path = tmp_path / "settings.json"
        assert _recover_from_backup(path) is None
        path.with_suffix(".json.bak").write_text("{}")
        assert _recover_from_backup(path) is None
