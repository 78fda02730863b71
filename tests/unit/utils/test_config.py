"""Tests for settings loading."""
from src.utils.config import (
    DEFAULT_DATA_FILE,
    DEFAULT_EVENTS,
    DEFAULT_SIGNATURE,
    load_env_file,
    load_settings,
    parse_event_list,
)


class TestParseEventList:
    """Tests for parse_event_list."""

    def test_empty_uses_defaults(self):
        """No value falls back to the default catalogue."""
        assert parse_event_list(None) == DEFAULT_EVENTS
        assert parse_event_list("") == DEFAULT_EVENTS

    def test_trims_and_deduplicates(self):
        """Names are trimmed, blanks dropped, order kept."""
        assert parse_event_list(" Conf , Meetup,,Conf ") == ("Conf", "Meetup")

    def test_only_separators_uses_defaults(self):
        """A value with no usable names falls back to defaults."""
        assert parse_event_list(" , ,") == DEFAULT_EVENTS


class TestLoadEnvFile:
    """Tests for .env parsing."""

    def test_reads_known_keys(self, tmp_path):
        """Known keys are copied, comments and unknown keys ignored."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "EVENT_REGISTRATION_SIGNATURE=\"The Crew\"\n"
            "UNRELATED=1\n"
            "not a setting\n"
            "LOG_LEVEL=debug\n",
            encoding="utf-8",
        )
        environ = {}

        load_env_file(env_file, force=True, environ=environ)

        assert environ == {"EVENT_REGISTRATION_SIGNATURE": "The Crew", "LOG_LEVEL": "debug"}

    def test_existing_values_win(self, tmp_path):
        """Values already in the environment are not overridden."""
        env_file = tmp_path / ".env"
        env_file.write_text("LOG_LEVEL=DEBUG\n", encoding="utf-8")
        environ = {"LOG_LEVEL": "WARNING"}

        load_env_file(env_file, force=True, environ=environ)

        assert environ["LOG_LEVEL"] == "WARNING"

    def test_missing_file_is_ignored(self, tmp_path):
        """A missing .env file is not an error."""
        environ = {}
        load_env_file(tmp_path / "missing.env", force=True, environ=environ)
        assert environ == {}


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Without configuration the defaults apply."""
        for key in ("EVENT_REGISTRATION_DATA_FILE", "EVENT_REGISTRATION_EVENTS",
                    "EVENT_REGISTRATION_SIGNATURE", "LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)

        settings = load_settings(tmp_path / "missing.env")

        assert settings.data_file == DEFAULT_DATA_FILE
        assert settings.events == DEFAULT_EVENTS
        assert settings.signature == DEFAULT_SIGNATURE
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Environment variables configure every setting."""
        monkeypatch.setenv("EVENT_REGISTRATION_DATA_FILE", str(tmp_path / "store.json"))
        monkeypatch.setenv("EVENT_REGISTRATION_EVENTS", "Conf,Meetup")
        monkeypatch.setenv("EVENT_REGISTRATION_SIGNATURE", "The Crew")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = load_settings(tmp_path / "missing.env")

        assert settings.data_file == str(tmp_path / "store.json")
        assert settings.events == ("Conf", "Meetup")
        assert settings.signature == "The Crew"
        assert settings.log_level == "DEBUG"
