"""
Unit tests for client settings.
"""

from shared.config import MoodleSettings, get_settings


class TestMoodleSettings:
    """Test cases for MoodleSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MOODLE_URL", raising=False)
        monkeypatch.delenv("MOODLE_TOKEN", raising=False)

        settings = MoodleSettings(_env_file=None)

        assert settings.url == "http://localhost/moodle/"
        assert settings.token == ""
        assert settings.smtp_host is None
        assert "env" not in MoodleSettings.model_fields

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv("MOODLE_URL", "https://moodle.example.edu/")
        monkeypatch.setenv("MOODLE_RETRY_ATTEMPTS", "5")

        settings = get_settings()

        assert settings.url == "https://moodle.example.edu/"
        assert settings.retry_attempts == 5

    def test_overrides(self):
        assert get_settings(log_level="debug").log_level == "debug"
