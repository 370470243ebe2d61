"""
Unit tests for configuration and the in-memory log buffer.
"""

from novelcraft.config import AppConfig
from novelcraft.utils.logging import AppLogger, LogBuffer, LogEntry, LogLevel, get_log_buffer


class TestAppConfig:

    def test_defaults(self, monkeypatch):
        for name in ("PHASE1_MODEL", "PHASE1_TEMPERATURE", "PHASE1_MAX_TOKENS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = AppConfig(_env_file=None)

        assert settings.PHASE1_MODEL == "claude-sonnet-4-20250514"
        assert settings.PHASE1_TEMPERATURE == 1.0
        assert settings.PHASE1_MAX_TOKENS == 8192
        assert settings.LOG_LEVEL == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PHASE1_MODEL", "claude-opus-4-1")
        monkeypatch.setenv("PHASE1_MAX_TOKENS", "4000")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = AppConfig(_env_file=None)

        assert settings.PHASE1_MODEL == "claude-opus-4-1"
        assert settings.PHASE1_MAX_TOKENS == 4000
        assert settings.LOG_LEVEL == "DEBUG"

    def test_anthropic_configured(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        assert not AppConfig(_env_file=None).anthropic_configured
        assert AppConfig(_env_file=None, ANTHROPIC_API_KEY="sk-test").anthropic_configured


class TestLogBuffer:

    def test_bounded(self):
        buffer = LogBuffer(max_size=3)
        for i in range(5):
            buffer.add(LogEntry(LogLevel.INFO, f"entry {i}"))

        entries = buffer.get_recent()
        assert [e["message"] for e in entries] == ["entry 4", "entry 3", "entry 2"]

    def test_warning_filter(self):
        buffer = LogBuffer()
        buffer.add(LogEntry(LogLevel.INFO, "fine", source="phase1"))
        buffer.add(LogEntry(LogLevel.WARNING, "mismatch", source="phase1"))
        buffer.add(LogEntry(LogLevel.WARNING, "other", source="blueprints"))

        warnings = buffer.get_warnings(source="phase1")
        assert [w["message"] for w in warnings] == ["mismatch"]
        assert len(buffer.get_warnings()) == 2

    def test_clear(self):
        buffer = LogBuffer()
        buffer.add(LogEntry(LogLevel.ERROR, "boom"))
        buffer.clear()

        assert buffer.get_recent() == []

    def test_app_logger_writes_to_global_buffer(self):
        AppLogger("tests").warning("Something odd", chapter=4)

        entries = get_log_buffer().get_recent(source="tests")
        assert len(entries) == 1
        assert entries[0]["level"] == "warning"
        assert entries[0]["metadata"] == {"chapter": 4}
