"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from inxtone.config import InxtoneSettings


class TestInxtoneSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("INXTONE_DB_PATH", raising=False)

        settings = InxtoneSettings()

        assert settings.db_path.name == "story.db"
        assert settings.log_level == "warning"
        assert settings.context.total_budget == 1_000_000
        assert settings.context.prev_chapter_tail_length == 500
        assert settings.context.content_priority == 1000
        assert settings.context.custom_priority == 200

    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INXTONE_CONTEXT__TOTAL_BUDGET", "200000")
        monkeypatch.setenv("INXTONE_CONTEXT__PLOT_PRIORITY", "900")

        settings = InxtoneSettings()

        assert settings.context.total_budget == 200_000
        assert settings.context.plot_priority == 900
        assert settings.context.output_reserve == 4_000

    def test_path_env_override(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("INXTONE_DB_PATH", str(tmp_path / "other.db"))
        monkeypatch.setenv("INXTONE_LOG_FORMAT", "json")

        settings = InxtoneSettings()

        assert settings.db_path == tmp_path / "other.db"
        assert settings.log_format == "json"
