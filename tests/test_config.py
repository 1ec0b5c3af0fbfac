"""Tests for configuration loading."""

from pathlib import Path

import pytest

from calm_planner.config import DATA_DIR, Config, load_config
from calm_planner.core.tasks import Bucket, Priority, TaskDraft, Tone


@pytest.fixture
def conf_file(tmp_path):
    return tmp_path / "planner.conf"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.conf") == Config()

    def test_parses_values(self, conf_file):
        conf_file.write_text(
            "\n".join(
                [
                    "# Calm Planner settings",
                    "DATA_DIR = ~/planner",
                    'STORAGE_KEY = "my-planner" # quoted',
                    "DEFAULT_TIME = 08:15",
                    "DEFAULT_DURATION = 45",
                    "DEFAULT_PRIORITY = High",
                    "DEFAULT_BUCKET = morning",
                    "DEFAULT_ICON = '📚'",
                    "DEFAULT_COLOR = sky  # inline comment",
                ]
            )
        )
        config = load_config(conf_file)
        assert config.data_dir == "~/planner"
        assert config.storage_key == "my-planner"
        assert config.default_time == "08:15"
        assert config.default_duration == 45
        assert config.default_priority == Priority.HIGH
        assert config.default_bucket == Bucket.MORNING
        assert config.default_icon == "📚"
        assert config.default_color == Tone.SKY

    def test_skips_blank_and_malformed_lines(self, conf_file):
        conf_file.write_text("\n\nno equals sign here\nUNKNOWN_KEY = 1\nDEFAULT_TIME = 10:00\n")
        config = load_config(conf_file)
        assert config.default_time == "10:00"

    def test_invalid_values_ignored(self, conf_file, caplog):
        conf_file.write_text("DEFAULT_DURATION = lots\nDEFAULT_COLOR = black\nDEFAULT_TIME = 11:00\n")
        config = load_config(conf_file)
        assert config.default_duration == 30
        assert config.default_color == Tone.MINT
        assert config.default_time == "11:00"
        assert "DEFAULT_DURATION" in caplog.text


class TestConfig:
    def test_data_path_default(self):
        assert Config().data_path == DATA_DIR

    def test_data_path_expands_user(self):
        assert Config(data_dir="~/planner").data_path == Path.home() / "planner"

    def test_draft_defaults(self):
        config = Config(default_time="08:00", default_duration=15, default_priority=Priority.HIGH)
        assert config.draft_defaults() == TaskDraft(
            title="",
            time="08:00",
            duration=15,
            priority=Priority.HIGH,
            bucket=Bucket.ANYTIME,
            icon="✨",
            color=Tone.MINT,
        )

    def test_draft_defaults_bucket_override(self):
        assert Config().draft_defaults(Bucket.EVENING).bucket == Bucket.EVENING
