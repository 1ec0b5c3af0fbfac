"""Configuration management for Calm Planner."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.tasks import DEFAULT_ICON, Bucket, Priority, TaskDraft, Tone

logger = logging.getLogger(__name__)

PLANNER_HOME = Path(os.environ.get("PLANNER_HOME", Path.home() / "calm-planner"))
CONFIG_FILE = PLANNER_HOME / "config" / "planner.conf"
DATA_DIR = PLANNER_HOME / "data"


@dataclass
class Config:
    """Calm Planner configuration."""

    data_dir: str = ""
    storage_key: str = "calm-planner-v1"
    default_time: str = "09:00"
    default_duration: int = 30
    default_priority: Priority = Priority.MEDIUM
    default_bucket: Bucket = Bucket.ANYTIME
    default_icon: str = DEFAULT_ICON
    default_color: Tone = Tone.MINT

    @property
    def data_path(self) -> Path:
        """Directory holding the stored planner state."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR

    def draft_defaults(self, bucket: Bucket | None = None) -> TaskDraft:
        """Starting draft for a new task."""
        return TaskDraft(
            title="",
            time=self.default_time,
            duration=self.default_duration,
            priority=self.default_priority,
            bucket=bucket or self.default_bucket,
            icon=self.default_icon,
            color=self.default_color,
        )


def _unquote(value: str) -> str:
    """Strip quotes from a quoted value, or an inline comment from a bare one."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from planner.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        try:
            match key:
                case "data_dir":
                    config.data_dir = value
                case "storage_key":
                    config.storage_key = value
                case "default_time":
                    config.default_time = value
                case "default_duration":
                    config.default_duration = int(value)
                case "default_priority":
                    config.default_priority = Priority(value.lower())
                case "default_bucket":
                    config.default_bucket = Bucket(value.lower())
                case "default_icon":
                    config.default_icon = value
                case "default_color":
                    config.default_color = Tone(value.lower())
        except ValueError as e:
            logger.warning(f"Ignoring invalid {key.upper()} in {path}: {e}")

    return config
