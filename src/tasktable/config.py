"""Configuration models for tasktable."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class DisplayConfig(BaseModel):
    """Configuration for table rendering."""

    date_format: str = "%d.%m.%Y"
    show_ids: bool = True


class TasktableConfig(BaseModel):
    """Main configuration for tasktable."""

    data_file: str = "tasks.json"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_file: str | None = None
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TasktableConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path) as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(exclude_none=True), f, indent=2)


# Default config directory
TASKTABLE_DIR = Path(".tasktable")
CONFIG_FILE = TASKTABLE_DIR / "config.json"
