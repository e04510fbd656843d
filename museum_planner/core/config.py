"""
Configuration for the Museum Curator Planner

Two JSON files live in the config directory:
    settings.json     database location, timezone, week start
    preferences.json  planning knobs (slot cap, top-N, task defaults)

Keys missing from a file fall back to the defaults below, so files written
by older versions keep working.
"""

import json
import os
from pathlib import Path
from datetime import datetime, tzinfo
from typing import Dict, Any, Optional, Tuple

from dateutil import tz


PROJECT_ROOT = Path(__file__).parent.parent.parent

DEFAULT_SETTINGS: Dict[str, Any] = {
    "database_path": "data/database/museum.db",
    "timezone": "Asia/Seoul",  # IANA name; "today" is computed in this zone
    "first_day_of_week": "sunday",  # 'sunday' or 'monday'
}

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "max_hours_per_slot": 3.0,
    "top_priority_count": 3,
    "schedule_candidate_count": 10,
    "default_task_priority": 3,
    "default_estimated_hours": 1.0,
}

WEEK_STARTS = ("sunday", "monday")


class Config:
    """Settings and planning preferences backed by JSON files"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Load (or create) the configuration files.

        Args:
            config_dir: Directory holding the JSON files. Defaults to
                $MUSEUM_PLANNER_CONFIG_DIR, then <project>/config
        """
        if config_dir is None:
            env_dir = os.environ.get("MUSEUM_PLANNER_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else PROJECT_ROOT / "config"

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.json"
        self.preferences_file = self.config_dir / "preferences.json"

        self.settings = self._read(self.settings_file, DEFAULT_SETTINGS)
        self.preferences = self._read(self.preferences_file, DEFAULT_PREFERENCES)

    def _read(self, file_path: Path, defaults: Dict[str, Any]) -> Dict[str, Any]:
        if not file_path.exists():
            self._write(file_path, defaults)
            return dict(defaults)
        with open(file_path, 'r') as f:
            return {**defaults, **json.load(f)}

    def _write(self, file_path: Path, data: Dict[str, Any]) -> None:
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _section(self, section: str) -> Optional[Tuple[Dict[str, Any], Path]]:
        if section == "settings":
            return self.settings, self.settings_file
        if section == "preferences":
            return self.preferences, self.preferences_file
        return None

    def get(self, key: str, section: str = "settings", default: Any = None) -> Any:
        """
        Look up a value.

        Args:
            key: Configuration key
            section: 'settings' or 'preferences'
            default: Returned when the key (or section) is unknown
        """
        found = self._section(section)
        if found is None:
            return default
        return found[0].get(key, default)

    def set(self, key: str, value: Any, section: str = "settings") -> None:
        """
        Store a value and rewrite its file.

        Raises:
            ValueError: Unknown section, timezone or first_day_of_week
        """
        found = self._section(section)
        if found is None:
            raise ValueError(f"Unknown config section: {section}")
        if key == "first_day_of_week" and value not in WEEK_STARTS:
            raise ValueError(f"first_day_of_week must be one of: {', '.join(WEEK_STARTS)}")
        if key == "timezone" and tz.gettz(value) is None:
            raise ValueError(f"Unknown timezone: {value}")

        values, file_path = found
        values[key] = value
        self._write(file_path, values)

    def get_timezone(self) -> tzinfo:
        """Configured local zone; UTC when the name is missing or unknown"""
        name = self.settings.get("timezone")
        return (tz.gettz(name) if name else None) or tz.UTC

    def now(self) -> datetime:
        """Current time in the configured zone"""
        return datetime.now(self.get_timezone())

    def localize(self, moment: datetime) -> datetime:
        """Express an aware datetime in the configured zone; naive values pass through"""
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(self.get_timezone())

    def get_database_path(self) -> Path:
        """Configured database file; relative paths resolve from the project root"""
        db_path = Path(self.settings["database_path"])
        return db_path if db_path.is_absolute() else PROJECT_ROOT / db_path
