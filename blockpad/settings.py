"""Editor settings and their persistence.

Settings are stored as JSON in an OS-appropriate config directory and
survive application restarts. Documents themselves are never written.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants
from .metrics import FONT_METRICS

logger = logging.getLogger(__name__)


@dataclass
class EditorSettings:
    """Layout settings used by an editing session."""
    max_width: float = EditorConstants.MAX_WIDTH
    font_size: float = EditorConstants.FONT_SIZE
    line_height: float = EditorConstants.LINE_HEIGHT
    font_name: str = EditorConstants.DEFAULT_FONT_NAME

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a dict, keeping defaults for invalid values."""
        settings = cls()
        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                continue
            if not validate_setting(key, value):
                logger.warning(f"Ignoring invalid value for {key}: {value!r}")
                continue
            setattr(settings, key, float(value) if key != "font_name" else value)
        return settings


def validate_setting(key: str, value: Any) -> bool:
    """Validate a setting value.

    Args:
        key: Setting key name.
        value: Setting value to validate.

    Returns:
        True if setting is valid, False otherwise.
    """
    if key == "font_name":
        return isinstance(value, str) and value in FONT_METRICS
    if key in ("max_width", "font_size", "line_height"):
        # bool is an int subclass but never a valid dimension
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return value > 0
    # Unknown settings are considered valid (forward compatibility)
    return True


class SettingsPersistence:
    """Manages persistent storage of editor settings."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir else Path(platformdirs.user_config_dir("blockpad", "blockpad"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_raw(self) -> Dict[str, Any]:
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, PermissionError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def load_settings(self) -> EditorSettings:
        """Load settings, falling back to defaults for anything missing or invalid."""
        return EditorSettings.from_dict(self._load_raw())

    def save_settings(self, settings: EditorSettings) -> bool:
        """Save settings to disk atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        self._ensure_config_dir()
        data = settings.to_dict()
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = data
            return True
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
