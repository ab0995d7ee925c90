import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import chrome_runner.settings as default_settings

log = logging.getLogger(__name__)


class MergedSettings:
    """
    A singleton-style object that merges default settings with JSON overrides.

    Precedence, lowest first:
    1. Base values from `settings.py`.
    2. Environment variables and `.env` (read by `settings.py` via `python-dotenv`).
    3. Values from the overrides JSON file, for keys in `MODIFIABLE_SETTINGS` only.
    """

    def __init__(self, overrides_path: Optional[Path] = None) -> None:
        """
        Loads the defaults and applies any overrides found on disk.

        :param overrides_path: Alternative overrides file, mainly for tests.
        """
        self._load_defaults()
        if overrides_path is not None:
            self.OVERRIDES_JSON_PATH = Path(overrides_path)
        self._load_overrides()

    def _load_defaults(self) -> None:
        """Loads all uppercase attributes from the settings module as defaults."""
        for key in dir(default_settings):
            if key.isupper():
                setattr(self, key, getattr(default_settings, key))

    def _coerce(self, key: str, value: Any) -> Any:
        """Converts an override value to the type of its default."""
        original_value = getattr(self, key)
        if isinstance(original_value, bool):
            return str(value).lower() in ("true", "1", "t", "yes", "y")
        if isinstance(original_value, Path):
            return Path(value)
        if original_value is not None:
            return type(original_value)(value)
        return value

    def _read_overrides_file(self) -> Dict[str, Any]:
        """Returns the JSON object stored in the overrides file, or an empty dict."""
        if not self.OVERRIDES_JSON_PATH.exists():
            return {}

        try:
            with self.OVERRIDES_JSON_PATH.open("r") as f:
                overrides = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.error(f"Failed to load or parse overrides file '{self.OVERRIDES_JSON_PATH}': {e}")
            return {}

        if not isinstance(overrides, dict):
            log.error(f"Overrides file '{self.OVERRIDES_JSON_PATH}' must contain a JSON object. Ignoring.")
            return {}
        return overrides

    def _load_overrides(self) -> None:
        """
        Loads and applies settings from the overrides file.

        Keys that are unknown or not listed in `MODIFIABLE_SETTINGS` are ignored.
        """
        overrides = self._read_overrides_file()
        if not overrides:
            return

        log.info(f"Loading runtime configuration overrides from {self.OVERRIDES_JSON_PATH}")
        for key, value in overrides.items():
            if not hasattr(self, key):
                log.warning(f"Override setting '{key}' not found in default settings. Ignoring.")
                continue
            if key not in self.MODIFIABLE_SETTINGS:
                log.warning(f"Attempted to override non-modifiable setting '{key}'. Ignoring.")
                continue
            try:
                setattr(self, key, self._coerce(key, value))
            except (ValueError, TypeError) as e:
                log.error(f"Could not convert override value '{value}' for '{key}': {e}")
                continue
            log.debug(f"Overridden setting: {key} = {value}")

    def get(self, key: str, default: Any = None) -> Any:
        """Provides dictionary-like access to settings with a default value."""
        return getattr(self, key, default)

    def save_overrides(self, overrides_to_save: Dict[str, Any]) -> bool:
        """
        Merges the modifiable subset of the given settings into the overrides file.

        Overrides already stored for other keys are kept. The new values are
        applied to this instance as well.

        :param overrides_to_save: A dictionary of settings to persist.
        :return: True if the file was written.
        """
        filtered_overrides = {
            key: value
            for key, value in overrides_to_save.items()
            if key in self.MODIFIABLE_SETTINGS
        }

        if not filtered_overrides:
            log.warning("No modifiable settings provided to save.")
            return False

        converted = {}
        for key, value in filtered_overrides.items():
            try:
                converted[key] = self._coerce(key, value)
            except (ValueError, TypeError) as e:
                log.error(f"Could not convert value '{value}' for '{key}': {e}")
                return False

        stored = self._read_overrides_file()
        stored.update(filtered_overrides)
        try:
            self.OVERRIDES_JSON_PATH.parent.mkdir(parents=True, exist_ok=True)
            with self.OVERRIDES_JSON_PATH.open("w") as f:
                json.dump(stored, f, indent=4)
        except IOError as e:
            log.error(f"Failed to write to overrides file '{self.OVERRIDES_JSON_PATH}': {e}")
            return False
        for key, value in converted.items():
            setattr(self, key, value)
        log.info(f"Configuration overrides saved to {self.OVERRIDES_JSON_PATH}")
        return True


# Create a singleton instance to be imported by other modules
effective_settings = MergedSettings()
