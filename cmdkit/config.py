import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import cmdkit.settings as default_settings

log = logging.getLogger(__name__)


class MergedSettings:
    """
    Merges default settings with whitelisted JSON overrides.

    Precedence:
    1. Base values from `settings.py`.
    2. Environment / `.env` values (applied by `python-dotenv` in settings.py).
    3. Overrides from the overrides JSON file for keys in `MODIFIABLE_SETTINGS`.
    """

    def __init__(self, overrides_path: Optional[Path] = None) -> None:
        """
        :param overrides_path: JSON overrides file; defaults to `OVERRIDES_JSON_PATH`.
        """
        self.OVERRIDES_JSON_PATH: Path = Path(overrides_path or default_settings.OVERRIDES_JSON_PATH)

        self._load_defaults()
        self._load_overrides()

    def _load_defaults(self) -> None:
        """Loads all uppercase attributes from the settings module as defaults."""
        for key in dir(default_settings):
            if key.isupper() and key != "OVERRIDES_JSON_PATH":
                setattr(self, key, getattr(default_settings, key))

    def _load_overrides(self) -> None:
        """
        Applies settings from the overrides file.

        Only keys listed in `MODIFIABLE_SETTINGS` are applied; everything else
        is reported and ignored.
        """
        if not self.OVERRIDES_JSON_PATH.exists():
            return

        try:
            with self.OVERRIDES_JSON_PATH.open('r') as f:
                overrides = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            log.error(f"Failed to load or parse overrides file '{self.OVERRIDES_JSON_PATH}': {e}")
            return

        if not isinstance(overrides, dict):
            log.error(f"Overrides file '{self.OVERRIDES_JSON_PATH}' must contain a JSON object. Ignoring.")
            return

        log.debug(f"Loading configuration overrides from {self.OVERRIDES_JSON_PATH}")
        for key, value in overrides.items():
            if not hasattr(self, key):
                log.warning(f"Override setting '{key}' not found in default settings. Ignoring.")
                continue
            if key not in self.MODIFIABLE_SETTINGS:
                log.warning(f"Attempted to override non-modifiable setting '{key}'. Ignoring.")
                continue

            original_value = getattr(self, key)
            if isinstance(original_value, Path):
                value = Path(value)
            elif isinstance(original_value, float) and isinstance(value, int):
                value = float(value)
            setattr(self, key, value)
            log.debug(f"Overridden setting: {key} = {value}")

    def get(self, item: str, default: Any = None) -> Any:
        """Dictionary-like access to a setting with a default value."""
        return getattr(self, item, default)

    def as_dict(self) -> Dict[str, Any]:
        """Returns all effective settings."""
        return {key: value for key, value in vars(self).items() if key.isupper()}


# Shared instance imported by other modules
effective_settings = MergedSettings()
