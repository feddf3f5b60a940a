# src/pagelens/core/managers/config_manager.py
import copy
import json
import logging
from typing import Any, Dict, Optional

from pagelens.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "debug": {
        "level": "INFO",
        "module_levels": {},
        "silenced": {"aiohttp": "WARNING", "asyncio": "WARNING"}
    },
    "fetch": {
        "timeout": 10,
        "strategies": ["allorigins", "codetabs", "corsproxy"]
    },
    "user_agent": {
        "chrome_version": "124.0.0.0"
    },
    "parser": {
        "features": "html.parser"
    },
    "css": {
        "max_colors": 15
    }
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merges `override` into a copy of `base`, recursing into nested dicts."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    Built-in defaults are overlaid with settings.json and may be changed in memory.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'fetch.timeout'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'fetch.timeout', '5'
        """
        keys = key_path.split('.')
        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        # Cast to the type of the value being replaced
        original_value = d.get(keys[-1])
        if original_value is not None and not isinstance(original_value, (dict, list)):
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as given.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.debug("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Rebuilds the configuration from the defaults and settings.json."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        config_path = PathUtils.get_settings_file()
        if not config_path.exists():
            logger.warning("settings.json not found at %s. Using defaults.", config_path)
            return
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            return

        if not isinstance(overrides, dict):
            logger.error("settings.json must contain a JSON object; ignoring it.")
            return
        self._config = _deep_merge(DEFAULT_CONFIG, overrides)
        logger.debug("Configuration has been (re)loaded from settings.json.")


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
