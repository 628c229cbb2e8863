"""
Configuration manager for the CodeShift converter.

Provides QSettings-backed configuration management with default fallbacks
and type safety.
"""

import logging
from typing import Any

from PySide6.QtCore import QSettings

from .config import DEFAULT_CONFIG, TransientTimings, setup_qsettings
from .languages import is_supported_language

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    QSettings-backed configuration manager with robust defaults.

    Provides type-safe access to configuration values with automatic
    fallback to defaults when keys are missing or have invalid types.
    """

    def __init__(self) -> None:
        """Initialize the ConfigManager with QSettings."""
        # Ensure QSettings is configured with app identifiers
        setup_qsettings()

        # Initialize QSettings with organization and application name
        self._settings = QSettings()
        self._defaults = DEFAULT_CONFIG.copy()

    def get(self, key: str, default: Any | None = None) -> Any:
        """
        Get a configuration value with fallback to defaults.

        Args:
            key: Configuration key
            default: Override default value (if None, uses DEFAULT_CONFIG)

        Returns:
            Configuration value coerced to the default's type
        """
        # Determine the fallback value
        fallback = default if default is not None else self._defaults.get(key)

        # Get value from QSettings
        value = self._settings.value(key, fallback)

        # Type coercion and validation
        if fallback is not None:
            try:
                # Coerce to the expected type based on the default
                expected_type = type(fallback)
                if expected_type is bool:
                    # QSettings returns strings for booleans, need special handling
                    value = value.lower() in ("true", "1", "yes", "on") if isinstance(value, str) else bool(value)
                elif expected_type in (int, float, str):
                    value = expected_type(value)
                # For other types, trust QSettings only when the type matches
                elif not isinstance(value, expected_type):
                    logger.warning(f"Config key '{key}' has unexpected type, using default")
                    value = fallback
            except (ValueError, TypeError) as e:
                logger.warning(f"Failed to coerce config key '{key}': {e}, using default")
                value = fallback

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key
            value: Value to store
        """
        self._settings.setValue(key, value)
        self._settings.sync()  # Ensure immediate persistence

    def get_language(self, key: str) -> str:
        """
        Get a stored language selection.

        Args:
            key: Either "source_language" or "target_language"

        Returns:
            The stored language, or the default if the stored value is
            not a supported language
        """
        value = self.get(key)
        if not is_supported_language(value):
            logger.warning(f"Config key '{key}' holds unsupported language {value!r}, using default")
            return str(self._defaults[key])
        return str(value)

    def save_languages(self, source_language: str, target_language: str) -> None:
        """Persist the current language pair."""
        self.set("source_language", source_language)
        self.set("target_language", target_language)

    def transient_timings(self) -> TransientTimings:
        """
        Get the lifetimes of the self-clearing UI affordances.

        Negative values are replaced by their defaults.
        """
        values = {}
        for key in ("success_banner_ms", "error_clear_ms", "copied_clear_ms"):
            value = self.get(key)
            if value < 0:
                logger.warning(f"Config key '{key}' is negative, using default")
                value = self._defaults[key]
            values[key] = value
        return TransientTimings(**values)
