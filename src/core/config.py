"""
Configuration management for the CodeShift converter.

This module provides configuration defaults, application identifiers and
helpers for the QSettings-backed settings store.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

# Application identifiers for QSettings
APP_ORGANIZATION = "CodeShift"
APP_NAME = "Converter"

# Agent that performs the code conversion
DEFAULT_AGENT_ID = "6986efc5e31e7bbb7ef459fd"

# Environment variable holding the agent API key (never persisted)
AGENT_API_KEY_ENV = "CODESHIFT_AGENT_API_KEY"

# Default configuration with all supported keys and JSON-serializable types
DEFAULT_CONFIG: dict[str, Any] = {
    # Agent settings
    "agent_id": DEFAULT_AGENT_ID,
    "agent_api_url": "http://localhost:3000/api/agent",
    "request_timeout": 120,  # seconds
    # Language selection
    "source_language": "JavaScript",
    "target_language": "Python",
    # Transient UI affordances (milliseconds)
    "success_banner_ms": 5000,
    "error_clear_ms": 3000,
    "copied_clear_ms": 2000,
    # UI state
    "show_notes": True,
    # Debug settings
    "log_level": "INFO",  # Options: "DEBUG", "INFO", "WARNING", "ERROR"
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class TransientTimings:
    """Lifetimes of the self-clearing UI affordances, in milliseconds."""

    success_banner_ms: int = DEFAULT_CONFIG["success_banner_ms"]
    error_clear_ms: int = DEFAULT_CONFIG["error_clear_ms"]
    copied_clear_ms: int = DEFAULT_CONFIG["copied_clear_ms"]


def get_app_config_dir() -> Path:
    """
    Get the application configuration directory using QStandardPaths.

    Returns:
        Path to the writable configuration directory for this application
    """
    config_location = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
    return Path(config_location) / APP_ORGANIZATION / APP_NAME


def get_agent_api_key() -> str | None:
    """Return the agent API key from the environment, if any."""
    return os.environ.get(AGENT_API_KEY_ENV) or None


def setup_qsettings() -> None:
    """
    Configure QSettings with application identifiers.

    This should be called early in application startup to ensure
    QSettings uses the correct organization and application names.
    """
    QCoreApplication.setOrganizationName(APP_ORGANIZATION)
    QCoreApplication.setApplicationName(APP_NAME)
