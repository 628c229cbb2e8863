"""
Shared styling utilities for the CodeShift converter.

This module contains the color palette, stylesheets and fonts shared by the
converter's widgets.
"""

from typing import Any, Protocol

from PySide6.QtGui import QFont, QFontDatabase


class StyleableWidget(Protocol):
    """Protocol for widgets that can be styled."""

    def setStyleSheet(self, styleSheet: str) -> None: ...
    def style(self) -> Any: ...


class AccessiblePalette:
    """
    Centralized color palette with WCAG AA accessibility compliance.

    All color combinations meet minimum contrast ratio of 4.5:1 for normal text
    and 3:1 for large text (18pt+ or 14pt+ bold).
    """

    # Banner colors
    INFO_TEXT = "#084298"  # Dark blue
    INFO_BG = "#cfe2ff"

    SUCCESS_TEXT = "#0f5132"  # Dark green
    SUCCESS_BG = "#d1e7dd"

    ERROR_TEXT = "#721c24"  # Dark red for high contrast
    ERROR_BG = "#f8d7da"

    # Status indicator colors
    STATUS_IDLE_COLOR = "#6c757d"  # Neutral gray
    STATUS_LOADING_COLOR = "#0d6efd"  # Blue
    STATUS_SUCCEEDED_COLOR = "#198754"  # Green (WCAG compliant)
    STATUS_FAILED_COLOR = "#dc3545"  # Red (high contrast)

    # UI element colors
    BORDER_DEFAULT = "#dee2e6"
    BORDER_FOCUS = "#6f42c1"  # Purple focus indicator
    BORDER_ERROR = "#dc3545"
    BORDER_SUCCESS = "#198754"

    BACKGROUND_DEFAULT = "#ffffff"
    BACKGROUND_SECONDARY = "#f8f9fa"
    BACKGROUND_DISABLED = "#e9ecef"
    BACKGROUND_CODE = "#1e1e2e"  # Code panes

    TEXT_PRIMARY = "#212529"
    TEXT_SECONDARY = "#6c757d"
    TEXT_DISABLED = "#adb5bd"
    TEXT_CODE = "#e9ecef"

    # Button colors
    BUTTON_PRIMARY_BG = "#6f42c1"
    BUTTON_PRIMARY_HOVER = "#59359a"
    BUTTON_PRIMARY_TEXT = "#ffffff"


class StyleSheets:
    """Collection of reusable stylesheet definitions using the accessible palette."""

    @staticmethod
    def get_banner_style(status: str = "default") -> str:
        """Get the status banner stylesheet for 'loading', 'success' or 'error'."""
        colors = {
            "loading": (AccessiblePalette.INFO_TEXT, AccessiblePalette.INFO_BG, AccessiblePalette.STATUS_LOADING_COLOR),
            "success": (
                AccessiblePalette.SUCCESS_TEXT,
                AccessiblePalette.SUCCESS_BG,
                AccessiblePalette.BORDER_SUCCESS,
            ),
            "error": (AccessiblePalette.ERROR_TEXT, AccessiblePalette.ERROR_BG, AccessiblePalette.BORDER_ERROR),
        }
        text, background, border = colors.get(
            status,
            (AccessiblePalette.TEXT_SECONDARY, AccessiblePalette.BACKGROUND_SECONDARY, AccessiblePalette.BORDER_DEFAULT),
        )
        return f"""
            QLabel {{
                color: {text};
                font-size: 14px;
                font-weight: bold;
                padding: 10px;
                background-color: {background};
                border: 1px solid {border};
                border-radius: 4px;
            }}
        """

    @staticmethod
    def get_code_editor_style() -> str:
        """Get the stylesheet for source and converted code panes."""
        font = get_monospace_font()
        return f"""
            QPlainTextEdit {{
                background-color: {AccessiblePalette.BACKGROUND_CODE};
                color: {AccessiblePalette.TEXT_CODE};
                border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
                border-radius: 4px;
                font-family: '{font.family()}';
                font-size: {font.pointSize()}pt;
            }}

            QPlainTextEdit:focus {{
                border: 2px solid {AccessiblePalette.BORDER_FOCUS};
            }}
        """

    @staticmethod
    def get_primary_button_style() -> str:
        """Get the stylesheet for the Convert button."""
        return f"""
            QPushButton {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_BG};
                color: {AccessiblePalette.BUTTON_PRIMARY_TEXT};
                border: 2px solid {AccessiblePalette.BUTTON_PRIMARY_BG};
                border-radius: 4px;
                padding: 8px 16px;
                font-weight: bold;
                min-height: 20px;
            }}

            QPushButton:hover {{
                background-color: {AccessiblePalette.BUTTON_PRIMARY_HOVER};
                border-color: {AccessiblePalette.BUTTON_PRIMARY_HOVER};
            }}

            QPushButton:disabled {{
                background-color: {AccessiblePalette.BACKGROUND_DISABLED};
                color: {AccessiblePalette.TEXT_DISABLED};
                border-color: {AccessiblePalette.BORDER_DEFAULT};
            }}
        """


def get_monospace_font() -> QFont:
    """
    Get a monospace font suitable for code display.

    Returns:
        QFont configured for code panes
    """
    font = QFont()

    available_families = QFontDatabase.families(QFontDatabase.WritingSystem.Latin)

    # Preferred monospace fonts in order of preference
    preferred_fonts = [
        "SF Mono",  # macOS system font
        "Consolas",  # Windows
        "Ubuntu Mono",  # Ubuntu
        "DejaVu Sans Mono",  # Linux
        "Courier New",  # Fallback
    ]

    selected_family = "monospace"
    for preferred in preferred_fonts:
        if preferred in available_families:
            selected_family = preferred
            break

    font.setFamily(selected_family)
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setPointSize(11)

    return font


def get_status_indicator_color(status_state: str) -> str:
    """
    Get color for status indicator based on state.

    Args:
        status_state: Status state name (IDLE, LOADING, SUCCEEDED, FAILED)

    Returns:
        Color hex string
    """
    status_colors = {
        "IDLE": AccessiblePalette.STATUS_IDLE_COLOR,
        "LOADING": AccessiblePalette.STATUS_LOADING_COLOR,
        "SUCCEEDED": AccessiblePalette.STATUS_SUCCEEDED_COLOR,
        "FAILED": AccessiblePalette.STATUS_FAILED_COLOR,
    }
    return status_colors.get(status_state, AccessiblePalette.STATUS_IDLE_COLOR)


def apply_banner_style(widget: StyleableWidget, status: str = "default") -> None:
    """
    Apply banner styling to a widget.

    Args:
        widget: Widget to style
        status: Banner status ('loading', 'success', 'error', 'default')
    """
    widget.setStyleSheet(StyleSheets.get_banner_style(status))
