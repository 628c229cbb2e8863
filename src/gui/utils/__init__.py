"""
GUI-specific utilities for the CodeShift converter.

This module contains utility functions and classes that are specific
to the GUI implementation.
"""

from .styling import (
    AccessiblePalette,
    StyleSheets,
    apply_banner_style,
    get_monospace_font,
    get_status_indicator_color,
)

__all__ = [
    "AccessiblePalette",
    "StyleSheets",
    "apply_banner_style",
    "get_monospace_font",
    "get_status_indicator_color",
]
