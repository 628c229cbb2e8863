"""
Clipboard access for copying converted code.
"""

import logging

from PySide6.QtGui import QGuiApplication

logger = logging.getLogger(__name__)


def copy_text(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Args:
        text: Text to copy

    Returns:
        True if the clipboard now holds the text, False otherwise
    """
    if QGuiApplication.instance() is None:
        logger.warning("Cannot copy to clipboard: no GUI application is running")
        return False

    clipboard = QGuiApplication.clipboard()
    if clipboard is None:
        logger.warning("Cannot copy to clipboard: clipboard unavailable")
        return False

    clipboard.setText(text)
    copied = clipboard.text() == text
    if not copied:
        logger.debug("Clipboard did not accept the copied text")
    return copied
