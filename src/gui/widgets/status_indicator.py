"""
Status indicator widget and state management for the main window.

This module provides status state definitions and a status indicator widget
for displaying the current conversion lifecycle.
"""

from enum import Enum

from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from core.conversion_state import ConversionState
from gui.utils.styling import AccessiblePalette, get_status_indicator_color


class StatusState(Enum):
    """Status indicator states with accessible colors and descriptions."""

    IDLE = ("Idle", "Ready to convert code")
    LOADING = ("Converting", "Conversion in progress")
    SUCCEEDED = ("Converted", "Conversion completed successfully")
    FAILED = ("Error", "Conversion failed")

    def __init__(self, display_name: str, description: str) -> None:
        self.display_name = display_name
        self.description = description

    @property
    def color(self) -> str:
        return get_status_indicator_color(self.name)

    @classmethod
    def from_conversion_state(cls, state: ConversionState) -> "StatusState":
        """Map a lifecycle kind to its indicator state."""
        return cls[state.name]


class StatusIndicatorWidget(QWidget):
    """
    Widget for displaying the current conversion status.

    Shows a colored dot and status text with accessibility support.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        """Initialize the status indicator widget."""
        super().__init__(parent)
        self._current_state = StatusState.IDLE
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.setObjectName("statusIndicator")
        self.setAccessibleName("Conversion status")
        self.setAccessibleDescription("Shows the current conversion status")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        # Status dot
        self.status_dot = QLabel()
        self.status_dot.setFixedSize(12, 12)
        self.status_dot.setAccessibleName("Status indicator dot")
        layout.addWidget(self.status_dot)

        # Status text
        self.status_text = QLabel()
        self.status_text.setAccessibleName("Status text")
        layout.addWidget(self.status_text)

        # Set initial state
        self.set_status(StatusState.IDLE)

    def set_status(self, state: StatusState) -> None:
        """
        Set the current status state.

        Args:
            state: The new status state
        """
        self._current_state = state

        # Update dot color and styling
        self.status_dot.setStyleSheet(
            f"""
            QLabel {{
                border-radius: 6px;
                background-color: {state.color};
                border: 1px solid {AccessiblePalette.BORDER_DEFAULT};
            }}
        """
        )

        # Update text and accessibility
        self.status_text.setText(state.display_name)

        # Update accessible descriptions for screen readers
        self.status_dot.setAccessibleDescription(f"Status: {state.display_name}")
        self.status_text.setAccessibleDescription(state.description)
        self.setToolTip(f"{state.display_name}: {state.description}")

    def set_conversion_state(self, state: ConversionState) -> None:
        """Show the indicator state for a lifecycle kind."""
        self.set_status(StatusState.from_conversion_state(state))

    def get_status(self) -> StatusState:
        """Get the current status state."""
        return self._current_state
