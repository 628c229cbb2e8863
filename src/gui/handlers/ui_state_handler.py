"""
UI state management functionality for the main window.

This module renders the controller's lifecycle state, copied indicator and
input validity onto the main window's widgets.
"""

import logging
from typing import TYPE_CHECKING

from core.conversion_state import Failed, LifecycleState, Loading, Succeeded
from gui.utils.styling import apply_banner_style
from gui.widgets.main_window_ui import format_source_stats

if TYPE_CHECKING:
    from gui.main_window import MainWindow

LOADING_TEXT = "Converting your code..."
SUCCESS_TEXT = "Code converted successfully!"


class UIStateHandler:
    """Handles UI state management for the main window."""

    def __init__(self, main_window: "MainWindow") -> None:
        """Initialize the UI state handler."""
        self.main_window = main_window
        self._logger = logging.getLogger(__name__)

    def render_state(self, state: LifecycleState) -> None:
        """
        Update every state-dependent widget for a lifecycle state.

        Args:
            state: The controller's current state
        """
        ui = self.main_window.ui

        if ui.status_indicator:
            ui.status_indicator.set_conversion_state(state.kind)

        self._render_banner(state)

        # Result panes are empty unless the last request succeeded
        result = state.result if isinstance(state, Succeeded) else None
        if ui.converted_code_view:
            ui.converted_code_view.show_code(result.converted_code if result else None)
        if ui.details_panel:
            ui.details_panel.show_result(result)

        self.update_convert_button()

    def _render_banner(self, state: LifecycleState) -> None:
        banner = self.main_window.ui.status_banner
        if not banner:
            return

        if isinstance(state, Loading):
            banner.setText(LOADING_TEXT)
            apply_banner_style(banner, "loading")
            banner.setVisible(True)
        elif isinstance(state, Succeeded) and state.just_succeeded:
            banner.setText(SUCCESS_TEXT)
            apply_banner_style(banner, "success")
            banner.setVisible(True)
        elif isinstance(state, Failed) and state.message_visible:
            banner.setText(state.message)
            apply_banner_style(banner, "error")
            banner.setVisible(True)
        # Nothing to announce
        else:
            banner.clear()
            banner.setVisible(False)

    def update_convert_button(self) -> None:
        """Enable Convert only when a submission would reach the agent."""
        ui = self.main_window.ui
        if not ui.convert_button:
            return

        controller = self.main_window.controller
        ui.convert_button.setEnabled(controller.can_submit)
        ui.convert_button.setText("Converting..." if controller.is_loading else "Convert")

    def render_copied(self, copied: bool) -> None:
        """Reflect the copied indicator on the copy button."""
        if self.main_window.ui.converted_code_view:
            self.main_window.ui.converted_code_view.set_copied(copied)

    def render_source_stats(self, text: str) -> None:
        """Update the line and character counters."""
        ui = self.main_window.ui
        lines, characters = format_source_stats(text)
        if ui.line_count_label:
            ui.line_count_label.setText(lines)
        if ui.char_count_label:
            ui.char_count_label.setText(characters)
