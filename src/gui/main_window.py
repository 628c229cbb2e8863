"""
Main window for the CodeShift converter.

This module contains the MainWindow class which wires the conversion
controller to the user interface.
"""

import logging

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow

from core.agent_client import AgentClient, HttpAgentClient
from core.config_manager import ConfigManager
from core.conversion_controller import ConversionController, CopyCallback
from core.error_handler import get_error_handler
from core.errors import BaseAppError
from gui.handlers.ui_state_handler import UIStateHandler
from gui.widgets.main_window_ui import MainWindowUI, source_placeholder

logger = logging.getLogger(__name__)

# Error sources that no other component reports to the user
UNHANDLED_ERROR_SOURCES = ("sys.excepthook", "threading.excepthook")
ERROR_STATUS_TIMEOUT_MS = 8000


class MainWindow(QMainWindow):
    """
    Main application window.

    Provides the primary user interface for AI code conversion.
    """

    def __init__(
        self,
        client: AgentClient | None = None,
        config_manager: ConfigManager | None = None,
        copy_callback: CopyCallback | None = None,
    ) -> None:
        """
        Initialize the main window.

        Args:
            client: Agent capability; defaults to the configured HTTP endpoint
            config_manager: Settings store; defaults to QSettings
            copy_callback: Clipboard capability; defaults to the system clipboard
        """
        super().__init__()

        self.config_manager = config_manager or ConfigManager()

        self.ui = MainWindowUI(self)
        self.ui.setup_ui()

        self.controller = ConversionController(
            client or self._create_agent_client(),
            agent_id=self.config_manager.get("agent_id"),
            copy_callback=copy_callback,
            timings=self.config_manager.transient_timings(),
            source_language=self.config_manager.get_language("source_language"),
            target_language=self.config_manager.get_language("target_language"),
            parent=self,
        )
        self.ui_state_handler = UIStateHandler(self)

        self._load_initial_state()
        self._connect_signals()

    def _create_agent_client(self) -> HttpAgentClient:
        """Build the HTTP agent client from configuration."""
        api_url = self.config_manager.get("agent_api_url")
        logger.info(f"Using agent endpoint {api_url}")
        return HttpAgentClient(api_url=api_url, timeout=self.config_manager.get("request_timeout"))

    def _load_initial_state(self) -> None:
        """Push the controller's initial state into the widgets."""
        if self.ui.source_language_combo:
            self.ui.source_language_combo.setCurrentText(self.controller.source_language)
        if self.ui.target_language_combo:
            self.ui.target_language_combo.setCurrentText(self.controller.target_language)
        if self.ui.source_edit:
            self.ui.source_edit.setPlaceholderText(source_placeholder(self.controller.source_language))
        if self.ui.details_panel:
            self.ui.details_panel.set_notes_expanded(self.config_manager.get("show_notes"))

        self.ui_state_handler.render_source_stats(self.controller.source_code)
        self.ui_state_handler.render_state(self.controller.state)

    def _connect_signals(self) -> None:
        """Connect UI signals to their handlers."""
        # Input
        if self.ui.source_edit:
            self.ui.source_edit.textChanged.connect(self._on_editor_text_changed)
        if self.ui.source_language_combo:
            self.ui.source_language_combo.currentTextChanged.connect(self.controller.set_source_language)
        if self.ui.target_language_combo:
            self.ui.target_language_combo.currentTextChanged.connect(self.controller.set_target_language)

        # Actions
        if self.ui.convert_button:
            self.ui.convert_button.clicked.connect(self.controller.submit)
        if self.ui.swap_button:
            self.ui.swap_button.clicked.connect(self.controller.swap_languages)
        if self.ui.clear_button:
            self.ui.clear_button.clicked.connect(self.controller.clear)
        if self.ui.converted_code_view:
            self.ui.converted_code_view.copyRequested.connect(self.controller.copy_result)
        if self.ui.details_panel:
            self.ui.details_panel.notesToggled.connect(self._on_notes_toggled)

        # Controller
        self.controller.stateChanged.connect(self.ui_state_handler.render_state)
        self.controller.copiedChanged.connect(self.ui_state_handler.render_copied)
        self.controller.sourceCodeChanged.connect(self._on_source_code_changed)
        self.controller.languagesChanged.connect(self._on_languages_changed)

        # Errors that escaped every handler
        get_error_handler().errorOccurred.connect(self._on_error_occurred)

    def _on_editor_text_changed(self) -> None:
        if self.ui.source_edit:
            self.controller.set_source_code(self.ui.source_edit.toPlainText())

    def _on_source_code_changed(self, text: str) -> None:
        """Keep the editor, counters and Convert button in step with the controller."""
        if self.ui.source_edit and self.ui.source_edit.toPlainText() != text:
            self.ui.source_edit.setPlainText(text)
        self.ui_state_handler.render_source_stats(text)
        self.ui_state_handler.update_convert_button()

    def _on_languages_changed(self, source_language: str, target_language: str) -> None:
        """Reflect a language change in the combos and remember it."""
        for combo, language in (
            (self.ui.source_language_combo, source_language),
            (self.ui.target_language_combo, target_language),
        ):
            if combo and combo.currentText() != language:
                combo.blockSignals(True)
                combo.setCurrentText(language)
                combo.blockSignals(False)

        if self.ui.source_edit:
            self.ui.source_edit.setPlaceholderText(source_placeholder(source_language))

        self.config_manager.save_languages(source_language, target_language)

    def _on_error_occurred(self, app_error: BaseAppError) -> None:
        """Show an unhandled error in the status bar."""
        if app_error.context.get("source") not in UNHANDLED_ERROR_SOURCES:
            return
        self.statusBar().showMessage(app_error.user_message, ERROR_STATUS_TIMEOUT_MS)

    def _on_notes_toggled(self, expanded: bool) -> None:
        self.config_manager.set("show_notes", expanded)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Handle window close event."""
        self.controller.shutdown(2000)
        event.accept()
