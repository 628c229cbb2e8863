"""
UI setup and layout management for the main window.

This module builds the converter's widgets and layout, keeping layout
concerns out of the window's event handling.
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from core.languages import SUPPORTED_LANGUAGES
from gui.utils.styling import StyleSheets, apply_banner_style, get_monospace_font
from gui.widgets.result_panel import ConvertedCodeView, ResultDetailsPanel
from gui.widgets.status_indicator import StatusIndicatorWidget

WINDOW_TITLE = "CodeShift - AI Code Converter"
WINDOW_SUBTITLE = "Transform code between languages with AI"

SOURCE_PLACEHOLDER_TEMPLATE = (
    "// Paste your {language} code here...\n\n"
    "function greetUser(name, age) {{\n"
    "  const greeting = `Hello ${{name}}, you are ${{age}} years old!`;\n"
    "  return greeting;\n"
    "}}"
)


def source_placeholder(language: str) -> str:
    """Placeholder text for the source editor."""
    return SOURCE_PLACEHOLDER_TEMPLATE.format(language=language)


def format_source_stats(text: str) -> tuple[str, str]:
    """Line and character count labels for the source editor."""
    lines = len(text.split("\n"))
    return f"{lines} lines", f"{len(text)} characters"


class MainWindowUI:
    """
    Handles UI setup and layout for the main window.

    Separates UI construction from business logic and event handling.
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """
        Initialize the UI manager.

        Args:
            main_window: The main window to set up
        """
        self.main_window = main_window
        self.central_widget: QWidget | None = None

        # Header
        self.header_widget: QWidget | None = None
        self.status_indicator: StatusIndicatorWidget | None = None

        # Status banner
        self.status_banner: QLabel | None = None

        # Source panel
        self.source_language_combo: QComboBox | None = None
        self.source_edit: QPlainTextEdit | None = None
        self.line_count_label: QLabel | None = None
        self.char_count_label: QLabel | None = None

        # Controls
        self.convert_button: QPushButton | None = None
        self.swap_button: QPushButton | None = None
        self.clear_button: QPushButton | None = None

        # Output panel
        self.target_language_combo: QComboBox | None = None
        self.converted_code_view: ConvertedCodeView | None = None
        self.details_panel: ResultDetailsPanel | None = None

    def setup_ui(self) -> None:
        """Set up the complete user interface."""
        self.main_window.setWindowTitle(WINDOW_TITLE)
        self.main_window.resize(1100, 760)
        self.main_window.setMinimumSize(800, 600)

        self.central_widget = QWidget()
        self.main_window.setCentralWidget(self.central_widget)

        main_layout = QVBoxLayout(self.central_widget)
        main_layout.setContentsMargins(20, 20, 20, 20)
        main_layout.setSpacing(16)

        self._setup_header(main_layout)
        self._setup_status_banner(main_layout)
        self._setup_conversion_area(main_layout)

        self.details_panel = ResultDetailsPanel()
        self.details_panel.setVisible(False)
        main_layout.addWidget(self.details_panel)

        self._setup_shortcuts()

    def _setup_header(self, parent_layout: QVBoxLayout) -> None:
        self.header_widget = QWidget()
        self.header_widget.setObjectName("headerBar")
        layout = QHBoxLayout(self.header_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        titles = QVBoxLayout()
        title_label = QLabel(WINDOW_TITLE)
        title_label.setObjectName("titleLabel")
        title_label.setStyleSheet("QLabel { font-size: 22px; font-weight: bold; }")
        subtitle_label = QLabel(WINDOW_SUBTITLE)
        subtitle_label.setObjectName("subtitleLabel")
        titles.addWidget(title_label)
        titles.addWidget(subtitle_label)
        layout.addLayout(titles)
        layout.addStretch()

        self.status_indicator = StatusIndicatorWidget()
        layout.addWidget(self.status_indicator)

        parent_layout.addWidget(self.header_widget)

    def _setup_status_banner(self, parent_layout: QVBoxLayout) -> None:
        self.status_banner = QLabel()
        self.status_banner.setObjectName("statusBanner")
        self.status_banner.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_banner.setWordWrap(True)
        self.status_banner.setAccessibleName("Status message")
        self.status_banner.setAccessibleDescription("Displays conversion progress and errors")
        apply_banner_style(self.status_banner)
        self.status_banner.setVisible(False)
        parent_layout.addWidget(self.status_banner)

    def _create_language_combo(self, object_name: str, accessible_name: str) -> QComboBox:
        combo = QComboBox()
        combo.setObjectName(object_name)
        combo.setAccessibleName(accessible_name)
        combo.addItems(list(SUPPORTED_LANGUAGES))
        return combo

    def _setup_conversion_area(self, parent_layout: QVBoxLayout) -> None:
        row = QHBoxLayout()
        row.setSpacing(16)

        # Source panel
        source_group = QGroupBox("Source Code")
        source_layout = QVBoxLayout(source_group)
        self.source_language_combo = self._create_language_combo("sourceLanguageCombo", "Source language")
        source_layout.addWidget(self.source_language_combo)

        self.source_edit = QPlainTextEdit()
        self.source_edit.setObjectName("sourceEdit")
        self.source_edit.setAccessibleName("Source code")
        self.source_edit.setStyleSheet(StyleSheets.get_code_editor_style())
        self.source_edit.setFont(get_monospace_font())
        self.source_edit.setTabStopDistance(4 * self.source_edit.fontMetrics().horizontalAdvance(" "))
        source_layout.addWidget(self.source_edit)

        stats_row = QHBoxLayout()
        self.line_count_label = QLabel()
        self.line_count_label.setObjectName("lineCountLabel")
        self.char_count_label = QLabel()
        self.char_count_label.setObjectName("charCountLabel")
        stats_row.addWidget(self.line_count_label)
        stats_row.addStretch()
        stats_row.addWidget(self.char_count_label)
        source_layout.addLayout(stats_row)

        row.addWidget(source_group, 1)

        # Controls
        controls = QVBoxLayout()
        controls.addStretch()
        self.convert_button = QPushButton("Convert")
        self.convert_button.setObjectName("convertButton")
        self.convert_button.setToolTip("Convert the source code (Ctrl+Enter)")
        self.convert_button.setStyleSheet(StyleSheets.get_primary_button_style())
        self.convert_button.setSizePolicy(QSizePolicy.Policy.Preferred, QSizePolicy.Policy.Fixed)

        self.swap_button = QPushButton("Swap")
        self.swap_button.setObjectName("swapButton")
        self.swap_button.setToolTip("Swap source and target languages")

        self.clear_button = QPushButton("Clear")
        self.clear_button.setObjectName("clearButton")
        self.clear_button.setToolTip("Clear the source code and result")

        for button in (self.convert_button, self.swap_button, self.clear_button):
            controls.addWidget(button)
        controls.addStretch()
        row.addLayout(controls)

        # Output panel
        output_group = QGroupBox("Converted Code")
        output_layout = QVBoxLayout(output_group)
        self.target_language_combo = self._create_language_combo("targetLanguageCombo", "Target language")
        output_layout.addWidget(self.target_language_combo)
        self.converted_code_view = ConvertedCodeView()
        output_layout.addWidget(self.converted_code_view)

        row.addWidget(output_group, 1)

        parent_layout.addLayout(row, 1)

    def _setup_shortcuts(self) -> None:
        """Keyboard shortcuts for the main actions."""
        if self.convert_button:
            convert_action = QAction(self.main_window)
            convert_action.setShortcut(QKeySequence("Ctrl+Return"))
            convert_action.triggered.connect(self.convert_button.click)
            self.main_window.addAction(convert_action)
        if self.clear_button:
            clear_action = QAction(self.main_window)
            clear_action.setShortcut(QKeySequence("Ctrl+L"))
            clear_action.triggered.connect(self.clear_button.click)
            self.main_window.addAction(clear_action)
