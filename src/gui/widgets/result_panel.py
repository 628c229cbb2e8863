"""
Result display for the CodeShift converter.

This module provides the widgets that show a ConversionResult: the converted
code with its copy button, the explanation, and the collapsible list of
conversion notes.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPlainTextEdit,
    QPushButton,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from core.agent_response import ConversionResult
from gui.utils.styling import StyleSheets, get_monospace_font

CONVERTED_CODE_PLACEHOLDER = "// Converted code will appear here..."
NO_NOTES_TEXT = "No conversion notes available."


class ConvertedCodeView(QWidget):
    """
    Read-only converted code pane with a copy button.

    Signals:
        copyRequested(): the user asked to copy the converted code
    """

    copyRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        # Read-only code pane
        self.code_edit = QPlainTextEdit()
        self.code_edit.setObjectName("convertedCodeEdit")
        self.code_edit.setReadOnly(True)
        self.code_edit.setPlaceholderText(CONVERTED_CODE_PLACEHOLDER)
        self.code_edit.setStyleSheet(StyleSheets.get_code_editor_style())
        self.code_edit.setFont(get_monospace_font())
        self.code_edit.setAccessibleName("Converted code")
        layout.addWidget(self.code_edit)

        # Copy button, shown only when there is code
        button_row = QHBoxLayout()
        button_row.addStretch()
        self.copy_button = QPushButton("Copy")
        self.copy_button.setObjectName("copyButton")
        self.copy_button.setToolTip("Copy the converted code to the clipboard")
        self.copy_button.setAccessibleName("Copy converted code")
        self.copy_button.setVisible(False)
        self.copy_button.clicked.connect(self.copyRequested)
        button_row.addWidget(self.copy_button)
        layout.addLayout(button_row)

    def show_code(self, code: str | None) -> None:
        """Show converted code, or the placeholder when there is none."""
        self.code_edit.setPlainText(code or "")
        self.copy_button.setVisible(code is not None)

    def set_copied(self, copied: bool) -> None:
        self.copy_button.setText("Copied" if copied else "Copy")


class ResultDetailsPanel(QWidget):
    """
    Explanation and conversion notes for the current result.

    The notes list can be collapsed; the panel itself is hidden while there
    is no result.

    Signals:
        notesToggled(bool): the notes list was expanded (True) or collapsed
    """

    notesToggled = Signal(bool)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._note_count = 0
        self._setup_ui()

    def _setup_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(20)

        # Explanation
        self.explanation_group = QGroupBox("Explanation")
        explanation_layout = QVBoxLayout(self.explanation_group)
        self.explanation_label = QLabel()
        self.explanation_label.setObjectName("explanationLabel")
        self.explanation_label.setWordWrap(True)
        self.explanation_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self.explanation_label.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)
        explanation_layout.addWidget(self.explanation_label)
        layout.addWidget(self.explanation_group, 1)

        # Conversion notes
        notes_frame = QWidget()
        notes_layout = QVBoxLayout(notes_frame)
        notes_layout.setContentsMargins(0, 0, 0, 0)

        self.notes_toggle = QToolButton()
        self.notes_toggle.setObjectName("notesToggle")
        self.notes_toggle.setCheckable(True)
        self.notes_toggle.setChecked(True)
        self.notes_toggle.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextBesideIcon)
        self.notes_toggle.setArrowType(Qt.ArrowType.DownArrow)
        self.notes_toggle.toggled.connect(self._on_notes_toggled)
        notes_layout.addWidget(self.notes_toggle)

        self.notes_list = QListWidget()
        self.notes_list.setObjectName("notesList")
        self.notes_list.setWordWrap(True)
        self.notes_list.setAccessibleName("Conversion notes")
        notes_layout.addWidget(self.notes_list)

        self.empty_notes_label = QLabel(NO_NOTES_TEXT)
        self.empty_notes_label.setObjectName("emptyNotesLabel")
        notes_layout.addWidget(self.empty_notes_label)

        layout.addWidget(notes_frame, 1)

        self._update_toggle_text()
        self._update_notes_visibility()

    def show_result(self, result: ConversionResult | None) -> None:
        """Show a result's explanation and notes, or hide the panel."""
        self.setVisible(result is not None)
        self.notes_list.clear()

        if result is None:
            self.explanation_label.clear()
            self._note_count = 0
        else:
            self.explanation_label.setText(result.explanation)
            self.notes_list.addItems(list(result.conversion_notes))
            self._note_count = len(result.conversion_notes)

        self._update_toggle_text()
        self._update_notes_visibility()

    def set_notes_expanded(self, expanded: bool) -> None:
        self.notes_toggle.setChecked(expanded)

    def notes_expanded(self) -> bool:
        return self.notes_toggle.isChecked()

    def _on_notes_toggled(self, expanded: bool) -> None:
        self.notes_toggle.setArrowType(Qt.ArrowType.DownArrow if expanded else Qt.ArrowType.RightArrow)
        self._update_notes_visibility()
        self.notesToggled.emit(expanded)

    def _update_toggle_text(self) -> None:
        self.notes_toggle.setText(f"Conversion Notes ({self._note_count})")

    def _update_notes_visibility(self) -> None:
        expanded = self.notes_toggle.isChecked()
        self.notes_list.setVisible(expanded and self._note_count > 0)
        self.empty_notes_label.setVisible(expanded and self._note_count == 0)
