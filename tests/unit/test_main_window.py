"""
Tests for the MainWindow class.
"""

from conftest import FakeAgentClient, success_payload

from core.agent_response import AgentResult
from core.conversion_state import Failed, Idle, Succeeded
from core.error_handler import get_error_handler
from core.errors import CONVERSION_FAILED_MESSAGE, EMPTY_INPUT_MESSAGE
from gui.handlers.ui_state_handler import LOADING_TEXT, SUCCESS_TEXT
from gui.main_window import MainWindow
from gui.widgets.main_window_ui import WINDOW_TITLE, format_source_stats, source_placeholder


def make_window(qtbot, mock_config_manager, client=None, copy_callback=None):
    window = MainWindow(
        client=client or FakeAgentClient(),
        config_manager=mock_config_manager,
        copy_callback=copy_callback or (lambda text: True),
    )
    qtbot.addWidget(window)
    return window


def wait_for_result(qtbot, window):
    qtbot.waitUntil(lambda: not window.controller.is_loading, timeout=3000)


class TestMainWindowInitialization:
    """Test MainWindow initialization and setup."""

    def test_window_properties(self, qtbot, mock_config_manager):
        """Test that window properties are set correctly."""
        window = make_window(qtbot, mock_config_manager)

        assert window.windowTitle() == WINDOW_TITLE
        assert window.minimumWidth() == 800

    def test_initial_widgets(self, qtbot, mock_config_manager):
        """Test the widgets reflect the initial Idle state."""
        window = make_window(qtbot, mock_config_manager)
        ui = window.ui

        assert ui.source_language_combo.currentText() == "JavaScript"
        assert ui.target_language_combo.currentText() == "Python"
        assert ui.source_edit.placeholderText() == source_placeholder("JavaScript")
        assert ui.status_banner.isHidden()
        assert ui.details_panel.isHidden()
        assert not ui.convert_button.isEnabled()
        assert ui.line_count_label.text() == "1 lines"
        assert ui.char_count_label.text() == "0 characters"

    def test_languages_from_config(self, qtbot, mock_config_manager):
        """Test stored languages are restored."""
        mock_config_manager.get_language.side_effect = {
            "source_language": "Java",
            "target_language": "Kotlin",
        }.get

        window = make_window(qtbot, mock_config_manager)

        assert window.controller.source_language == "Java"
        assert window.ui.target_language_combo.currentText() == "Kotlin"


class TestConversionFlow:
    """Test conversions driven through the window."""

    def test_typing_enables_convert(self, qtbot, mock_config_manager):
        """Test entering code updates the controller, counters and button."""
        window = make_window(qtbot, mock_config_manager)

        window.ui.source_edit.setPlainText("a\nbc")

        assert window.controller.source_code == "a\nbc"
        assert window.ui.convert_button.isEnabled()
        assert (window.ui.line_count_label.text(), window.ui.char_count_label.text()) == format_source_stats("a\nbc")

    def test_successful_conversion(self, qtbot, mock_config_manager):
        """Test a conversion shows code, explanation, notes and the banner."""
        client = FakeAgentClient(AgentResult(success=True, response=success_payload(notes=["n1", "n2"])))
        window = make_window(qtbot, mock_config_manager, client=client)
        gate = client.hold()
        window.ui.source_edit.setPlainText("function f() {}")

        window.ui.convert_button.click()

        assert window.ui.status_banner.text() == LOADING_TEXT
        assert not window.ui.convert_button.isEnabled()
        assert window.ui.convert_button.text() == "Converting..."

        gate.set()
        wait_for_result(qtbot, window)

        assert isinstance(window.controller.state, Succeeded)
        assert window.ui.converted_code_view.code_edit.toPlainText() == "def f(): pass"
        assert not window.ui.converted_code_view.copy_button.isHidden()
        assert not window.ui.details_panel.isHidden()
        assert window.ui.details_panel.notes_list.count() == 2
        assert window.ui.status_banner.text() == SUCCESS_TEXT
        assert window.ui.convert_button.text() == "Convert"

        qtbot.waitUntil(lambda: window.ui.status_banner.isHidden(), timeout=2000)
        assert window.ui.converted_code_view.code_edit.toPlainText() == "def f(): pass"

    def test_failed_conversion(self, qtbot, mock_config_manager):
        """Test a failure shows the error banner, which then clears."""
        client = FakeAgentClient(AgentResult(success=False))
        window = make_window(qtbot, mock_config_manager, client=client)
        window.ui.source_edit.setPlainText("x")

        window.ui.convert_button.click()
        wait_for_result(qtbot, window)

        assert isinstance(window.controller.state, Failed)
        assert window.ui.status_banner.text() == CONVERSION_FAILED_MESSAGE
        assert window.ui.details_panel.isHidden()

        qtbot.waitUntil(lambda: window.ui.status_banner.isHidden(), timeout=2000)

    def test_empty_submit_via_controller(self, qtbot, mock_config_manager):
        """Test an empty submission shows the empty-input message."""
        window = make_window(qtbot, mock_config_manager)

        window.controller.submit()

        assert window.ui.status_banner.text() == EMPTY_INPUT_MESSAGE
        assert window.ui.status_indicator.status_text.text() == "Error"


class TestActions:
    """Test swap, clear and copy."""

    def test_swap(self, qtbot, mock_config_manager):
        """Test swap updates combos, placeholder and stored languages."""
        window = make_window(qtbot, mock_config_manager)

        window.ui.swap_button.click()

        assert window.ui.source_language_combo.currentText() == "Python"
        assert window.ui.target_language_combo.currentText() == "JavaScript"
        assert window.ui.source_edit.placeholderText() == source_placeholder("Python")
        mock_config_manager.save_languages.assert_called_with("Python", "JavaScript")

    def test_combo_selection(self, qtbot, mock_config_manager):
        """Test choosing a language in a combo updates the controller."""
        window = make_window(qtbot, mock_config_manager)

        window.ui.target_language_combo.setCurrentText("Rust")

        assert window.controller.target_language == "Rust"
        mock_config_manager.save_languages.assert_called_with("JavaScript", "Rust")

    def test_clear(self, qtbot, mock_config_manager):
        """Test clear empties the editor and hides the result."""
        window = make_window(qtbot, mock_config_manager)
        window.ui.source_edit.setPlainText("function f() {}")
        window.ui.convert_button.click()
        wait_for_result(qtbot, window)

        window.ui.clear_button.click()

        assert window.ui.source_edit.toPlainText() == ""
        assert isinstance(window.controller.state, Idle)
        assert window.ui.converted_code_view.code_edit.toPlainText() == ""
        assert window.ui.details_panel.isHidden()
        assert not window.ui.convert_button.isEnabled()

    def test_copy(self, qtbot, mock_config_manager):
        """Test the copy button copies and shows the copied indicator."""
        copied = []

        def copy_callback(text):
            copied.append(text)
            return True

        window = make_window(qtbot, mock_config_manager, copy_callback=copy_callback)
        window.ui.source_edit.setPlainText("function f() {}")
        window.ui.convert_button.click()
        wait_for_result(qtbot, window)

        window.ui.converted_code_view.copy_button.click()

        assert copied == ["def f(): pass"]
        assert window.ui.converted_code_view.copy_button.text() == "Copied"
        qtbot.waitUntil(lambda: window.ui.converted_code_view.copy_button.text() == "Copy", timeout=2000)

    def test_notes_toggle_saved(self, qtbot, mock_config_manager):
        """Test collapsing the notes is remembered."""
        window = make_window(qtbot, mock_config_manager)

        window.ui.details_panel.notes_toggle.click()

        mock_config_manager.set.assert_called_with("show_notes", False)

    def test_close_shuts_down_controller(self, qtbot, mock_config_manager):
        """Test closing the window waits for outstanding requests."""
        client = FakeAgentClient()
        window = make_window(qtbot, mock_config_manager, client=client)
        window.show()
        window.ui.source_edit.setPlainText("x")
        window.ui.convert_button.click()

        window.close()

        assert all(worker.isFinished() for worker in window.controller._workers.values())

    def test_clear_shortcut(self, qtbot, mock_config_manager):
        """Test Ctrl+L is bound to clear."""
        window = make_window(qtbot, mock_config_manager)
        window.ui.source_edit.setPlainText("x = 1")

        clear_action = next(action for action in window.actions() if action.shortcut().toString() == "Ctrl+L")
        clear_action.trigger()

        assert window.controller.source_code == ""


class TestUnhandledErrors:
    """Test errors reported by the global exception hooks."""

    def test_hook_error_shown_in_status_bar(self, qtbot, mock_config_manager):
        """Test an error from the exception hook reaches the status bar."""
        window = make_window(qtbot, mock_config_manager)

        app_error = get_error_handler().handle(RuntimeError("worker pool exploded"), {"source": "sys.excepthook"})

        assert window.statusBar().currentMessage() == app_error.user_message

    def test_agent_errors_left_to_banner(self, qtbot, mock_config_manager):
        """Test errors already shown by the conversion banner are not repeated."""
        window = make_window(qtbot, mock_config_manager)

        get_error_handler().handle(RuntimeError("agent down"), {"source": "agent_worker"})

        assert window.statusBar().currentMessage() == ""
