"""
Shared fixtures for the CodeShift converter tests.
"""

import os
import threading
from typing import Any
from unittest.mock import MagicMock

# Set offscreen platform to prevent display errors on headless systems
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402

from core.agent_response import AgentResult  # noqa: E402
from core.config import DEFAULT_CONFIG, TransientTimings  # noqa: E402
from core.config_manager import ConfigManager  # noqa: E402
from core.conversion_controller import ConversionController  # noqa: E402


def success_payload(notes: list[str] | None = None, **overrides: Any) -> dict[str, Any]:
    """Build a well-formed success payload as the agent returns it."""
    result: dict[str, Any] = {
        "convertedCode": "def f(): pass",
        "explanation": "Converted the function declaration to a Python def.",
        "sourceLanguage": "JavaScript",
        "targetLanguage": "Python",
    }
    if notes is not None:
        result["conversionNotes"] = notes
    result.update(overrides)
    return {"status": "success", "result": result}


class FakeAgentClient:
    """
    Agent capability double.

    Records every call, returns ``result`` or raises ``error``, and can hold
    calls on a gate to keep a request in flight.
    """

    def __init__(self, result: AgentResult | None = None, error: Exception | None = None) -> None:
        self.result = result if result is not None else AgentResult(success=True, response=success_payload())
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self.gate: threading.Event | None = None
        self._lock = threading.Lock()

    def hold(self) -> threading.Event:
        """Block calls until the returned event is set."""
        self.gate = threading.Event()
        return self.gate

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self.calls)

    def invoke_agent(self, message: str, agent_id: str) -> AgentResult:
        with self._lock:
            self.calls.append((message, agent_id))
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        return self.result


FAST_TIMINGS = TransientTimings(success_banner_ms=100, error_clear_ms=100, copied_clear_ms=100)


@pytest.fixture
def fake_client():
    """Agent capability returning a successful conversion."""
    return FakeAgentClient()


@pytest.fixture
def copy_spy():
    """Clipboard capability that always succeeds."""
    return MagicMock(return_value=True)


@pytest.fixture
def make_controller(qtbot, fake_client, copy_spy):
    """Factory for controllers wired to the fake capabilities."""
    controllers: list[ConversionController] = []

    def factory(**kwargs: Any) -> ConversionController:
        kwargs.setdefault("copy_callback", copy_spy)
        kwargs.setdefault("timings", FAST_TIMINGS)
        client = kwargs.pop("client", fake_client)
        controller = ConversionController(client, **kwargs)
        controllers.append(controller)
        return controller

    yield factory

    for controller in controllers:
        if controller.generation and getattr(controller, "_workers", None):
            for worker in list(controller._workers.values()):
                worker.wait(2000)


@pytest.fixture
def mock_config_manager():
    """ConfigManager double backed by the defaults, with fast timings."""
    manager = MagicMock(spec=ConfigManager)
    manager.get.side_effect = lambda key, default=None: DEFAULT_CONFIG.get(key, default)
    manager.get_language.side_effect = lambda key: DEFAULT_CONFIG[key]
    manager.transient_timings.return_value = FAST_TIMINGS
    return manager
