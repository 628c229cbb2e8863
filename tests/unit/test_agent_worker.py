"""
Tests for the AgentWorker thread.
"""

from conftest import FakeAgentClient

from core.agent_response import AgentResult
from core.errors import AgentError, ErrorCode
from core.threading import AgentWorker


class TestAgentWorker:
    """Test the AgentWorker class."""

    def test_worker_creation(self, qtbot):
        """Test that worker keeps its request data."""
        worker = AgentWorker(FakeAgentClient(), "Convert", "agent-1", 7)

        assert worker.message == "Convert"
        assert worker.agent_id == "agent-1"
        assert worker.generation == 7
        assert worker.objectName() == "AgentWorker-7"

    def test_run_success(self, qtbot):
        """Test a returned result is emitted with the generation."""
        client = FakeAgentClient()
        worker = AgentWorker(client, "Convert", "agent-1", 3)
        resolved = []
        failed = []
        worker.agentResolved.connect(lambda generation, result: resolved.append((generation, result)))
        worker.agentFailed.connect(lambda *args: failed.append(args))

        worker.run()

        assert resolved == [(3, client.result)]
        assert failed == []
        assert client.calls == [("Convert", "agent-1")]

    def test_run_unsuccessful_result_is_resolved(self, qtbot):
        """Test an unsuccessful AgentResult is still a resolved call."""
        result = AgentResult(success=False, error="nope")
        worker = AgentWorker(FakeAgentClient(result), "m", "a", 1)
        resolved = []
        worker.agentResolved.connect(lambda generation, value: resolved.append(value))

        worker.run()

        assert resolved == [result]

    def test_run_exception(self, qtbot):
        """Test an exception is reported through agentFailed."""
        worker = AgentWorker(FakeAgentClient(error=RuntimeError("socket closed")), "m", "a", 5)
        failed = []
        worker.agentFailed.connect(lambda *args: failed.append(args))

        worker.run()

        assert failed == [(5, "RuntimeError", "socket closed")]

    def test_run_app_error(self, qtbot):
        """Test application errors report their user message."""
        error = AgentError(code=ErrorCode.TIMEOUT, user_message="The conversion service timed out. Please try again.")
        worker = AgentWorker(FakeAgentClient(error=error), "m", "a", 2)
        failed = []
        worker.agentFailed.connect(lambda *args: failed.append(args))

        worker.run()

        assert failed == [(2, "AgentError", "The conversion service timed out. Please try again.")]

    def test_threaded_run(self, qtbot):
        """Test the worker delivers its outcome when started as a thread."""
        worker = AgentWorker(FakeAgentClient(), "m", "a", 9)

        with qtbot.waitSignal(worker.agentResolved, timeout=3000) as blocker:
            worker.start()

        assert blocker.args[0] == 9
        assert worker.wait(3000)
