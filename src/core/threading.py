"""
Threading support for non-blocking agent invocations.

This module provides a QThread-based worker that runs one agent call off the
GUI thread and reports its outcome through signals, which Qt delivers back on
the receiver's thread.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QThread, Signal

from .agent_client import AgentClient
from .error_handler import get_error_handler

logger = logging.getLogger(__name__)


class AgentWorker(QThread):
    """
    QThread-based worker for a single agent invocation.

    Every worker carries the generation of the request that created it, and
    echoes it in its signals so the receiver can drop outdated outcomes.
    Exactly one of the two outcome signals is emitted per run.

    Signals:
        agentResolved(int, object): generation and the AgentResult returned
        agentFailed(int, str, str): generation, error type and description
            of the exception raised by the capability
    """

    agentResolved = Signal(int, object)  # generation, AgentResult
    agentFailed = Signal(int, str, str)  # generation, error_type, message

    def __init__(
        self,
        client: AgentClient,
        message: str,
        agent_id: str,
        generation: int,
        *,
        parent: QObject | None = None,
    ) -> None:
        """
        Initialize the agent worker.

        Args:
            client: Agent capability to invoke
            message: Prompt message
            agent_id: Agent identifier
            generation: Request generation this call belongs to
            parent: Parent QObject for lifetime management
        """
        super().__init__(parent)

        self._client = client
        self.message = message
        self.agent_id = agent_id
        self.generation = generation
        self._error_handler = get_error_handler()

        self.setObjectName(f"AgentWorker-{generation}")

    def run(self) -> None:
        """
        Worker thread body.

        Any exception from the capability is reported through agentFailed;
        nothing escapes the thread.
        """
        try:
            logger.debug(f"[{self.generation}] Calling agent {self.agent_id}")
            result = self._client.invoke_agent(self.message, self.agent_id)
        except Exception as e:
            self._error_handler.handle(e, {"source": "agent_worker", "generation": self.generation})
            self.agentFailed.emit(self.generation, type(e).__name__, self._error_handler.to_user_message(e))
            return

        logger.debug(f"[{self.generation}] Agent call returned")
        self.agentResolved.emit(self.generation, result)
