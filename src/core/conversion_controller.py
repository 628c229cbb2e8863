"""
Conversion lifecycle controller for the CodeShift converter.

This module owns the request lifecycle: it holds the user input, builds the
agent request, dispatches it on a worker thread, validates the outcome and
exposes the resulting state to the presentation layer through signals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QObject, Qt, QTimer, Signal, Slot

from .agent_client import AgentClient
from .agent_response import AgentResult, ConversionResult, parse_agent_result
from .clipboard import copy_text
from .config import DEFAULT_AGENT_ID, TransientTimings
from .conversion_request import ConversionRequest
from .conversion_state import Failed, Idle, LifecycleState, Loading, Succeeded
from .errors import EMPTY_INPUT_MESSAGE, UNEXPECTED_ERROR_MESSAGE, AgentResponseError, InvalidLanguageError
from .languages import DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE, is_supported_language
from .threading import AgentWorker

logger = logging.getLogger(__name__)

CopyCallback = Callable[[str], bool]


class ConversionController(QObject):
    """
    Finite-state controller for code conversion requests.

    The lifecycle is a single LifecycleState value. Input fields live beside
    it and survive every request; only clear() resets the source code.

    Each dispatched request is tagged with a generation number. Outcomes for
    any generation other than the current one are discarded, which is how
    clear() abandons a request that is still in flight.

    Signals:
        stateChanged(object): the new LifecycleState
        sourceCodeChanged(str): source code text changed
        languagesChanged(str, str): source and target language
        copiedChanged(bool): the "copied" indicator toggled
    """

    stateChanged = Signal(object)
    sourceCodeChanged = Signal(str)
    languagesChanged = Signal(str, str)
    copiedChanged = Signal(bool)

    def __init__(
        self,
        client: AgentClient,
        *,
        agent_id: str = DEFAULT_AGENT_ID,
        copy_callback: CopyCallback | None = None,
        timings: TransientTimings | None = None,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
        parent: QObject | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            client: Agent capability used for conversions
            agent_id: Identifier sent with every agent call
            copy_callback: Clipboard capability, defaults to the system clipboard
            timings: Transient affordance lifetimes
            source_language: Initial source language
            target_language: Initial target language
            parent: Parent QObject for lifetime management

        Raises:
            InvalidLanguageError: If an initial language is not supported
        """
        super().__init__(parent)
        self.setObjectName("ConversionController")

        self._client = client
        self._agent_id = agent_id
        self._copy_callback = copy_callback or copy_text
        self._timings = timings or TransientTimings()

        self._require_language(source_language, "source_language")
        self._require_language(target_language, "target_language")

        self._state: LifecycleState = Idle()
        self._source_code = ""
        self._source_language = source_language
        self._target_language = target_language

        self._generation = 0
        self._workers: dict[int, AgentWorker] = {}
        self._requests: dict[int, ConversionRequest] = {}

        self._copied = False
        self._copy_token = 0

        logger.debug("ConversionController initialized.")

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def source_code(self) -> str:
        return self._source_code

    @property
    def source_language(self) -> str:
        return self._source_language

    @property
    def target_language(self) -> str:
        return self._target_language

    @property
    def agent_id(self) -> str:
        return self._agent_id

    @property
    def timings(self) -> TransientTimings:
        return self._timings

    @property
    def generation(self) -> int:
        """Generation of the most recent request (or clear)."""
        return self._generation

    @property
    def copied(self) -> bool:
        return self._copied

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def can_submit(self) -> bool:
        """Whether a submission would reach the agent right now."""
        return not self.is_loading and bool(self._source_code.strip())

    @property
    def result(self) -> ConversionResult | None:
        """The current conversion result, if the last request succeeded."""
        if isinstance(self._state, Succeeded):
            return self._state.result
        return None

    @property
    def error_message(self) -> str | None:
        """The failure message while it is still visible."""
        if isinstance(self._state, Failed) and self._state.message_visible:
            return self._state.message
        return None

    @property
    def success_banner_visible(self) -> bool:
        return isinstance(self._state, Succeeded) and self._state.just_succeeded

    @staticmethod
    def _require_language(language: str, field: str) -> None:
        if not is_supported_language(language):
            raise InvalidLanguageError(language, field=field)

    @Slot(str)
    def set_source_code(self, text: str) -> None:
        """Replace the source code text."""
        if text == self._source_code:
            return
        self._source_code = text
        self.sourceCodeChanged.emit(text)

    @Slot(str)
    def set_source_language(self, language: str) -> None:
        """
        Select the source language.

        Raises:
            InvalidLanguageError: If the language is not supported
        """
        self._require_language(language, "source_language")
        if language == self._source_language:
            return
        self._source_language = language
        self.languagesChanged.emit(self._source_language, self._target_language)

    @Slot(str)
    def set_target_language(self, language: str) -> None:
        """
        Select the target language.

        Raises:
            InvalidLanguageError: If the language is not supported
        """
        self._require_language(language, "target_language")
        if language == self._target_language:
            return
        self._target_language = language
        self.languagesChanged.emit(self._source_language, self._target_language)

    @Slot()
    def submit(self) -> bool:
        """
        Submit the current input for conversion.

        Returns:
            True if a request was dispatched to the agent
        """
        if self.is_loading:
            logger.warning("Cannot submit: a conversion is already in progress")
            return False

        if not self._source_code.strip():
            logger.info("Submission rejected: no source code")
            self._fail(EMPTY_INPUT_MESSAGE)
            return False

        request = ConversionRequest(
            source_code=self._source_code,
            source_language=self._source_language,
            target_language=self._target_language,
        )

        # Tag the request so late outcomes of earlier ones are dropped
        self._generation += 1
        generation = self._generation
        self._set_copied(False)
        self._set_state(Loading())

        logger.info(f"[{generation}] Dispatching conversion request: {request.to_dict()}")
        self._dispatch(request, generation)
        return True

    @Slot()
    def swap_languages(self) -> None:
        """Exchange the source and target languages."""
        self._source_language, self._target_language = self._target_language, self._source_language
        logger.debug(f"Languages swapped: {self._source_language} -> {self._target_language}")
        self.languagesChanged.emit(self._source_language, self._target_language)

    @Slot()
    def clear(self) -> None:
        """
        Reset the source code and return to Idle.

        A request still in flight keeps running but its outcome is discarded.
        """
        if self.is_loading:
            logger.info(f"[{self._generation}] Clearing while a request is in flight; its outcome will be ignored")
        # Invalidate any request still in flight
        self._generation += 1
        self.set_source_code("")
        self._set_copied(False)
        self._set_state(Idle())

    @Slot()
    def copy_result(self) -> bool:
        """
        Copy the converted code to the clipboard.

        Returns:
            True if the clipboard accepted the text
        """
        result = self.result
        if result is None:
            return False

        try:
            copied = bool(self._copy_callback(result.converted_code))
        except Exception:
            logger.exception("Clipboard copy raised")
            copied = False

        if not copied:
            logger.debug("Copy to clipboard failed; ignoring")
            return False

        # Only the newest copy may reset the indicator
        self._copy_token += 1
        token = self._copy_token
        self._set_copied(True)
        QTimer.singleShot(self._timings.copied_clear_ms, self, lambda: self._expire_copied(token))
        return True

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """
        Wait for outstanding agent calls before the application quits.

        Outcomes that arrive afterwards are ignored.
        """
        # Drop every pending outcome
        self._generation += 1
        for generation, worker in list(self._workers.items()):
            if worker.isRunning() and not worker.wait(timeout_ms):
                logger.warning(f"[{generation}] Agent worker did not finish within {timeout_ms}ms during shutdown")

    def _dispatch(self, request: ConversionRequest, generation: int) -> None:
        """Start a worker thread for the request."""
        worker = AgentWorker(
            self._client,
            request.prompt_message,
            self._agent_id,
            generation,
            parent=self,
        )
        worker.agentResolved.connect(self._on_agent_resolved, Qt.ConnectionType.QueuedConnection)
        worker.agentFailed.connect(self._on_agent_failed, Qt.ConnectionType.QueuedConnection)
        worker.finished.connect(self._reap_workers, Qt.ConnectionType.QueuedConnection)

        self._workers[generation] = worker
        self._requests[generation] = request
        worker.start()

    def _is_current(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug(f"[{generation}] Discarding outcome of stale request (current: {self._generation})")
            return False
        return True

    @Slot(int, object)
    def _on_agent_resolved(self, generation: int, agent_result: AgentResult) -> None:
        """Validate the agent's answer and settle the lifecycle."""
        if not self._is_current(generation):
            return

        try:
            result = parse_agent_result(agent_result)
        except AgentResponseError as e:
            logger.warning(f"[{generation}] Conversion failed: {e.technical_message or e.user_message}")
            if e.context:
                logger.debug(f"[{generation}] Failure context: {e.context}")
            self._fail(e.user_message)
            return

        # Check the echo against the languages that were sent
        request = self._requests.get(generation)
        if request is not None and not result.matches_languages(request.source_language, request.target_language):
            logger.info(
                f"[{generation}] Agent echoed {result.source_language} -> {result.target_language}, "
                f"requested {request.source_language} -> {request.target_language}"
            )

        logger.info(f"[{generation}] Conversion completed successfully")
        state = Succeeded(result)
        self._set_state(state)
        QTimer.singleShot(self._timings.success_banner_ms, self, lambda: self._settle_success(state))

    @Slot(int, str, str)
    def _on_agent_failed(self, generation: int, error_type: str, message: str) -> None:
        """Settle the lifecycle after the agent capability raised."""
        if not self._is_current(generation):
            return
        logger.error(f"[{generation}] Agent call failed: {error_type}")
        self._fail(message or UNEXPECTED_ERROR_MESSAGE)

    def _fail(self, message: str) -> None:
        state = Failed(message)
        self._set_state(state)
        QTimer.singleShot(self._timings.error_clear_ms, self, lambda: self._hide_failure(state))

    def _set_state(self, state: LifecycleState) -> None:
        logger.debug(f"State: {type(self._state).__name__} -> {type(state).__name__}")
        self._state = state
        self.stateChanged.emit(state)

    def _settle_success(self, state: Succeeded) -> None:
        # A newer state means this timer is stale
        if self._state is state:
            self._set_state(state.settled())

    def _hide_failure(self, state: Failed) -> None:
        if self._state is state:
            self._set_state(state.hidden())

    def _set_copied(self, copied: bool) -> None:
        if copied == self._copied:
            return
        self._copied = copied
        self.copiedChanged.emit(copied)

    def _expire_copied(self, token: int) -> None:
        if token == self._copy_token:
            self._set_copied(False)

    @Slot()
    def _reap_workers(self) -> None:
        """Release worker threads that have finished."""
        for generation, worker in list(self._workers.items()):
            if worker.isFinished():
                del self._workers[generation]
                self._requests.pop(generation, None)
                worker.deleteLater()
                logger.debug(f"Worker {worker.objectName()} scheduled for deletion.")
