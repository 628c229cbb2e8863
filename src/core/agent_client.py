"""
Agent client for CodeShift code conversions.

This module defines the capability the conversion controller depends on and
an HTTP implementation that talks to the agent proxy endpoint.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from .agent_response import AgentResult
from .config import DEFAULT_AGENT_ID, get_agent_api_key
from .errors import AgentError, ErrorCode

logger = logging.getLogger(__name__)

# Provider status codes with a dedicated user message
STATUS_MESSAGES: dict[int, str] = {
    401: "Authentication with the conversion service failed. Check your API key.",
    403: "Access to the conversion agent was denied.",
    429: "Too many conversion requests. Please wait a moment and try again.",
    503: "The conversion service is temporarily unavailable. Please try again later.",
}

# Error codes recorded in the result metadata for failed HTTP calls
STATUS_ERROR_CODES: dict[int, ErrorCode] = {
    401: ErrorCode.AUTHENTICATION_FAILED,
    403: ErrorCode.AUTHENTICATION_FAILED,
    429: ErrorCode.RATE_LIMITED,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


class AgentClient(Protocol):
    """Anything that can run one conversion prompt through an agent."""

    def invoke_agent(self, message: str, agent_id: str) -> AgentResult: ...


class HttpAgentClient:
    """
    Client for the agent proxy HTTP endpoint.

    The endpoint accepts ``{"message", "agent_id"}`` and answers with
    ``{"success", "response", "error"}``. Calls are blocking and are meant to
    run on a worker thread.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str | None = None,
        timeout: float = 120,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the agent client.

        Args:
            api_url: Agent endpoint URL
            api_key: API key sent as ``X-API-Key``. Defaults to the environment.
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.api_url = api_url
        self.api_key = api_key if api_key is not None else get_agent_api_key()
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def invoke_agent(self, message: str, agent_id: str = DEFAULT_AGENT_ID) -> AgentResult:
        """
        Send a message to the agent.

        Args:
            message: Prompt text
            agent_id: Identifier of the agent to run

        Returns:
            AgentResult describing the outcome. HTTP-level failures are
            reported as unsuccessful results.

        Raises:
            AgentError: If the service cannot be reached or times out
        """
        logger.info(f"Invoking agent {agent_id} ({len(message)} characters)")

        # Transport failures raise; HTTP failures become unsuccessful results
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    self.api_url,
                    headers=self._headers(),
                    json={"message": message, "agent_id": agent_id},
                )
        except httpx.TimeoutException as e:
            raise AgentError(
                code=ErrorCode.TIMEOUT,
                user_message="The conversion service timed out. Please try again.",
                technical_message=f"{type(e).__name__}: {e}",
                context={"api_url": self.api_url},
            ) from e
        except httpx.RequestError as e:
            raise AgentError(
                code=ErrorCode.NETWORK_ERROR,
                user_message=f"Network error: {e}",
                technical_message=f"{type(e).__name__}: {e}",
                context={"api_url": self.api_url},
            ) from e

        if not response.is_success:
            logger.warning(f"Agent endpoint returned HTTP {response.status_code}")
            if response.status_code in STATUS_MESSAGES:
                error = STATUS_MESSAGES[response.status_code]
            elif response.status_code >= 500:
                error = "The conversion service encountered an error. Please try again later."
            else:
                error = f"Agent service returned HTTP {response.status_code}"
            error_code = STATUS_ERROR_CODES.get(response.status_code, ErrorCode.AGENT_FAILURE)
            return AgentResult(
                success=False,
                error=error,
                metadata={"status_code": response.status_code, "error_code": error_code.value},
            )

        try:
            data = response.json()
        except ValueError:
            logger.warning("Agent endpoint returned a non-JSON body")
            return AgentResult(success=False, error="The conversion service returned an invalid response.")

        # Body is either the proxy envelope or a bare agent payload
        return AgentResult.from_dict(data)
