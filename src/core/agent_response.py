"""
Validation and normalization of agent responses.

The agent payload crosses into the application untyped. This module checks it
against a JSON schema and turns it into an immutable ConversionResult, or
raises AgentResponseError with a message fit for display.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import jsonschema

from .errors import CONVERSION_FAILED_MESSAGE, AgentResponseError, ErrorCode

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "success"
ERROR_STATUS = "error"

# JSON Schema for the agent payload envelope (draft-07)
AGENT_RESPONSE_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "CodeShift agent response",
    "type": "object",
    "required": ["status"],
    "properties": {
        "status": {"type": "string", "enum": [SUCCESS_STATUS, ERROR_STATUS]},
        # Provider extras may be null; message is only read on errors
        "message": {"type": ["string", "null"]},
        "metadata": {"type": ["object", "null"]},
    },
}

# JSON Schema for the nested conversion result (draft-07)
CONVERSION_RESULT_JSON_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "CodeShift conversion result",
    "type": "object",
    "required": ["convertedCode", "explanation", "sourceLanguage", "targetLanguage"],
    "properties": {
        "convertedCode": {"type": "string"},
        "explanation": {"type": "string"},
        "sourceLanguage": {"type": "string"},
        "targetLanguage": {"type": "string"},
        "conversionNotes": {"type": ["array", "null"], "items": {"type": "string"}},
    },
}


@dataclass(frozen=True)
class ConversionResult:
    """
    Result of a conversion.

    Notes keep the order the agent gave them in, which is also the order
    they are rendered in.
    """

    converted_code: str
    explanation: str
    source_language: str
    target_language: str
    conversion_notes: tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ConversionResult:
        """
        Build a result from the agent's camelCase result object.

        Args:
            payload: The ``result`` object of a success response

        Returns:
            ConversionResult instance

        Raises:
            AgentResponseError: If the payload does not match the result schema
        """
        try:
            jsonschema.validate(payload, CONVERSION_RESULT_JSON_SCHEMA)
        except jsonschema.ValidationError as e:
            raise AgentResponseError(technical_message=f"Result validation failed: {e.message}") from e

        return cls(
            converted_code=payload["convertedCode"],
            explanation=payload["explanation"],
            source_language=payload["sourceLanguage"],
            target_language=payload["targetLanguage"],
            conversion_notes=tuple(payload.get("conversionNotes") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase wire form."""
        return {
            "convertedCode": self.converted_code,
            "explanation": self.explanation,
            "sourceLanguage": self.source_language,
            "targetLanguage": self.target_language,
            "conversionNotes": list(self.conversion_notes),
        }

    def matches_languages(self, source_language: str, target_language: str) -> bool:
        """Check whether the echoed languages agree with a request."""
        return self.source_language == source_language and self.target_language == target_language


@dataclass
class AgentResult:
    """
    Outcome of one agent invocation, as returned by the agent capability.

    Attributes:
        success: Whether the call itself succeeded
        response: Provider payload, unvalidated
        error: Provider-supplied error text, if any
    """

    success: bool
    response: Any = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> AgentResult:
        """
        Build an AgentResult from a ``{"success", "response", "error"}`` body.

        A body that is already an agent payload (it carries ``status``) is
        treated as a successful call carrying that payload.
        """
        if not isinstance(data, dict):
            return cls(success=False, error=None, response=data)

        if "status" in data and "success" not in data:
            return cls(success=True, response=data)

        error = data.get("error")
        return cls(
            success=data.get("success") is True,
            response=data.get("response"),
            error=error if isinstance(error, str) and error else None,
        )


def _decode_response(response: Any) -> Any:
    """Decode a payload that was delivered as a JSON string."""
    if isinstance(response, str | bytes):
        try:
            return json.loads(response)
        except ValueError:
            return response
    return response


def _provider_message(agent_result: AgentResult, payload: Any) -> str:
    """Pick the provider's error text, falling back to the generic message."""
    if agent_result.error:
        return agent_result.error
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return CONVERSION_FAILED_MESSAGE


def parse_agent_result(agent_result: Any) -> ConversionResult:
    """
    Validate an agent result and extract the conversion.

    Args:
        agent_result: Value returned by the agent capability

    Returns:
        ConversionResult for a well-formed success response

    Raises:
        AgentResponseError: For error responses (carrying the provider's text
            when present) and for anything that is not a well-formed success
    """
    if not isinstance(agent_result, AgentResult):
        raise AgentResponseError(
            technical_message=f"Agent capability returned {type(agent_result).__name__}, expected AgentResult"
        )

    payload = _decode_response(agent_result.response)

    if not agent_result.success:
        raise AgentResponseError(
            user_message=_provider_message(agent_result, payload),
            technical_message="Agent call reported failure",
            code=ErrorCode.AGENT_FAILURE,
            context=dict(agent_result.metadata),
        )

    try:
        jsonschema.validate(payload, AGENT_RESPONSE_JSON_SCHEMA)
    except jsonschema.ValidationError as e:
        raise AgentResponseError(technical_message=f"Response validation failed: {e.message}") from e

    if payload["status"] != SUCCESS_STATUS:
        raise AgentResponseError(
            user_message=_provider_message(agent_result, payload),
            technical_message=f"Agent returned status {payload['status']!r}",
            code=ErrorCode.AGENT_FAILURE,
        )

    if "result" not in payload:
        raise AgentResponseError(technical_message="Success response has no result")

    result = ConversionResult.from_payload(payload["result"])
    logger.debug(f"Parsed conversion result with {len(result.conversion_notes)} notes")
    return result
