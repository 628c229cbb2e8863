"""
Tests for agent response validation.
"""

import json

import pytest
from conftest import success_payload

from core.agent_response import AgentResult, ConversionResult, parse_agent_result
from core.errors import CONVERSION_FAILED_MESSAGE, AgentResponseError, ErrorCode


class TestParseAgentResult:
    """Test parse_agent_result with well-formed and malformed responses."""

    def test_success(self):
        """Test a well-formed success yields a ConversionResult."""
        result = parse_agent_result(AgentResult(success=True, response=success_payload(notes=["uses def"])))

        assert result == ConversionResult(
            converted_code="def f(): pass",
            explanation="Converted the function declaration to a Python def.",
            source_language="JavaScript",
            target_language="Python",
            conversion_notes=("uses def",),
        )

    def test_missing_notes_default_empty(self):
        """Test a result without conversionNotes has no notes."""
        result = parse_agent_result(AgentResult(success=True, response=success_payload()))

        assert result.conversion_notes == ()

    def test_null_notes_default_empty(self):
        """Test conversionNotes of null is treated like a missing list."""
        result = parse_agent_result(AgentResult(success=True, response=success_payload(conversionNotes=None)))

        assert result.conversion_notes == ()

    @pytest.mark.parametrize("field", ["message", "metadata"])
    def test_null_envelope_extras_accepted(self, field):
        """Test a success carrying null message or metadata still parses."""
        payload = {**success_payload(), field: None}

        result = parse_agent_result(AgentResult(success=True, response=payload))

        assert result.converted_code == "def f(): pass"

    def test_error_status_with_null_message(self):
        """Test a status 'error' payload with a null message uses the fallback."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=True, response={"status": "error", "message": None}))

        assert exc_info.value.user_message == CONVERSION_FAILED_MESSAGE
        assert exc_info.value.code is ErrorCode.AGENT_FAILURE

    def test_json_string_payload(self):
        """Test a payload delivered as a JSON string is decoded."""
        raw = json.dumps(success_payload(notes=["a", "b"]))

        result = parse_agent_result(AgentResult(success=True, response=raw))

        assert result.conversion_notes == ("a", "b")

    def test_unsuccessful_without_text(self):
        """Test an unsuccessful call with no error text uses the generic message."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=False, error=None))

        assert exc_info.value.user_message == CONVERSION_FAILED_MESSAGE
        assert exc_info.value.code is ErrorCode.AGENT_FAILURE

    def test_unsuccessful_with_text(self):
        """Test the provider's error text is kept."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=False, error="Rate limit reached", metadata={"status_code": 429}))

        assert exc_info.value.user_message == "Rate limit reached"
        assert exc_info.value.context == {"status_code": 429}

    def test_error_status_with_message(self):
        """Test a status 'error' payload uses its message."""
        payload = {"status": "error", "message": "Cannot convert SQL to Dart"}

        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=True, response=payload))

        assert exc_info.value.user_message == "Cannot convert SQL to Dart"

    def test_error_status_without_message(self):
        """Test a status 'error' payload without a message uses the fallback."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=True, response={"status": "error", "message": "  "}))

        assert exc_info.value.user_message == CONVERSION_FAILED_MESSAGE

    @pytest.mark.parametrize(
        "response",
        [
            None,
            [],
            "{not json",
            {},
            {"status": 1},
            {"status": "done", "result": {}},
            {"status": "success"},
            {"status": "success", "result": "def f(): pass"},
            success_payload(convertedCode=None),
            success_payload(explanation=5),
            success_payload(notes=["ok", 3]),
        ],
    )
    def test_malformed(self, response):
        """Test malformed responses raise with the generic message."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=True, response=response))

        assert exc_info.value.user_message == CONVERSION_FAILED_MESSAGE
        assert exc_info.value.code is ErrorCode.MALFORMED_RESPONSE

    def test_not_an_agent_result(self):
        """Test a capability returning something else is treated as malformed."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result({"success": True})

        assert exc_info.value.user_message == CONVERSION_FAILED_MESSAGE

    def test_technical_message_not_shown(self):
        """Test validation details stay out of the user message."""
        with pytest.raises(AgentResponseError) as exc_info:
            parse_agent_result(AgentResult(success=True, response=success_payload(convertedCode=1)))

        assert "convertedCode" not in exc_info.value.user_message
        assert exc_info.value.technical_message


class TestAgentResultFromDict:
    """Test AgentResult.from_dict."""

    def test_envelope(self):
        """Test a success envelope is unpacked."""
        result = AgentResult.from_dict({"success": True, "response": {"status": "success"}})

        assert result.success
        assert result.response == {"status": "success"}
        assert result.error is None

    def test_error_envelope(self):
        """Test error text is carried over."""
        result = AgentResult.from_dict({"success": False, "error": "Agent not found"})

        assert not result.success
        assert result.error == "Agent not found"

    def test_bare_payload(self):
        """Test a body that is already an agent payload counts as success."""
        payload = success_payload()

        result = AgentResult.from_dict(payload)

        assert result.success
        assert result.response is payload

    @pytest.mark.parametrize("body", [None, "ok", [1, 2]])
    def test_non_dict(self, body):
        """Test non-object bodies are unsuccessful."""
        assert not AgentResult.from_dict(body).success

    def test_truthy_success_is_not_true(self):
        """Test only a literal true marks success."""
        assert not AgentResult.from_dict({"success": "yes"}).success

    def test_blank_error_dropped(self):
        """Test empty or non-string error values are ignored."""
        assert AgentResult.from_dict({"success": False, "error": ""}).error is None
        assert AgentResult.from_dict({"success": False, "error": {"code": 1}}).error is None


class TestConversionResult:
    """Test ConversionResult helpers."""

    def test_to_dict(self):
        """Test the camelCase form."""
        result = ConversionResult("x", "y", "Go", "Rust", ("n1",))

        assert result.to_dict() == {
            "convertedCode": "x",
            "explanation": "y",
            "sourceLanguage": "Go",
            "targetLanguage": "Rust",
            "conversionNotes": ["n1"],
        }

    def test_matches_languages(self):
        """Test the echoed language comparison."""
        result = ConversionResult("x", "y", "Go", "Rust")

        assert result.matches_languages("Go", "Rust")
        assert not result.matches_languages("Rust", "Go")
