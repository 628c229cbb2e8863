"""
ConversionRequest dataclass for agent prompt construction.

This module provides the typed request built from the current user input.
It serves as the bridge between the editor state and the agent message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import EMPTY_INPUT_MESSAGE, ErrorCode, InvalidLanguageError, ValidationError
from .languages import is_supported_language

# Agent prompt; the code is sent untrimmed
PROMPT_TEMPLATE = "Convert the following code from {source_language} to {target_language}:\n\n{source_code}"


@dataclass(frozen=True)
class ConversionRequest:
    """
    A single conversion request.

    Instances are validated on construction: the source code must contain
    something other than whitespace and both languages must be supported.
    """

    source_code: str
    source_language: str
    target_language: str

    def __post_init__(self) -> None:
        """Validate the request fields."""
        if not isinstance(self.source_code, str) or not self.source_code.strip():
            raise ValidationError(
                code=ErrorCode.EMPTY_INPUT,
                user_message=EMPTY_INPUT_MESSAGE,
                field="source_code",
            )
        # Languages must come from the supported set
        if not is_supported_language(self.source_language):
            raise InvalidLanguageError(self.source_language, field="source_language")
        if not is_supported_language(self.target_language):
            raise InvalidLanguageError(self.target_language, field="target_language")

    @property
    def prompt_message(self) -> str:
        """The message sent to the agent."""
        return PROMPT_TEMPLATE.format(
            source_language=self.source_language,
            target_language=self.target_language,
            source_code=self.source_code,
        )

    @property
    def line_count(self) -> int:
        return len(self.source_code.split("\n"))

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the request to a dictionary for logging.

        The source code itself is summarized rather than included.
        """
        return {
            "source_language": self.source_language,
            "target_language": self.target_language,
            "lines": self.line_count,
            "characters": len(self.source_code),
        }
