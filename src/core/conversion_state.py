"""
Conversion lifecycle states for the CodeShift converter.

The lifecycle is a single tagged value rather than a set of independent
flags, so combinations such as "loading and succeeded" cannot be expressed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar, TypeAlias

if TYPE_CHECKING:
    from .agent_response import ConversionResult


class ConversionState(Enum):
    """
    Enumeration of conversion states.

    Each lifecycle value reports one of these through its ``kind`` so UI code
    can switch on a plain enum.
    """

    IDLE = auto()  # No request in flight, nothing to show
    LOADING = auto()  # Request in flight
    SUCCEEDED = auto()  # Most recent request produced a result
    FAILED = auto()  # Most recent request failed


@dataclass(frozen=True)
class Idle:
    """No request in flight, no result, no error."""

    kind: ClassVar[ConversionState] = ConversionState.IDLE


@dataclass(frozen=True)
class Loading:
    """A request is in flight."""

    kind: ClassVar[ConversionState] = ConversionState.LOADING


@dataclass(frozen=True)
class Succeeded:
    """
    The most recent request completed successfully.

    ``just_succeeded`` drives the success banner only; clearing it keeps
    the result on screen.
    """

    result: ConversionResult
    just_succeeded: bool = True

    kind: ClassVar[ConversionState] = ConversionState.SUCCEEDED

    def settled(self) -> Succeeded:
        """Return the same result with the banner flag cleared."""
        return replace(self, just_succeeded=False)


@dataclass(frozen=True)
class Failed:
    """
    The most recent request failed.

    ``message_visible`` only controls whether the message is shown; a failed
    state never blocks another submission.
    """

    message: str
    message_visible: bool = True

    kind: ClassVar[ConversionState] = ConversionState.FAILED

    def hidden(self) -> Failed:
        """Return the same failure with the message hidden."""
        return replace(self, message_visible=False)


LifecycleState: TypeAlias = Idle | Loading | Succeeded | Failed
