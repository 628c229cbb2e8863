"""
Reusable GUI widgets for the CodeShift converter.

This module contains custom widgets that can be reused across different
parts of the application.
"""

from .result_panel import ConvertedCodeView, ResultDetailsPanel
from .status_indicator import StatusIndicatorWidget, StatusState

__all__ = ["ConvertedCodeView", "ResultDetailsPanel", "StatusIndicatorWidget", "StatusState"]
