"""Display infrastructure for analysis progress and error reporting."""

from ridewire.display.analysis_display import AnalysisDisplay
from ridewire.display.callbacks import AnalysisCallback
from ridewire.display.error_display import ErrorDisplay

__all__ = ["AnalysisCallback", "AnalysisDisplay", "ErrorDisplay"]
