"""Core infrastructure: config, types, exceptions, and logging."""

from jump_marker.core.config import Settings, get_settings
from jump_marker.core.exceptions import (
    BenchmarkError,
    HandoffError,
    IncompleteSessionError,
    InvalidFrameRateError,
    JumpMarkerError,
    MediaAcquisitionError,
    SessionNotStartedError,
    ShareUnavailableError,
)
from jump_marker.core.logging import get_logger, setup_logging
from jump_marker.core.types import (
    BenchmarkTable,
    BenchmarkTier,
    CalculationBreakdown,
    CalculationStep,
    HintKind,
    MarkKind,
    PresentationState,
    PreviewMetrics,
    ResultRecord,
    TierRating,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "MarkKind",
    "PreviewMetrics",
    "ResultRecord",
    "BenchmarkTier",
    "BenchmarkTable",
    "TierRating",
    "CalculationStep",
    "CalculationBreakdown",
    "HintKind",
    "PresentationState",
    # Exceptions
    "JumpMarkerError",
    "InvalidFrameRateError",
    "IncompleteSessionError",
    "SessionNotStartedError",
    "MediaAcquisitionError",
    "ShareUnavailableError",
    "HandoffError",
    "BenchmarkError",
    # Logging
    "setup_logging",
    "get_logger",
]
