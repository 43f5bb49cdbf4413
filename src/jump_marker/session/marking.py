"""Take-off/landing marking session.

Holds the confirmed frame rate and the two marked timestamps. All
mutations are synchronous responses to discrete editor events.
"""

from __future__ import annotations

import math

from jump_marker.analysis.calculator import frame_index, jump_height_m
from jump_marker.core.exceptions import InvalidFrameRateError
from jump_marker.core.logging import get_logger
from jump_marker.core.types import MAX_FRAME_RATE, MIN_FRAME_RATE, MarkKind, PreviewMetrics

logger = get_logger(__name__)


def validate_frame_rate(value: float) -> float:
    """Check that a frame rate is finite and within [1, 1000].

    Args:
        value: Candidate frame rate

    Returns:
        The frame rate as a float

    Raises:
        InvalidFrameRateError: If the value is out of range or not finite
    """
    try:
        frame_rate = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidFrameRateError() from e

    if not math.isfinite(frame_rate) or frame_rate < MIN_FRAME_RATE or frame_rate > MAX_FRAME_RATE:
        raise InvalidFrameRateError()

    return frame_rate


def step_position(
    position: float,
    direction: int,
    frame_rate: float,
    duration: float | None = None,
) -> float:
    """Position one frame before or after the given one.

    Args:
        position: Current playback position in seconds
        direction: +1 for the next frame, -1 for the previous frame
        frame_rate: Frames per second
        duration: Video duration in seconds (None if unknown)

    Returns:
        New position clamped to [0, duration]
    """
    if direction not in (-1, 1):
        raise ValueError(f"direction must be +1 or -1, got {direction!r}")

    new_position = max(0.0, position + direction / frame_rate)
    if duration is not None and math.isfinite(duration):
        new_position = min(duration, new_position)

    return new_position


class MarkingSession:
    """Frame rate plus take-off and landing marks for one video.

    A session is complete when both marks are set and landing comes
    strictly after take-off. Marks can be overwritten any number of
    times and in any order.
    """

    def __init__(self, frame_rate: float) -> None:
        """Create a session for a confirmed frame rate.

        Args:
            frame_rate: Video frame rate in frames per second

        Raises:
            InvalidFrameRateError: If the frame rate is out of range
        """
        self.frame_rate = validate_frame_rate(frame_rate)
        self.takeoff: float | None = None
        self.landing: float | None = None
        self.last_marked: MarkKind | None = None

    def __repr__(self) -> str:
        return (
            f"MarkingSession(frame_rate={self.frame_rate!r}, "
            f"takeoff={self.takeoff!r}, landing={self.landing!r})"
        )

    @property
    def frame_duration(self) -> float:
        """Duration of one frame in seconds."""
        return 1.0 / self.frame_rate

    def set_frame_rate(self, value: float) -> None:
        """Change the frame rate and clear both marks.

        Marks are cleared because their frame indices are meaningless
        under a different frame rate. An invalid value leaves the
        session untouched.

        Raises:
            InvalidFrameRateError: If the frame rate is out of range
        """
        self.frame_rate = validate_frame_rate(value)
        self.reset_marks()
        logger.info("Frame rate set to %g fps", self.frame_rate)

    def reset_marks(self) -> None:
        """Clear both marks."""
        self.takeoff = None
        self.landing = None
        self.last_marked = None

    def mark_takeoff(self, position: float) -> None:
        """Record the take-off mark at the given playback position."""
        self.takeoff = float(position)
        self.last_marked = MarkKind.TAKEOFF
        logger.debug(
            "Take-off marked at %.3f s (frame %d)", self.takeoff, self.frame_index_of(self.takeoff)
        )

    def mark_landing(self, position: float) -> None:
        """Record the landing mark at the given playback position.

        A landing at or before take-off is accepted; it only produces an
        ordering warning and leaves the session incomplete.
        """
        self.landing = float(position)
        self.last_marked = MarkKind.LANDING
        logger.debug(
            "Landing marked at %.3f s (frame %d)", self.landing, self.frame_index_of(self.landing)
        )

        if self.has_ordering_problem():
            logger.warning(
                "Landing (%.3f s) is not after take-off (%.3f s)", self.landing, self.takeoff
            )

    def has_ordering_problem(self) -> bool:
        """Whether both marks are set but landing is not after take-off."""
        if self.takeoff is None or self.landing is None:
            return False
        return self.landing <= self.takeoff

    def is_complete(self) -> bool:
        """Whether both marks are set and landing follows take-off."""
        return self.takeoff is not None and self.landing is not None and self.landing > self.takeoff

    @property
    def flight_time(self) -> float | None:
        """Seconds between the marks, or None if incomplete."""
        if not self.is_complete():
            return None
        return self.landing - self.takeoff  # type: ignore[operator]

    def preview_metrics(self) -> PreviewMetrics | None:
        """Live flight time and height for the current marks.

        Returns:
            Preview metrics, or None if the session is incomplete
        """
        flight_time = self.flight_time
        if flight_time is None:
            return None

        return PreviewMetrics(
            flight_time_ms=flight_time * 1000.0,
            height_cm=jump_height_m(flight_time) * 100.0,
        )

    def frame_index_of(self, time_s: float) -> int:
        """Frame index of a timestamp at this session's frame rate."""
        return frame_index(time_s, self.frame_rate)

    def step_frame(self, direction: int, position: float, duration: float | None = None) -> float:
        """Position one frame forward (+1) or back (-1), clamped to the video."""
        return step_position(position, direction, self.frame_rate, duration)
