"""Flight-time kinematics and result derivation.

This module is pure logic with NO I/O and NO OpenCV imports.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from jump_marker.core.exceptions import IncompleteSessionError
from jump_marker.core.logging import get_logger
from jump_marker.core.types import ResultRecord

if TYPE_CHECKING:
    from jump_marker.session.marking import MarkingSession

logger = get_logger(__name__)

GRAVITY = 9.81  # m/s^2


def jump_height_m(flight_time_s: float) -> float:
    """Jump height implied by a symmetric flight time.

    Time up equals time down, so the peak is reached after t/2 and
    h = (g * t/2)^2 / (2g) = g * t^2 / 8.

    Args:
        flight_time_s: Seconds between take-off and landing

    Returns:
        Height in meters
    """
    return GRAVITY * flight_time_s**2 / 8


def takeoff_velocity_mps(flight_time_s: float) -> float:
    """Initial vertical velocity implied by a symmetric flight time."""
    return GRAVITY * flight_time_s / 2


def frame_index(time_s: float, frame_rate: float) -> int:
    """Index of the frame nearest to a timestamp.

    Rounds half away from zero, so 2.5 frames is frame 3 (not the
    banker's rounding of the builtin round()).

    Args:
        time_s: Timestamp in seconds
        frame_rate: Frames per second

    Returns:
        Frame index
    """
    scaled = time_s * frame_rate
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def derive_result(session: MarkingSession, now: datetime | None = None) -> ResultRecord:
    """Turn a completed marking session into a result record.

    Args:
        session: Session with both marks set and landing after take-off
        now: Creation time (defaults to the current UTC time)

    Returns:
        Immutable result record

    Raises:
        IncompleteSessionError: If the session is not complete
    """
    if not session.is_complete():
        if session.takeoff is None or session.landing is None:
            raise IncompleteSessionError()
        raise IncompleteSessionError("Landing must occur after take-off. Please check your markers")

    # is_complete() guarantees both marks
    takeoff = float(session.takeoff)  # type: ignore[arg-type]
    landing = float(session.landing)  # type: ignore[arg-type]
    flight_time = landing - takeoff

    record = ResultRecord(
        flight_time_s=flight_time,
        jump_height_cm=jump_height_m(flight_time) * 100,
        takeoff_velocity_mps=takeoff_velocity_mps(flight_time),
        frame_rate=session.frame_rate,
        takeoff_time_s=takeoff,
        landing_time_s=landing,
        takeoff_frame=frame_index(takeoff, session.frame_rate),
        landing_frame=frame_index(landing, session.frame_rate),
        created_at=now or datetime.now(timezone.utc),
    )

    logger.info(
        "Derived result: flight %.4f s, height %.2f cm, velocity %.2f m/s (frames %d-%d @ %g fps)",
        record.flight_time_s,
        record.jump_height_cm,
        record.takeoff_velocity_mps,
        record.takeoff_frame,
        record.landing_frame,
        record.frame_rate,
    )

    return record
