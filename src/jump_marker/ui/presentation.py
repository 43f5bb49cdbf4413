"""Pure presentation helpers for the marking editor."""

from __future__ import annotations

from jump_marker.core.types import HintKind, MarkKind, PresentationState
from jump_marker.session.marking import MarkingSession

SUCCESS_COLOR = "#10b981"
ERROR_COLOR = "#dc2626"

HINT_MESSAGES: dict[HintKind, str] = {
    HintKind.NONE: "",
    HintKind.TAKEOFF_MARKED: "Take-off marked! Now mark the landing frame.",
    HintKind.READY: "Landing marked! Ready to analyze your jump.",
    HintKind.ORDERING_WARNING: "Landing time must be after take-off. Please reselect.",
}

HINT_COLORS: dict[HintKind, str | None] = {
    HintKind.NONE: None,
    HintKind.TAKEOFF_MARKED: SUCCESS_COLOR,
    HintKind.READY: SUCCESS_COLOR,
    HintKind.ORDERING_WARNING: ERROR_COLOR,
}


def presentation_state(session: MarkingSession | None) -> PresentationState:
    """Hint for the most recent marking action.

    Args:
        session: Active session, or None before a frame rate is confirmed

    Returns:
        Hint kind, color and message
    """
    if session is None or session.last_marked is None:
        kind = HintKind.NONE
    elif session.last_marked is MarkKind.TAKEOFF:
        kind = HintKind.TAKEOFF_MARKED
    elif session.has_ordering_problem():
        kind = HintKind.ORDERING_WARNING
    else:
        kind = HintKind.READY

    return PresentationState(
        hint_kind=kind,
        hint_color=HINT_COLORS[kind],
        message=HINT_MESSAGES[kind],
    )


def analyze_label(session: MarkingSession | None) -> str:
    """Label of the analyze control."""
    if session is not None and session.is_complete():
        return "Calculate Jump Height"
    return "Mark Both Frames First"


def mark_label(name: str, time_s: float | None, session: MarkingSession | None) -> str:
    """Text describing a mark ("Take-off: 1.000s (Frame 240)")."""
    if time_s is None or session is None:
        return f"{name}: Not set"
    return f"{name}: {time_s:.3f}s (Frame {session.frame_index_of(time_s)})"


def hex_to_bgr(color: str) -> tuple[int, int, int]:
    """Convert "#rrggbb" to an OpenCV BGR tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #rrggbb color, got {color!r}")
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return b, g, r
