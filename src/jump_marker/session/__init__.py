"""Marking session: frame rate, take-off and landing marks."""

from jump_marker.session.marking import MarkingSession, step_position, validate_frame_rate

__all__ = ["MarkingSession", "step_position", "validate_frame_rate"]
