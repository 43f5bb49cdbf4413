"""Result handoff storage."""

from jump_marker.storage.handoff import ResultStore, from_handoff, to_handoff

__all__ = ["ResultStore", "from_handoff", "to_handoff"]
