"""Editor orchestration."""

from jump_marker.pipeline.editor import JumpEditor

__all__ = ["JumpEditor"]
