"""Seekable video playback surface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import cv2
import numpy as np

from jump_marker.core.logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)


class PlaybackSurface(Protocol):
    """Provider of the current playback position.

    The editor reads these values at mark and step time only.
    """

    @property
    def current_time(self) -> float:
        """Current position in seconds."""
        ...

    @property
    def duration(self) -> float | None:
        """Video duration in seconds, or None if unknown."""
        ...

    def seek(self, position: float) -> None:
        """Move to a position in seconds."""
        ...


class VideoPlayback:
    """OpenCV-backed playback of a video file.

    Keeps its own position in seconds so marks reflect exactly what
    was sought, independent of decoder rounding.
    """

    def __init__(self, capture: cv2.VideoCapture, native_fps: float, source: str = "") -> None:
        """Initialize playback.

        Args:
            capture: Opened video capture
            native_fps: Frame rate reported by the container (used for play)
            source: Description of the source for logging
        """
        self._capture = capture
        self.native_fps = native_fps
        self.source = source
        self._position = 0.0
        self._frame: NDArray[np.uint8] | None = None
        self._playing = False

        frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT)
        self._duration = frame_count / native_fps if frame_count > 0 and native_fps > 0 else None

    @property
    def current_time(self) -> float:
        """Current position in seconds."""
        return self._position

    @property
    def duration(self) -> float | None:
        """Video duration in seconds, or None if unknown."""
        return self._duration

    @property
    def is_playing(self) -> bool:
        """Whether playback is advancing on its own."""
        return self._playing

    def seek(self, position: float) -> None:
        """Move to a position, clamped to the video bounds."""
        position = max(0.0, position)
        if self._duration is not None:
            position = min(self._duration, position)

        self._position = position
        self._capture.set(cv2.CAP_PROP_POS_MSEC, position * 1000.0)
        self._frame = None

    def read_frame(self) -> NDArray[np.uint8] | None:
        """Image at the current position.

        Returns:
            BGR image array or None if the decoder has no frame there
        """
        if self._frame is not None:
            return self._frame

        # Reading advances the decoder; reposition so the next read is stable
        self._capture.set(cv2.CAP_PROP_POS_MSEC, self._position * 1000.0)
        ok, image = self._capture.read()
        if not ok or image is None:
            return None

        self._frame = np.asarray(image, dtype=np.uint8)
        return self._frame

    def toggle_play(self) -> bool:
        """Start or pause playback.

        Returns:
            New playing state
        """
        self._playing = not self._playing
        state = "started" if self._playing else "paused"
        logger.debug("Playback %s at %.3f s", state, self._position)
        return self._playing

    def pause(self) -> None:
        """Pause playback."""
        self._playing = False

    def advance(self) -> None:
        """Move forward one native frame while playing."""
        if not self._playing:
            return

        self.seek(self._position + 1.0 / self.native_fps)
        if self._duration is not None and self._position >= self._duration:
            self._playing = False

    def release(self) -> None:
        """Release the underlying capture."""
        self._capture.release()
        logger.debug("Released playback for %s", self.source or "video")

    def __enter__(self) -> VideoPlayback:
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.release()
