"""OpenCV window management for the marking editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

import cv2
import numpy as np

from jump_marker.core.config import UISettings
from jump_marker.core.logging import get_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)


class KeyAction(Enum):
    """Actions triggered by keyboard input."""

    NONE = auto()
    QUIT = auto()
    PREV_FRAME = auto()
    NEXT_FRAME = auto()
    MARK_TAKEOFF = auto()
    MARK_LANDING = auto()
    PLAY_PAUSE = auto()
    ANALYZE = auto()
    TOGGLE_HELP = auto()


# Key mappings (ASCII codes)
KEY_BINDINGS: dict[int, KeyAction] = {
    ord("q"): KeyAction.QUIT,
    ord("Q"): KeyAction.QUIT,
    27: KeyAction.QUIT,  # ESC
    ord("a"): KeyAction.PREV_FRAME,
    ord("A"): KeyAction.PREV_FRAME,
    ord(","): KeyAction.PREV_FRAME,
    ord("d"): KeyAction.NEXT_FRAME,
    ord("D"): KeyAction.NEXT_FRAME,
    ord("."): KeyAction.NEXT_FRAME,
    ord("t"): KeyAction.MARK_TAKEOFF,
    ord("T"): KeyAction.MARK_TAKEOFF,
    ord("l"): KeyAction.MARK_LANDING,
    ord("L"): KeyAction.MARK_LANDING,
    ord(" "): KeyAction.PLAY_PAUSE,
    13: KeyAction.ANALYZE,  # Enter
    10: KeyAction.ANALYZE,
    ord("h"): KeyAction.TOGGLE_HELP,
}


def action_for_key(key: int) -> KeyAction:
    """Map a raw waitKey code to an action."""
    key &= 0xFF
    if key == 255:  # No key pressed
        return KeyAction.NONE
    return KEY_BINDINGS.get(key, KeyAction.NONE)


@dataclass
class WindowState:
    """Current state of the display window."""

    is_open: bool = False
    width: int = 1280
    height: int = 720


class EditorWindow:
    """Manages the OpenCV window used for frame-by-frame marking.

    Handles window creation, frame display, and keyboard input.
    """

    WINDOW_NAME = "Jump Marker"

    def __init__(self, settings: UISettings | None = None) -> None:
        """Initialize display window.

        Args:
            settings: UI settings (uses defaults if None)
        """
        self.settings = settings or UISettings()
        self._state = WindowState(
            width=self.settings.display_width,
            height=self.settings.display_height,
        )

    @property
    def is_open(self) -> bool:
        """Check if window is open."""
        return self._state.is_open

    @property
    def size(self) -> tuple[int, int]:
        """Window size as (width, height)."""
        return self._state.width, self._state.height

    def open(self) -> None:
        """Create and show the display window."""
        cv2.namedWindow(self.WINDOW_NAME, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.WINDOW_NAME, self._state.width, self._state.height)
        self._state.is_open = True
        logger.info(
            "Editor window opened (%dx%d)",
            self._state.width,
            self._state.height,
        )

    def close(self) -> None:
        """Close and destroy the display window."""
        if self._state.is_open:
            cv2.destroyWindow(self.WINDOW_NAME)
        self._state.is_open = False
        logger.info("Editor window closed")

    def blank(self) -> NDArray[np.uint8]:
        """Black canvas at window size."""
        return np.zeros((self._state.height, self._state.width, 3), dtype=np.uint8)

    def fit(self, image: NDArray[np.uint8]) -> NDArray[np.uint8]:
        """Resize an image to the window size if needed."""
        h, w = image.shape[:2]
        if w != self._state.width or h != self._state.height:
            return np.asarray(
                cv2.resize(image, (self._state.width, self._state.height)), dtype=np.uint8
            )
        return image

    def show_frame(self, image: NDArray[np.uint8]) -> None:
        """Display a frame in the window.

        Args:
            image: BGR image array to display
        """
        if not self._state.is_open:
            self.open()

        cv2.imshow(self.WINDOW_NAME, self.fit(image))

    def poll_key(self, wait_ms: int = 1) -> KeyAction:
        """Poll for keyboard input.

        Args:
            wait_ms: Milliseconds to wait for key (1 for non-blocking)

        Returns:
            KeyAction corresponding to pressed key
        """
        return action_for_key(cv2.waitKey(wait_ms))

    def wait_for_key(self) -> KeyAction:
        """Block until a bound key is pressed."""
        while True:
            action = self.poll_key(wait_ms=100)
            if action != KeyAction.NONE:
                return action

    def show_message(
        self,
        message: str,
        duration_ms: int = 2000,
        background: NDArray[np.uint8] | None = None,
    ) -> None:
        """Display a centered message overlay.

        Args:
            message: Text message to display
            duration_ms: How long to show (0 = until key press)
            background: Background image (black if None)
        """
        image = self.blank() if background is None else self.fit(background).copy()

        font = cv2.FONT_HERSHEY_SIMPLEX
        font_scale = 1.0
        thickness = 2

        (text_w, text_h), _ = cv2.getTextSize(message, font, font_scale, thickness)
        x = max(0, (self._state.width - text_w) // 2)
        y = (self._state.height + text_h) // 2

        padding = 20
        cv2.rectangle(
            image,
            (x - padding, y - text_h - padding),
            (x + text_w + padding, y + padding),
            (0, 0, 0),
            -1,
        )
        cv2.putText(image, message, (x, y), font, font_scale, (255, 255, 255), thickness)

        self.show_frame(image)

        if duration_ms > 0:
            cv2.waitKey(duration_ms)
        else:
            self.wait_for_key()

    def __enter__(self) -> EditorWindow:
        """Context manager entry."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit."""
        self.close()
