"""Heads-up display (HUD) rendering for the marking editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import cv2
import numpy as np

from jump_marker.core.config import UISettings
from jump_marker.core.types import PresentationState, PreviewMetrics
from jump_marker.ui.presentation import analyze_label, hex_to_bgr, mark_label

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from jump_marker.pipeline.editor import JumpEditor

HELP_LINES = (
    "A/, prev frame   D/. next frame   SPACE play/pause",
    "T mark take-off   L mark landing   ENTER analyze   H help   Q quit",
)


@dataclass
class HUDLayout:
    """Layout configuration for HUD elements."""

    # Position panel (top-left)
    panel_x: int = 20
    panel_y: int = 40
    line_height: int = 32

    # Preview (top-right)
    preview_margin: int = 20

    # Help (bottom)
    help_line_height: int = 22

    # Colors (BGR)
    color_text: tuple[int, int, int] = (255, 255, 255)
    color_bg: tuple[int, int, int] = (0, 0, 0)
    color_accent: tuple[int, int, int] = (0, 255, 255)
    color_success: tuple[int, int, int] = (0, 255, 0)
    color_muted: tuple[int, int, int] = (160, 160, 160)


class EditorHUD:
    """Renders marking feedback over the current video frame.

    Provides:
    - Current time and frame index
    - Take-off and landing marks
    - Marking hint in its hint color
    - Live flight time / height preview
    - Analyze status and key help
    """

    def __init__(
        self,
        settings: UISettings | None = None,
        layout: HUDLayout | None = None,
    ) -> None:
        """Initialize HUD renderer.

        Args:
            settings: UI settings
            layout: HUD layout configuration
        """
        self.settings = settings or UISettings()
        self.layout = layout or HUDLayout()

    def render_position_panel(
        self,
        image: NDArray[np.uint8],
        lines: list[str],
    ) -> NDArray[np.uint8]:
        """Render the position and marks panel.

        Args:
            image: Input image
            lines: Text lines to show

        Returns:
            Image with panel overlay
        """
        result = image.copy()
        font = cv2.FONT_HERSHEY_SIMPLEX

        for i, text in enumerate(lines):
            pos = (self.layout.panel_x, self.layout.panel_y + i * self.layout.line_height)
            self._draw_text_with_bg(result, text, pos, font, 0.7, 2, self.layout.color_text)

        return result

    def render_hint(
        self,
        image: NDArray[np.uint8],
        state: PresentationState,
        row: int,
    ) -> NDArray[np.uint8]:
        """Render the marking hint below the panel."""
        if not state.message:
            return image

        result = image.copy()
        color = hex_to_bgr(state.hint_color) if state.hint_color else self.layout.color_text
        pos = (self.layout.panel_x, self.layout.panel_y + row * self.layout.line_height)
        self._draw_text_with_bg(result, state.message, pos, cv2.FONT_HERSHEY_SIMPLEX, 0.7, 2, color)
        return result

    def render_preview(
        self,
        image: NDArray[np.uint8],
        preview: PreviewMetrics | None,
    ) -> NDArray[np.uint8]:
        """Render the live flight time and height preview (top-right)."""
        if preview is None:
            return image

        result = image.copy()
        w = result.shape[1]
        font = cv2.FONT_HERSHEY_SIMPLEX
        lines = [
            f"Flight: {preview.flight_time_ms:.0f} ms",
            f"Height: {preview.height_cm:.1f} cm",
        ]

        for i, text in enumerate(lines):
            (text_w, _), _ = cv2.getTextSize(text, font, 0.9, 2)
            x = w - text_w - self.layout.preview_margin
            y = 45 + i * 40
            self._draw_text_with_bg(result, text, (x, y), font, 0.9, 2, self.layout.color_success)

        return result

    def render_help(self, image: NDArray[np.uint8]) -> NDArray[np.uint8]:
        """Render key bindings along the bottom edge."""
        result = image.copy()
        h = result.shape[0]
        font = cv2.FONT_HERSHEY_SIMPLEX

        for i, text in enumerate(reversed(HELP_LINES)):
            y = h - 15 - i * self.layout.help_line_height
            cv2.putText(result, text, (20, y), font, 0.5, self.layout.color_muted, 1)

        return result

    def render_full_hud(
        self,
        image: NDArray[np.uint8],
        editor: JumpEditor,
        playing: bool = False,
        show_help: bool = True,
    ) -> NDArray[np.uint8]:
        """Render complete HUD overlay.

        Args:
            image: Input image
            editor: Editor providing position, marks and preview
            playing: Whether playback is running
            show_help: Whether to show key bindings

        Returns:
            Image with full HUD
        """
        session = editor.session if editor.has_session else None
        position = editor.playback.current_time

        lines = [f"Time: {position:.3f}s"]
        if session is not None:
            lines[0] += f"  Frame: {editor.current_frame}  ({session.frame_rate:g} fps)"
            lines.append(mark_label("Take-off", session.takeoff, session))
            lines.append(mark_label("Landing", session.landing, session))
            lines.append(analyze_label(session))

        result = self.render_position_panel(image, lines)
        row = len(lines)
        if playing:
            pos = (self.layout.panel_x, self.layout.panel_y + row * self.layout.line_height)
            font = cv2.FONT_HERSHEY_SIMPLEX
            self._draw_text_with_bg(result, "PLAYING", pos, font, 0.7, 2, self.layout.color_accent)
            row += 1

        result = self.render_hint(result, editor.presentation, row=row)

        if self.settings.show_preview:
            result = self.render_preview(result, editor.preview)

        if show_help and self.settings.show_help:
            result = self.render_help(result)

        return result

    def _draw_text_with_bg(
        self,
        image: NDArray[np.uint8],
        text: str,
        position: tuple[int, int],
        font: int,
        font_scale: float,
        thickness: int,
        color: tuple[int, int, int],
    ) -> None:
        """Draw text with background rectangle (modifies image in place)."""
        (text_w, text_h), _ = cv2.getTextSize(text, font, font_scale, thickness)
        x, y = position
        padding = 5

        cv2.rectangle(
            image,
            (x - padding, y - text_h - padding),
            (x + text_w + padding, y + padding),
            self.layout.color_bg,
            -1,
        )
        cv2.putText(image, text, position, font, font_scale, color, thickness)
