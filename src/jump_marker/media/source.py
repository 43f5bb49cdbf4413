"""Video acquisition from files and cameras.

Acquisition yields a playable source plus a frame-rate hint for the
user to confirm. Failures raise MediaAcquisitionError and never touch
marking state.
"""

from __future__ import annotations

import asyncio
import math
import mimetypes
from dataclasses import dataclass
from pathlib import Path

import cv2

from jump_marker.core.config import MediaSettings
from jump_marker.core.exceptions import MediaAcquisitionError
from jump_marker.core.logging import get_logger
from jump_marker.core.types import MAX_FRAME_RATE, MIN_FRAME_RATE
from jump_marker.media.playback import VideoPlayback

logger = get_logger(__name__)


@dataclass
class MediaHandle:
    """An opened video ready for marking."""

    playback: VideoPlayback
    frame_rate_hint: float
    source: str

    def release(self) -> None:
        """Release the underlying capture."""
        self.playback.release()


def _usable_fps(value: float) -> bool:
    return math.isfinite(value) and MIN_FRAME_RATE <= value <= MAX_FRAME_RATE


def open_video_file(path: Path | str, settings: MediaSettings | None = None) -> MediaHandle:
    """Open a video file for frame-by-frame marking.

    Args:
        path: Video file path
        settings: Media settings (uses defaults if None)

    Returns:
        Handle with playback and frame-rate hint

    Raises:
        MediaAcquisitionError: If the file is missing, not a video, or
            cannot be decoded
    """
    settings = settings or MediaSettings()
    video_path = Path(path)

    if not video_path.is_file():
        raise MediaAcquisitionError(f"Video file not found: {video_path}")

    mime_type, _ = mimetypes.guess_type(video_path.name)
    if mime_type is not None and not mime_type.startswith("video/"):
        raise MediaAcquisitionError(f"Please upload a valid video file (got {mime_type})")

    capture = cv2.VideoCapture(str(video_path))
    if not capture.isOpened():
        capture.release()
        raise MediaAcquisitionError(f"Could not decode video: {video_path}")

    reported_fps = float(capture.get(cv2.CAP_PROP_FPS))
    if _usable_fps(reported_fps):
        frame_rate_hint = reported_fps
    else:
        frame_rate_hint = settings.default_file_fps
        logger.info(
            "No usable frame rate in %s (reported %s), suggesting %g fps",
            video_path.name,
            reported_fps,
            frame_rate_hint,
        )

    playback = VideoPlayback(capture, native_fps=frame_rate_hint, source=str(video_path))
    logger.info(
        "Opened %s (%.3f s, hint %g fps)",
        video_path,
        playback.duration or 0.0,
        frame_rate_hint,
    )

    return MediaHandle(playback=playback, frame_rate_hint=frame_rate_hint, source=str(video_path))


def record_camera_clip(
    output_path: Path | str,
    duration_s: float,
    settings: MediaSettings | None = None,
) -> MediaHandle:
    """Record a clip from a camera and open it for marking.

    Args:
        output_path: Where to write the recorded clip
        duration_s: Clip length in seconds
        settings: Media settings (uses defaults if None)

    Returns:
        Handle for the recorded clip, hinted with the camera frame rate

    Raises:
        MediaAcquisitionError: If the camera cannot be opened or recorded
    """
    settings = settings or MediaSettings()
    clip_path = Path(output_path)

    capture = cv2.VideoCapture(settings.camera_index)
    if not capture.isOpened():
        capture.release()
        raise MediaAcquisitionError(
            "Could not access the camera. Grant permission or try another device"
        )

    try:
        capture.set(cv2.CAP_PROP_FRAME_WIDTH, settings.camera_width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, settings.camera_height)
        capture.set(cv2.CAP_PROP_FPS, settings.camera_fps)

        reported_fps = float(capture.get(cv2.CAP_PROP_FPS))
        if _usable_fps(reported_fps):
            frame_rate_hint = float(round(reported_fps))
        else:
            frame_rate_hint = settings.camera_fps
        if frame_rate_hint < settings.camera_min_fps:
            logger.warning(
                "Camera runs at %g fps; at least %g fps is recommended",
                frame_rate_hint,
                settings.camera_min_fps,
            )

        ok, first = capture.read()
        if not ok or first is None:
            raise MediaAcquisitionError("Camera returned no frames")

        height, width = first.shape[:2]
        clip_path.parent.mkdir(parents=True, exist_ok=True)
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        writer = cv2.VideoWriter(str(clip_path), fourcc, frame_rate_hint, (width, height))
        if not writer.isOpened():
            raise MediaAcquisitionError(f"Could not open video writer for {clip_path}")

        total_frames = max(1, int(duration_s * frame_rate_hint))
        logger.info(
            "Recording %d frames (%dx%d @ %g fps) to %s",
            total_frames,
            width,
            height,
            frame_rate_hint,
            clip_path,
        )

        try:
            writer.write(first)
            for _ in range(total_frames - 1):
                ok, image = capture.read()
                if not ok or image is None:
                    logger.warning("Camera stopped delivering frames early")
                    break
                writer.write(image)
        finally:
            writer.release()
    finally:
        capture.release()

    handle = open_video_file(clip_path, settings)
    handle.frame_rate_hint = frame_rate_hint
    handle.source = f"camera {settings.camera_index}"
    return handle


async def acquire_file(path: Path | str, settings: MediaSettings | None = None) -> MediaHandle:
    """Open a video file without blocking the event loop."""
    return await asyncio.to_thread(open_video_file, path, settings)


async def acquire_camera(
    output_path: Path | str,
    duration_s: float,
    settings: MediaSettings | None = None,
) -> MediaHandle:
    """Record a camera clip without blocking the event loop."""
    return await asyncio.to_thread(record_camera_clip, output_path, duration_s, settings)
