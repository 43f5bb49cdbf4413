"""Tests for video acquisition, playback and key bindings."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from jump_marker.core.config import MediaSettings  # noqa: E402
from jump_marker.core.exceptions import MediaAcquisitionError  # noqa: E402
from jump_marker.media.source import (  # noqa: E402
    acquire_camera,
    acquire_file,
    open_video_file,
    record_camera_clip,
)
from jump_marker.ui.display import KeyAction, action_for_key  # noqa: E402


@pytest.fixture
def sample_video(tmp_path: Path) -> Path:
    """Write a short 30 fps MJPG clip (60 frames)."""
    path = tmp_path / "jump.avi"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), 30.0, (64, 48))
    if not writer.isOpened():
        pytest.skip("No MJPG encoder available")

    for i in range(60):
        frame = np.full((48, 64, 3), i * 4, dtype=np.uint8)
        writer.write(frame)
    writer.release()
    return path


class TestOpenVideoFile:
    """Tests for opening video files."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file should raise MediaAcquisitionError."""
        with pytest.raises(MediaAcquisitionError, match="not found"):
            open_video_file(tmp_path / "missing.mp4")

    def test_rejects_non_video_file(self, tmp_path: Path) -> None:
        """A file with a non-video type should be rejected."""
        path = tmp_path / "notes.txt"
        path.write_text("not a video", encoding="utf-8")

        with pytest.raises(MediaAcquisitionError, match="valid video"):
            open_video_file(path)

    def test_opens_clip_with_reported_fps(self, sample_video: Path) -> None:
        """The container frame rate should become the hint."""
        handle = open_video_file(sample_video, MediaSettings())
        try:
            assert handle.frame_rate_hint == pytest.approx(30.0)
            assert handle.playback.duration == pytest.approx(2.0, abs=0.1)
            assert handle.playback.current_time == 0.0
            assert handle.playback.read_frame() is not None
        finally:
            handle.release()

    def test_seek_clamps(self, sample_video: Path) -> None:
        """Seeking should stay within the video."""
        handle = open_video_file(sample_video)
        try:
            playback = handle.playback
            playback.seek(-1.0)
            assert playback.current_time == 0.0

            playback.seek(100.0)
            assert playback.current_time == playback.duration

            playback.seek(0.5)
            assert playback.current_time == 0.5
        finally:
            handle.release()

    def test_advance_only_while_playing(self, sample_video: Path) -> None:
        """Playback advances one native frame per tick only when playing."""
        handle = open_video_file(sample_video)
        try:
            playback = handle.playback
            playback.advance()
            assert playback.current_time == 0.0

            assert playback.toggle_play()
            playback.advance()
            assert playback.current_time == pytest.approx(1 / 30)

            playback.pause()
            assert not playback.is_playing
        finally:
            handle.release()

    def test_async_acquisition(self, sample_video: Path) -> None:
        """The async wrapper should yield the same handle data."""
        handle = asyncio.run(acquire_file(sample_video))
        try:
            assert handle.frame_rate_hint == pytest.approx(30.0)
            assert handle.source == str(sample_video)
        finally:
            handle.release()

    def test_async_acquisition_failure(self, tmp_path: Path) -> None:
        """Failures propagate from the async wrapper."""
        with pytest.raises(MediaAcquisitionError):
            asyncio.run(acquire_file(tmp_path / "missing.mp4"))


class FakeCamera:
    """Stand-in for a camera capture yielding a fixed list of frames."""

    def __init__(self, frames: int = 0, fps: float = 59.94, opened: bool = True) -> None:
        self.frames = [np.full((48, 64, 3), 40 * i % 255, dtype=np.uint8) for i in range(frames)]
        self.fps = fps
        self.opened = opened
        self.requested: dict[int, float] = {}
        self.released = False

    def isOpened(self) -> bool:  # noqa: N802
        return self.opened

    def set(self, prop: int, value: float) -> bool:
        self.requested[prop] = value
        return True

    def get(self, prop: int) -> float:
        return self.fps if prop == cv2.CAP_PROP_FPS else 0.0

    def read(self) -> tuple[bool, np.ndarray | None]:
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self) -> None:
        self.released = True


@pytest.fixture
def install_camera(monkeypatch: pytest.MonkeyPatch):
    """Route integer capture sources to a FakeCamera, files to OpenCV."""
    real_capture = cv2.VideoCapture

    def install(camera: FakeCamera) -> FakeCamera:
        def capture(source, *args):
            if isinstance(source, int):
                return camera
            return real_capture(source, *args)

        monkeypatch.setattr(cv2, "VideoCapture", capture)
        return camera

    return install


def _require_mp4v(tmp_path: Path) -> None:
    path = tmp_path / "writer_check.mp4"
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"mp4v"), 30.0, (64, 48))
    opened = writer.isOpened()
    writer.release()
    path.unlink(missing_ok=True)
    if not opened:
        pytest.skip("No mp4v encoder available")


class TestRecordCameraClip:
    """Tests for camera acquisition."""

    def test_unopened_camera(self, tmp_path: Path, install_camera) -> None:
        """A camera that cannot be opened should raise MediaAcquisitionError."""
        install_camera(FakeCamera(opened=False))

        with pytest.raises(MediaAcquisitionError, match="camera"):
            record_camera_clip(tmp_path / "clip.mp4", 1.0)

        assert not (tmp_path / "clip.mp4").exists()

    def test_camera_without_frames(self, tmp_path: Path, install_camera) -> None:
        """A camera that delivers nothing should raise and be released."""
        camera = install_camera(FakeCamera(frames=0))

        with pytest.raises(MediaAcquisitionError, match="no frames"):
            record_camera_clip(tmp_path / "clip.mp4", 1.0)

        assert camera.released

    def test_slow_camera_warns(
        self, tmp_path: Path, install_camera, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A camera below the minimum frame rate should log a warning."""
        install_camera(FakeCamera(frames=0, fps=15.0))

        with caplog.at_level(logging.WARNING), pytest.raises(MediaAcquisitionError):
            record_camera_clip(tmp_path / "clip.mp4", 1.0)

        assert "15 fps" in caplog.text

    def test_requests_configured_capture_format(self, tmp_path: Path, install_camera) -> None:
        """The configured size and frame rate should be requested."""
        camera = install_camera(FakeCamera(frames=0))
        settings = MediaSettings(camera_width=640, camera_height=480, camera_fps=120)

        with pytest.raises(MediaAcquisitionError):
            record_camera_clip(tmp_path / "clip.mp4", 1.0, settings)

        assert camera.requested[cv2.CAP_PROP_FRAME_WIDTH] == 640
        assert camera.requested[cv2.CAP_PROP_FRAME_HEIGHT] == 480
        assert camera.requested[cv2.CAP_PROP_FPS] == 120

    def test_recorded_clip_opens_with_camera_rate(
        self, tmp_path: Path, install_camera, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A short recording should reopen as a file hinted with the rounded camera rate."""
        _require_mp4v(tmp_path)
        camera = install_camera(FakeCamera(frames=10, fps=59.94))
        clip = tmp_path / "clips" / "clip.mp4"

        with caplog.at_level(logging.WARNING):
            handle = record_camera_clip(clip, 1.0)
        try:
            assert clip.is_file()
            assert camera.released
            assert handle.frame_rate_hint == 60.0
            assert handle.source == "camera 0"
            assert handle.playback.read_frame() is not None
            assert "stopped delivering frames early" in caplog.text
        finally:
            handle.release()

    def test_async_camera_failure(self, tmp_path: Path, install_camera) -> None:
        """Camera failures propagate from the async wrapper."""
        install_camera(FakeCamera(opened=False))

        with pytest.raises(MediaAcquisitionError):
            asyncio.run(acquire_camera(tmp_path / "clip.mp4", 1.0))

    def test_async_camera_recording(self, tmp_path: Path, install_camera) -> None:
        """The async wrapper should return the recorded clip handle."""
        _require_mp4v(tmp_path)
        install_camera(FakeCamera(frames=5, fps=30.0))

        handle = asyncio.run(acquire_camera(tmp_path / "clip.mp4", 0.1))
        try:
            assert handle.frame_rate_hint == 30.0
        finally:
            handle.release()


class TestKeyBindings:
    """Tests for editor key bindings."""

    @pytest.mark.parametrize(
        ("key", "action"),
        [
            (ord("a"), KeyAction.PREV_FRAME),
            (ord("d"), KeyAction.NEXT_FRAME),
            (ord("t"), KeyAction.MARK_TAKEOFF),
            (ord("l"), KeyAction.MARK_LANDING),
            (ord(" "), KeyAction.PLAY_PAUSE),
            (13, KeyAction.ANALYZE),
            (27, KeyAction.QUIT),
            (ord("z"), KeyAction.NONE),
            (-1, KeyAction.NONE),
        ],
    )
    def test_action_for_key(self, key: int, action: KeyAction) -> None:
        """Raw key codes map to editor actions."""
        assert action_for_key(key) is action
