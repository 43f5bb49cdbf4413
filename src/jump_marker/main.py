"""Main entry point for Jump Marker application."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from jump_marker.analysis.report import build_report, summary_text
from jump_marker.core.config import Settings, get_settings
from jump_marker.core.exceptions import (
    InvalidFrameRateError,
    JumpMarkerError,
    MediaAcquisitionError,
)
from jump_marker.core.logging import get_logger, setup_logging
from jump_marker.core.types import ResultRecord
from jump_marker.media.playback import VideoPlayback
from jump_marker.media.source import MediaHandle, open_video_file, record_camera_clip
from jump_marker.pipeline.editor import JumpEditor
from jump_marker.storage.handoff import ResultStore
from jump_marker.ui.report_view import format_report
from jump_marker.ui.share import FileShareChannel, share_or_copy

logger = get_logger(__name__)


def prompt_frame_rate(editor: JumpEditor, hint: float, presets: list[float]) -> None:
    """Ask for the video frame rate until a valid one is confirmed."""
    preset_text = ", ".join(f"{p:g}" for p in presets)
    while True:
        raw = input(f"Video frame rate in fps (presets: {preset_text}) [{hint:g}]: ").strip()
        try:
            editor.confirm_frame_rate(raw or hint)
            return
        except InvalidFrameRateError as e:
            print(e.message)


def run_editor(
    editor: JumpEditor,
    playback: VideoPlayback,
    settings: Settings,
) -> ResultRecord | None:
    """Run the interactive marking window.

    Returns:
        Derived result, or None if the user quit without analyzing
    """
    from jump_marker.ui.display import EditorWindow, KeyAction
    from jump_marker.ui.hud import EditorHUD

    hud = EditorHUD(settings.ui)
    show_help = True

    with EditorWindow(settings.ui) as window:
        while True:
            playback.advance()
            image = playback.read_frame()
            if image is None:
                image = window.blank()

            window.show_frame(
                hud.render_full_hud(image, editor, playing=playback.is_playing, show_help=show_help)
            )

            wait_ms = max(1, int(1000 / playback.native_fps)) if playback.is_playing else 30
            action = window.poll_key(wait_ms=wait_ms)

            if action == KeyAction.QUIT:
                logger.info("Quit requested")
                editor.discard()
                return None

            elif action == KeyAction.PREV_FRAME:
                playback.pause()
                editor.step_frame(-1)

            elif action == KeyAction.NEXT_FRAME:
                playback.pause()
                editor.step_frame(1)

            elif action == KeyAction.MARK_TAKEOFF:
                editor.mark_takeoff()

            elif action == KeyAction.MARK_LANDING:
                editor.mark_landing()

            elif action == KeyAction.PLAY_PAUSE:
                playback.toggle_play()

            elif action == KeyAction.TOGGLE_HELP:
                show_help = not show_help

            elif action == KeyAction.ANALYZE:
                if not editor.can_analyze:
                    message = editor.presentation.message or "Mark both take-off and landing frames"
                    window.show_message(message, duration_ms=1500, background=image)
                    continue
                return editor.analyze()


def print_report(store: ResultStore, category: str, share: bool, settings: Settings) -> None:
    """Print the report rebuilt from the stored handoff record."""
    record = store.load()
    report = build_report(record, category)

    for line in format_report(report):
        print(line)

    if share:
        text = summary_text(report)
        outcome = share_or_copy(text, [FileShareChannel(settings.storage.share_export_path)])
        print()
        print(outcome.message)
        if not outcome.success:
            print(outcome.text)


def edit_video(handle: MediaHandle, args: argparse.Namespace, settings: Settings) -> int:
    """Confirm frame rate, mark, analyze and report for an opened video."""
    store = ResultStore(settings.storage.results_path)
    editor = JumpEditor(handle.playback, settings, store=store)

    try:
        if args.fps is not None:
            editor.confirm_frame_rate(args.fps)
        else:
            prompt_frame_rate(editor, handle.frame_rate_hint, settings.media.frame_rate_presets)

        record = run_editor(editor, handle.playback, settings)
    finally:
        handle.release()

    if record is None:
        logger.info("No result stored")
        return 0

    print_report(store, settings.report.category, share=False, settings=settings)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Command-line interface definition."""
    parser = argparse.ArgumentParser(
        description="Jump Marker - Vertical jump height from marked video frames"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    edit = subparsers.add_parser("edit", help="Mark take-off and landing in a video file")
    edit.add_argument("video", type=Path, help="Video file of the jump")
    edit.add_argument("--fps", type=float, default=None, help="Video frame rate (skips prompt)")

    camera = subparsers.add_parser("camera", help="Record a clip from a camera, then mark it")
    camera.add_argument("--index", type=int, default=None, help="Camera index")
    camera.add_argument("--seconds", type=float, default=5.0, help="Clip length")
    camera.add_argument(
        "--output", type=Path, default=Path("data/recordings/jump.mp4"), help="Clip path"
    )
    camera.add_argument("--fps", type=float, default=None, help="Video frame rate (skips prompt)")

    report = subparsers.add_parser("report", help="Show the stored jump results")
    report.add_argument("--results", type=Path, default=None, help="Stored results file")
    report.add_argument("--category", default=None, help="Benchmark category (male, female)")
    report.add_argument("--share", action="store_true", help="Export a share summary")

    return parser


def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command.

    Returns:
        Exit code (0 success, 1 media failure, 2 domain error, 3 unexpected)
    """
    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.file)

    try:
        if args.command == "edit":
            return edit_video(open_video_file(args.video, settings.media), args, settings)

        if args.command == "camera":
            media = settings.media
            if args.index is not None:
                media = media.model_copy(update={"camera_index": args.index})
            handle = record_camera_clip(args.output, args.seconds, media)
            return edit_video(handle, args, settings)

        store = ResultStore(args.results or settings.storage.results_path)
        print_report(store, args.category or settings.report.category, args.share, settings)
        return 0

    except MediaAcquisitionError as e:
        logger.error("Media acquisition failed: %s", e)
        return 1

    except JumpMarkerError as e:
        logger.error("%s", e)
        return 2

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        return 3


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    sys.exit(run(args))


if __name__ == "__main__":
    main()
