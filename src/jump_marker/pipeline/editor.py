"""Editor control surface orchestrating marking, analysis and sharing."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from jump_marker.analysis.calculator import derive_result
from jump_marker.core.config import Settings, get_settings
from jump_marker.core.exceptions import InvalidFrameRateError, SessionNotStartedError
from jump_marker.core.logging import get_logger
from jump_marker.core.types import PresentationState, PreviewMetrics, ResultRecord
from jump_marker.session.marking import MarkingSession
from jump_marker.storage.handoff import ResultStore
from jump_marker.ui.presentation import presentation_state
from jump_marker.ui.share import FileShareChannel, ShareChannel, ShareOutcome, share_or_copy

if TYPE_CHECKING:
    from jump_marker.media.playback import PlaybackSurface

logger = get_logger(__name__)

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_frame_rate(value: float | str) -> float:
    """Parse a frame rate typed by the user.

    Text is read up to the end of its leading number, so "240fps" and
    "29.97 fps" are accepted. Range checks happen in the session.

    Raises:
        InvalidFrameRateError: If the text does not start with a number
    """
    if not isinstance(value, str):
        return float(value)

    match = _LEADING_NUMBER.match(value.strip())
    if match is None:
        raise InvalidFrameRateError()
    return float(match.group())


class JumpEditor:
    """Control surface for marking a single video.

    Coordinates:
    - Frame rate confirmation
    - Take-off and landing marks from the playback position
    - Single-frame navigation
    - Analysis and result handoff
    - Sharing the summary
    """

    def __init__(
        self,
        playback: PlaybackSurface,
        settings: Settings | None = None,
        store: ResultStore | None = None,
        share_channels: Sequence[ShareChannel] | None = None,
    ) -> None:
        """Initialize editor for an opened video.

        Args:
            playback: Playback surface supplying the current position
            settings: Application settings (uses defaults if None)
            store: Result handoff store (uses settings path if None)
            share_channels: Share channels in order of preference
        """
        self.settings = settings or get_settings()
        self.playback = playback
        self.store = store or ResultStore(self.settings.storage.results_path)
        if share_channels is None:
            share_channels = [FileShareChannel(self.settings.storage.share_export_path)]
        self.share_channels = list(share_channels)
        self._session: MarkingSession | None = None

    @property
    def session(self) -> MarkingSession:
        """Active session.

        Raises:
            SessionNotStartedError: If no frame rate has been confirmed
        """
        if self._session is None:
            raise SessionNotStartedError()
        return self._session

    @property
    def has_session(self) -> bool:
        """Whether a frame rate has been confirmed."""
        return self._session is not None

    @property
    def can_analyze(self) -> bool:
        """Whether the analyze action is enabled."""
        return self._session is not None and self._session.is_complete()

    @property
    def preview(self) -> PreviewMetrics | None:
        """Live preview for the current marks."""
        return self._session.preview_metrics() if self._session is not None else None

    @property
    def presentation(self) -> PresentationState:
        """Hint for the latest marking action."""
        return presentation_state(self._session)

    @property
    def current_frame(self) -> int | None:
        """Frame index at the playback position, if a frame rate is set."""
        if self._session is None:
            return None
        return self._session.frame_index_of(self.playback.current_time)

    def confirm_frame_rate(self, value: float | str) -> MarkingSession:
        """Confirm the video frame rate, starting or resetting the session.

        Raises:
            InvalidFrameRateError: If the value is invalid (state untouched)
        """
        frame_rate = parse_frame_rate(value)

        if self._session is None:
            self._session = MarkingSession(frame_rate)
            logger.info("Marking session started at %g fps", self._session.frame_rate)
        else:
            self._session.set_frame_rate(frame_rate)

        return self._session

    def mark_takeoff(self) -> PresentationState:
        """Mark take-off at the current playback position."""
        self.session.mark_takeoff(self.playback.current_time)
        return self.presentation

    def mark_landing(self) -> PresentationState:
        """Mark landing at the current playback position."""
        self.session.mark_landing(self.playback.current_time)
        return self.presentation

    def step_frame(self, direction: int) -> float:
        """Move playback one frame forward (+1) or back (-1).

        Returns:
            New playback position in seconds
        """
        position = self.session.step_frame(
            direction,
            self.playback.current_time,
            self.playback.duration,
        )
        self.playback.seek(position)
        return position

    def analyze(self) -> ResultRecord:
        """Derive and store the result, ending the session.

        Returns:
            The derived result record

        Raises:
            SessionNotStartedError: If no frame rate has been confirmed
            IncompleteSessionError: If the marks are not valid yet
        """
        if not self.can_analyze:
            logger.warning("Analyze requested with incomplete marks: %r", self._session)

        record = derive_result(self.session)
        self.store.save(record)
        self._session = None
        return record

    def discard(self) -> None:
        """Drop the current session without storing anything."""
        if self._session is not None:
            logger.info("Discarding unfinished marking session")
        self._session = None

    def share_or_copy(self, text: str) -> ShareOutcome:
        """Share a summary through the configured channels."""
        return share_or_copy(text, self.share_channels)
