"""Best-effort sharing of a result summary.

Channels are tried in order (native share, clipboard, file export, ...).
A failing channel is logged and skipped; when every channel fails the
caller gets the text back for manual copying. Nothing here raises.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from jump_marker.core.exceptions import ShareUnavailableError
from jump_marker.core.logging import get_logger

logger = get_logger(__name__)

MANUAL_COPY_MESSAGE = "Could not share. Please copy manually."


class ShareChannel(Protocol):
    """Destination for a share request."""

    name: str
    success_message: str

    def send(self, text: str) -> None:
        """Deliver the text.

        Raises:
            ShareUnavailableError: If the channel cannot deliver
        """
        ...


@dataclass(frozen=True)
class ShareOutcome:
    """Result of a share attempt."""

    success: bool
    message: str
    channel: str | None = None
    text: str = ""


class CallableShareChannel:
    """Adapts a host-provided callback (native share sheet, clipboard)."""

    def __init__(
        self,
        name: str,
        func: Callable[[str], None] | None,
        success_message: str = "Results shared successfully!",
    ) -> None:
        self.name = name
        self.success_message = success_message
        self._func = func

    def send(self, text: str) -> None:
        if self._func is None:
            raise ShareUnavailableError(f"{self.name} is not available")
        self._func(text)


class FileShareChannel:
    """Writes the summary to a text file the user can open and copy."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.name = "file"
        self.success_message = f"Results saved to {self.path}"

    def send(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise ShareUnavailableError(f"Could not write {self.path}: {e}") from e


def share_or_copy(text: str, channels: Sequence[ShareChannel]) -> ShareOutcome:
    """Try each channel in turn until one delivers the text.

    Args:
        text: Summary to share
        channels: Channels in order of preference

    Returns:
        Outcome naming the channel used, or a manual-copy fallback
    """
    for channel in channels:
        try:
            channel.send(text)
        except Exception as e:
            # Host callbacks may fail in arbitrary ways; fall through to the next channel
            logger.warning("Share via %s failed: %s", channel.name, e)
            continue

        logger.info("Shared results via %s", channel.name)
        return ShareOutcome(
            success=True,
            message=channel.success_message,
            channel=channel.name,
            text=text,
        )

    logger.info("No share channel available, falling back to manual copy")
    return ShareOutcome(success=False, message=MANUAL_COPY_MESSAGE, text=text)
