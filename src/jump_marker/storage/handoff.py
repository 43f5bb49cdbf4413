"""Persisted handoff of a jump result between the editor and the report.

The record is stored as a flat key/value mapping of formatted strings
and integers. The report view rebuilds everything it shows from this
mapping alone.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jump_marker.core.exceptions import HandoffError
from jump_marker.core.logging import get_logger
from jump_marker.core.types import ResultRecord

logger = get_logger(__name__)

HANDOFF_FIELDS = (
    "flightTime",
    "jumpHeight",
    "takeoffVelocity",
    "fps",
    "takeoffTime",
    "landingTime",
    "takeoffFrame",
    "landingFrame",
    "timestamp",
)


def format_frame_rate(frame_rate: float) -> str:
    """Shortest text form of a frame rate ("240", "29.97")."""
    if frame_rate.is_integer():
        return str(int(frame_rate))
    return repr(frame_rate)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing Z."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def to_handoff(record: ResultRecord) -> dict[str, str | int]:
    """Serialize a result record to the flat handoff mapping.

    Args:
        record: Full-precision result record

    Returns:
        Mapping with rounded string values and integer frame indices
    """
    return {
        "flightTime": f"{record.flight_time_s:.4f}",
        "jumpHeight": f"{record.jump_height_cm:.2f}",
        "takeoffVelocity": f"{record.takeoff_velocity_mps:.2f}",
        "fps": format_frame_rate(record.frame_rate),
        "takeoffTime": f"{record.takeoff_time_s:.3f}",
        "landingTime": f"{record.landing_time_s:.3f}",
        "takeoffFrame": record.takeoff_frame,
        "landingFrame": record.landing_frame,
        "timestamp": format_timestamp(record.created_at),
    }


def from_handoff(data: dict[str, Any]) -> ResultRecord:
    """Rebuild a result record from the flat handoff mapping.

    Raises:
        HandoffError: If a field is missing or cannot be parsed
    """
    missing = [name for name in HANDOFF_FIELDS if name not in data]
    if missing:
        raise HandoffError(f"Stored results missing fields: {', '.join(missing)}")

    try:
        return ResultRecord(
            flight_time_s=float(data["flightTime"]),
            jump_height_cm=float(data["jumpHeight"]),
            takeoff_velocity_mps=float(data["takeoffVelocity"]),
            frame_rate=float(data["fps"]),
            takeoff_time_s=float(data["takeoffTime"]),
            landing_time_s=float(data["landingTime"]),
            takeoff_frame=int(data["takeoffFrame"]),
            landing_frame=int(data["landingFrame"]),
            created_at=parse_timestamp(str(data["timestamp"])),
        )
    except (TypeError, ValueError) as e:
        raise HandoffError(f"Stored results are malformed: {e}") from e


class ResultStore:
    """Single-slot JSON file holding the latest handoff record."""

    def __init__(self, path: Path | str) -> None:
        """Initialize store.

        Args:
            path: JSON file location
        """
        self.path = Path(path)

    @property
    def exists(self) -> bool:
        """Whether a record has been stored."""
        return self.path.is_file()

    def save(self, record: ResultRecord) -> dict[str, str | int]:
        """Write a record, replacing any previous one.

        Returns:
            The handoff mapping that was written
        """
        data = to_handoff(record)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        logger.info("Saved jump results to %s", self.path)
        return data

    def load(self) -> ResultRecord:
        """Read the stored record.

        Raises:
            HandoffError: If nothing is stored or the file is corrupt
        """
        if not self.exists:
            raise HandoffError(f"No stored jump results at {self.path}")

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise HandoffError(f"Stored results are not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise HandoffError("Stored results must be a key/value record")

        return from_handoff(data)

    def clear(self) -> None:
        """Remove the stored record if present."""
        self.path.unlink(missing_ok=True)
