"""Core data types and structures."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto

from jump_marker.core.exceptions import BenchmarkError

MIN_FRAME_RATE = 1.0
MAX_FRAME_RATE = 1000.0


class MarkKind(Enum):
    """Which boundary of the flight phase a mark represents."""

    TAKEOFF = auto()
    LANDING = auto()


@dataclass(frozen=True, slots=True)
class PreviewMetrics:
    """Live preview shown while marks are being adjusted.

    Attributes:
        flight_time_ms: Time between take-off and landing in milliseconds
        height_cm: Estimated jump height in centimeters
    """

    flight_time_ms: float
    height_cm: float


@dataclass(frozen=True, slots=True)
class ResultRecord:
    """Immutable result of a completed marking session.

    Values are kept at full precision; rounding happens only when the
    record is written to the handoff store.

    Attributes:
        flight_time_s: Seconds between take-off and landing
        jump_height_cm: Jump height in centimeters
        takeoff_velocity_mps: Initial vertical velocity in m/s
        frame_rate: Video frame rate used for marking
        takeoff_time_s: Take-off mark in seconds from video start
        landing_time_s: Landing mark in seconds from video start
        takeoff_frame: Frame index of the take-off mark
        landing_frame: Frame index of the landing mark
        created_at: When the record was derived (UTC)
    """

    flight_time_s: float
    jump_height_cm: float
    takeoff_velocity_mps: float
    frame_rate: float
    takeoff_time_s: float
    landing_time_s: float
    takeoff_frame: int
    landing_frame: int
    created_at: datetime

    @property
    def flight_time_ms(self) -> float:
        """Flight time in milliseconds."""
        return self.flight_time_s * 1000.0

    @property
    def airborne_frames(self) -> int:
        """Number of frames between the two marks."""
        return self.landing_frame - self.takeoff_frame


@dataclass(frozen=True, slots=True)
class BenchmarkTier:
    """One performance tier of a benchmark table."""

    key: str
    upper_bound_cm: float
    label: str
    color: str


@dataclass(frozen=True, slots=True)
class BenchmarkTable:
    """Ordered performance tiers for one population category.

    The last tier acts as the ceiling: heights above its bound still
    classify into it.
    """

    category: str
    tiers: tuple[BenchmarkTier, ...]

    def __post_init__(self) -> None:
        if not self.tiers:
            raise BenchmarkError(f"Benchmark table '{self.category}' has no tiers")

        bounds = [tier.upper_bound_cm for tier in self.tiers]
        if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
            raise BenchmarkError(
                f"Benchmark table '{self.category}' bounds must be strictly increasing"
            )

    @property
    def ceiling(self) -> BenchmarkTier:
        """Final tier, used for every height beyond the last bound."""
        return self.tiers[-1]


@dataclass(frozen=True, slots=True)
class TierRating:
    """Classification of a jump height against a benchmark table.

    Attributes:
        tier: Tier the height falls into
        percentile: Height as a percentage of the tier bound (not a
            population percentile)
    """

    tier: BenchmarkTier
    percentile: float

    @property
    def display_percentile(self) -> float:
        """Percentile clamped to 100 for display."""
        return min(self.percentile, 100.0)

    @property
    def rounded_percentile(self) -> int:
        """Display percentile rounded half away from zero."""
        return math.floor(self.display_percentile + 0.5)

    @property
    def label(self) -> str:
        """Tier label."""
        return self.tier.label


@dataclass(frozen=True, slots=True)
class CalculationStep:
    """A single step of the displayed calculation."""

    title: str
    value: str
    detail: str


@dataclass(frozen=True, slots=True)
class CalculationBreakdown:
    """Structured description of how the jump height was derived."""

    steps: tuple[CalculationStep, ...]
    precision_cm: float
    frame_rate: float
    notes: tuple[str, ...] = field(default=())


class HintKind(Enum):
    """Marking hint shown beneath the editor controls."""

    NONE = auto()
    TAKEOFF_MARKED = auto()
    READY = auto()
    ORDERING_WARNING = auto()


@dataclass(frozen=True, slots=True)
class PresentationState:
    """Display hint derived from a session, consumed by renderers."""

    hint_kind: HintKind
    hint_color: str | None
    message: str

    @property
    def is_warning(self) -> bool:
        """Whether the hint should be shown as a warning."""
        return self.hint_kind is HintKind.ORDERING_WARNING
