"""Derived report metrics for a stored jump result.

This module is pure logic with NO I/O and NO OpenCV imports. Every
function works from a ResultRecord alone, so a report can be rebuilt
from the handoff record without any session state.
"""

from __future__ import annotations

from dataclasses import dataclass

from jump_marker.analysis.benchmarks import CATEGORY_DESCRIPTIONS, get_benchmark_table
from jump_marker.analysis.calculator import GRAVITY
from jump_marker.core.types import (
    BenchmarkTable,
    CalculationBreakdown,
    CalculationStep,
    ResultRecord,
    TierRating,
)


@dataclass(frozen=True)
class JumpReport:
    """Display-ready metrics for one jump."""

    record: ResultRecord
    category: str
    power_w_per_kg: float
    precision_cm: float
    rating: TierRating
    breakdown: CalculationBreakdown


def power_estimate(record: ResultRecord) -> float:
    """Simplified power estimate in W/kg.

    Body mass cancels out of the estimate, leaving g * v.
    """
    # TODO: take athlete body mass as an input once the editor collects it
    return GRAVITY * record.takeoff_velocity_mps


def frame_precision_cm(frame_rate: float) -> float:
    """Height uncertainty caused by one frame of timing error, in cm."""
    return (1.0 / frame_rate) * GRAVITY / 8 * 100


def measurement_precision_cm(record: ResultRecord) -> float:
    """Combined height uncertainty (±) for the record's frame rate.

    One frame of uncertainty on each mark, doubled for take-off plus
    landing.
    """
    return frame_precision_cm(record.frame_rate) * 2


def classify(height_cm: float, table: BenchmarkTable) -> TierRating:
    """Classify a jump height against a benchmark table.

    A height equal to a tier bound belongs to that tier. Heights above
    the last bound fall into the final tier at 100 percent.

    Args:
        height_cm: Jump height in centimeters
        table: Benchmark table with ascending tiers

    Returns:
        Tier and percentile of the tier bound
    """
    for tier in table.tiers:
        if height_cm <= tier.upper_bound_cm:
            return TierRating(tier=tier, percentile=height_cm / tier.upper_bound_cm * 100)

    return TierRating(tier=table.ceiling, percentile=100.0)


def calculation_breakdown(record: ResultRecord) -> CalculationBreakdown:
    """Describe the three derivation steps using the record's own values."""
    precision = measurement_precision_cm(record)

    steps = (
        CalculationStep(
            title="Flight Time",
            value=f"{record.flight_time_ms:.0f} ms",
            detail=(
                f"Time between take-off ({record.takeoff_time_s:.3f}s) "
                f"and landing ({record.landing_time_s:.3f}s)"
            ),
        ),
        CalculationStep(
            title="Physics Formula",
            value=f"h = {GRAVITY} × ({record.flight_time_s:.3f})² ÷ 8",
            detail="Using projectile motion equations for vertical displacement",
        ),
        CalculationStep(
            title="Result",
            value=f"{record.jump_height_cm:.2f} cm",
            detail="Your center of mass reached this height above the starting position",
        ),
    )

    return CalculationBreakdown(
        steps=steps,
        precision_cm=precision,
        frame_rate=record.frame_rate,
        notes=(
            f"Measurement Accuracy: ±{precision:.1f} cm",
            f"Based on {record.frame_rate:g} fps video analysis. "
            "Higher frame rates provide better precision.",
        ),
    )


def build_report(record: ResultRecord, category: str = "male") -> JumpReport:
    """Compute every derived metric for a result record.

    Raises:
        BenchmarkError: If the category is unknown
    """
    table = get_benchmark_table(category)

    return JumpReport(
        record=record,
        category=table.category,
        power_w_per_kg=power_estimate(record),
        precision_cm=measurement_precision_cm(record),
        rating=classify(record.jump_height_cm, table),
        breakdown=calculation_breakdown(record),
    )


def _ordinal(value: int) -> str:
    if 10 <= value % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(value % 10, "th")
    return f"{value}{suffix}"


def benchmark_text(report: JumpReport) -> list[str]:
    """Sentences explaining the rating."""
    population = CATEGORY_DESCRIPTIONS.get(report.category, report.category)
    percentile = report.rating.rounded_percentile

    return [
        f"Your jump height of {report.record.jump_height_cm:.2f} cm "
        f'ranks as "{report.rating.label}"',
        f"This puts you in approximately the {_ordinal(percentile)} percentile for {population}.",
        "Keep training to improve your explosive power and jump higher!",
    ]


def summary_text(report: JumpReport) -> str:
    """Plain-text summary for sharing or copying."""
    record = report.record
    return "\n".join(
        [
            "My Vertical Jump Results",
            "",
            f"Jump Height: {record.jump_height_cm:.2f} cm",
            f"Flight Time: {record.flight_time_ms:.0f} ms",
            f"Performance: {report.rating.label}",
            "",
            "Measured with Jump Marker",
            "#VerticalJump #Athletics #SportScience",
        ]
    )
