"""Tests for report metrics and benchmark classification."""

from __future__ import annotations

import dataclasses

import pytest

from jump_marker.analysis.benchmarks import BENCHMARKS, build_table, get_benchmark_table
from jump_marker.analysis.report import (
    benchmark_text,
    build_report,
    calculation_breakdown,
    classify,
    frame_precision_cm,
    measurement_precision_cm,
    power_estimate,
    summary_text,
)
from jump_marker.core.exceptions import BenchmarkError
from jump_marker.core.types import BenchmarkTable, BenchmarkTier, ResultRecord


class TestPowerAndPrecision:
    """Tests for power and precision estimates."""

    def test_power_is_gravity_times_velocity(self, sample_record: ResultRecord) -> None:
        """Power estimate should reduce to g * v."""
        assert power_estimate(sample_record) == pytest.approx(9.81 * 1.4715)

    def test_precision_at_240_fps(self, sample_record: ResultRecord) -> None:
        """240 fps should give about ±1.02 cm."""
        precision = measurement_precision_cm(sample_record)
        assert precision == pytest.approx((1 / 240) * 9.81 / 8 * 100 * 2)
        assert round(precision, 2) == 1.02

    def test_precision_decreases_with_frame_rate(self, sample_record: ResultRecord) -> None:
        """Higher frame rates should report smaller uncertainty."""
        rates = [1.0, 24.0, 30.0, 60.0, 120.0, 240.0, 480.0, 1000.0]
        precisions = [
            measurement_precision_cm(dataclasses.replace(sample_record, frame_rate=rate))
            for rate in rates
        ]

        assert all(later < earlier for earlier, later in zip(precisions, precisions[1:]))

    def test_combined_precision_is_twice_frame_precision(self) -> None:
        """Combined uncertainty covers both marks."""
        assert frame_precision_cm(60.0) == pytest.approx(9.81 / 8 * 100 / 60)


class TestClassify:
    """Tests for tier classification."""

    def test_bound_belongs_to_lower_tier(self, male_table: BenchmarkTable) -> None:
        """A height equal to a bound stays in that tier."""
        rating = classify(40.0, male_table)

        assert rating.tier.key == "average"
        assert rating.percentile == pytest.approx(100.0)

    @pytest.mark.parametrize("category", ["male", "female"])
    def test_every_bound_and_just_above(self, category: str) -> None:
        """Each bound maps to its own tier and slightly more maps to the next."""
        table = get_benchmark_table(category)

        for tier, next_tier in zip(table.tiers, table.tiers[1:]):
            assert classify(tier.upper_bound_cm, table).tier == tier
            assert classify(tier.upper_bound_cm + 1e-6, table).tier == next_tier

    def test_percentile_within_tier(self, male_table: BenchmarkTable) -> None:
        """Percentile is height over the tier bound."""
        rating = classify(45.0, male_table)

        assert rating.tier.label == "Above Average"
        assert rating.percentile == pytest.approx(90.0)

    def test_low_jump_is_first_tier(self, male_table: BenchmarkTable) -> None:
        """Heights under the first bound are in the first tier."""
        rating = classify(11.04, male_table)

        assert rating.tier.key == "poor"
        assert rating.tier.label == "Needs Improvement"
        assert rating.percentile == pytest.approx(55.2)

    def test_above_ceiling_is_elite_at_100(self, male_table: BenchmarkTable) -> None:
        """Heights above every bound are elite at 100 percent."""
        rating = classify(150.0, male_table)

        assert rating.tier.key == "elite"
        assert rating.percentile == 100.0
        assert rating.display_percentile == 100.0

    def test_zero_height(self, male_table: BenchmarkTable) -> None:
        """A zero height is the first tier at 0 percent."""
        rating = classify(0.0, male_table)

        assert rating.tier.key == "poor"
        assert rating.percentile == 0.0

    def test_custom_table(self) -> None:
        """Classification works for any data-driven table."""
        table = BenchmarkTable(
            category="youth",
            tiers=(
                BenchmarkTier("low", 10.0, "Low", "#000000"),
                BenchmarkTier("high", 25.0, "High", "#ffffff"),
            ),
        )

        assert classify(10.0, table).tier.key == "low"
        assert classify(12.5, table).tier.key == "high"
        assert classify(12.5, table).percentile == pytest.approx(50.0)
        assert classify(40.0, table).tier.key == "high"


class TestBenchmarkTables:
    """Tests for benchmark table construction and lookup."""

    def test_built_in_tables(self) -> None:
        """Male and female tables should have eight ascending tiers."""
        assert set(BENCHMARKS) == {"male", "female"}
        for table in BENCHMARKS.values():
            assert len(table.tiers) == 8
            assert table.ceiling.label == "Elite Level"
            assert table.ceiling.upper_bound_cm == 100.0

    def test_male_bounds(self, male_table: BenchmarkTable) -> None:
        """Male bounds match the published table."""
        assert [t.upper_bound_cm for t in male_table.tiers] == [20, 30, 40, 50, 60, 70, 81, 100]

    def test_lookup_is_case_insensitive(self) -> None:
        """Category lookup should ignore case."""
        assert get_benchmark_table("Female").category == "female"

    def test_unknown_category(self) -> None:
        """Unknown categories should raise BenchmarkError."""
        with pytest.raises(BenchmarkError, match="Unknown benchmark category"):
            get_benchmark_table("juniors")

    def test_rejects_unordered_bounds(self) -> None:
        """Bounds must strictly increase."""
        with pytest.raises(BenchmarkError):
            build_table("broken", [20, 30, 30, 50, 60, 70, 81, 100])

    def test_rejects_wrong_tier_count(self) -> None:
        """Each standard tier needs exactly one bound."""
        with pytest.raises(BenchmarkError):
            build_table("short", [20, 30])

    def test_rejects_empty_table(self) -> None:
        """A table needs at least one tier."""
        with pytest.raises(BenchmarkError):
            BenchmarkTable(category="empty", tiers=())


class TestBreakdownAndReport:
    """Tests for the calculation breakdown and report aggregation."""

    def test_breakdown_uses_record_values(self, sample_record: ResultRecord) -> None:
        """Breakdown numbers should come straight from the record."""
        breakdown = calculation_breakdown(sample_record)

        assert [step.title for step in breakdown.steps] == [
            "Flight Time",
            "Physics Formula",
            "Result",
        ]
        assert breakdown.steps[0].value == "300 ms"
        assert "1.000s" in breakdown.steps[0].detail
        assert "1.300s" in breakdown.steps[0].detail
        assert breakdown.steps[1].value == "h = 9.81 × (0.300)² ÷ 8"
        assert breakdown.steps[2].value == "11.04 cm"
        assert breakdown.frame_rate == 240.0
        assert breakdown.precision_cm == pytest.approx(measurement_precision_cm(sample_record))

    def test_breakdown_does_not_recompute_height(self, sample_record: ResultRecord) -> None:
        """A record's stored height is shown even if it differs from the formula."""
        edited = dataclasses.replace(sample_record, jump_height_cm=42.0)
        assert calculation_breakdown(edited).steps[2].value == "42.00 cm"

    def test_breakdown_notes(self, sample_record: ResultRecord) -> None:
        """Accuracy notes should mention precision and frame rate."""
        notes = calculation_breakdown(sample_record).notes

        assert notes[0] == "Measurement Accuracy: ±1.0 cm"
        assert "240 fps" in notes[1]

    def test_build_report(self, sample_record: ResultRecord) -> None:
        """Report should aggregate every derived metric."""
        report = build_report(sample_record, "male")

        assert report.category == "male"
        assert report.power_w_per_kg == pytest.approx(power_estimate(sample_record))
        assert report.precision_cm == pytest.approx(measurement_precision_cm(sample_record))
        assert report.rating.tier.key == "poor"
        assert report.breakdown == calculation_breakdown(sample_record)

    def test_build_report_unknown_category(self, sample_record: ResultRecord) -> None:
        """Unknown categories should propagate as BenchmarkError."""
        with pytest.raises(BenchmarkError):
            build_report(sample_record, "unknown")

    def test_summary_text(self, sample_record: ResultRecord) -> None:
        """Share summary should include height, flight time and rating."""
        text = summary_text(build_report(sample_record))

        assert "Jump Height: 11.04 cm" in text
        assert "Flight Time: 300 ms" in text
        assert "Performance: Needs Improvement" in text

    def test_benchmark_text(self, sample_record: ResultRecord) -> None:
        """Benchmark sentences should name the rating and percentile."""
        lines = benchmark_text(build_report(sample_record, "female"))

        assert '"Needs Improvement"' in lines[0]
        # 11.04 / 15 = 73.6 percent
        assert "74th percentile for adult females" in lines[1]

    @pytest.mark.parametrize(
        ("height", "expected"),
        [(20.0, "100th"), (10.2, "51st"), (8.4, "42nd"), (4.6, "23rd"), (2.2, "11th")],
    )
    def test_percentile_ordinals(
        self, sample_record: ResultRecord, height: float, expected: str
    ) -> None:
        """Percentiles should use the right ordinal suffix."""
        record = dataclasses.replace(sample_record, jump_height_cm=height)
        assert f"{expected} percentile" in benchmark_text(build_report(record))[1]
