"""Vertical jump benchmark tables.

Tier bounds are based on published adult jump-height norms. New
population categories only need a new table; classification is
data-driven.
"""

from __future__ import annotations

from jump_marker.core.exceptions import BenchmarkError
from jump_marker.core.types import BenchmarkTable, BenchmarkTier

# (key, label, color) shared by every category, lowest tier first
TIER_STYLES: tuple[tuple[str, str, str], ...] = (
    ("poor", "Needs Improvement", "#dc2626"),
    ("below_average", "Below Average", "#f59e0b"),
    ("average", "Average", "#6b7280"),
    ("above_average", "Above Average", "#10b981"),
    ("good", "Good", "#059669"),
    ("very_good", "Very Good", "#047857"),
    ("excellent", "Excellent", "#2563eb"),
    ("elite", "Elite Level", "#7c3aed"),
)


def build_table(category: str, bounds_cm: list[float]) -> BenchmarkTable:
    """Build a benchmark table from upper bounds using the standard tiers.

    Args:
        category: Population category name
        bounds_cm: One upper bound per tier, ascending

    Returns:
        Benchmark table
    """
    if len(bounds_cm) != len(TIER_STYLES):
        raise BenchmarkError(
            f"Expected {len(TIER_STYLES)} bounds for '{category}', got {len(bounds_cm)}"
        )

    tiers = tuple(
        BenchmarkTier(key=key, upper_bound_cm=float(bound), label=label, color=color)
        for (key, label, color), bound in zip(TIER_STYLES, bounds_cm)
    )
    return BenchmarkTable(category=category, tiers=tiers)


BENCHMARKS: dict[str, BenchmarkTable] = {
    "male": build_table("male", [20, 30, 40, 50, 60, 70, 81, 100]),
    "female": build_table("female", [15, 25, 35, 45, 55, 65, 75, 100]),
}

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "male": "adult males",
    "female": "adult females",
}


def get_benchmark_table(category: str) -> BenchmarkTable:
    """Look up the benchmark table for a population category.

    Raises:
        BenchmarkError: If the category is unknown
    """
    try:
        return BENCHMARKS[category.lower()]
    except KeyError as e:
        known = ", ".join(sorted(BENCHMARKS))
        raise BenchmarkError(f"Unknown benchmark category '{category}' (known: {known})") from e
