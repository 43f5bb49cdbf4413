"""Text rendering of a jump report."""

from __future__ import annotations

from jump_marker.analysis.report import JumpReport, benchmark_text


def format_report(report: JumpReport) -> list[str]:
    """Lines of the results view.

    Args:
        report: Report built from the stored result record

    Returns:
        Printable lines
    """
    record = report.record
    rating = report.rating

    lines = [
        "Vertical Jump Results",
        "=" * 40,
        f"Jump Height:       {record.jump_height_cm:.2f} cm",
        f"Flight Time:       {record.flight_time_ms:.0f} ms",
        f"Take-off Velocity: {record.takeoff_velocity_mps:.2f} m/s",
        f"Power Output:      {report.power_w_per_kg:.1f} W/kg",
        "",
        f"Frame Rate:        {record.frame_rate:g} fps",
        f"Take-off:          {record.takeoff_time_s:.3f}s (frame {record.takeoff_frame})",
        f"Landing:           {record.landing_time_s:.3f}s (frame {record.landing_frame})",
        f"Precision:         ± {report.precision_cm:.1f} cm",
        "",
        f"Rating:            {rating.label} ({rating.rounded_percentile}%)",
    ]
    lines.extend(benchmark_text(report))

    lines.append("")
    lines.append("Your Calculation Breakdown:")
    for i, step in enumerate(report.breakdown.steps, start=1):
        lines.append(f"  {i}. {step.title}: {step.value}")
        lines.append(f"     {step.detail}")

    lines.append("")
    lines.extend(report.breakdown.notes)
    return lines
