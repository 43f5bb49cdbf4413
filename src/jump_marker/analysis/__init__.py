"""Pure analysis logic: result derivation, benchmarks, and report metrics.

This module contains NO I/O operations and NO OpenCV imports.
All functions operate on typed dataclasses and return results.
"""

from jump_marker.analysis.calculator import GRAVITY, derive_result
from jump_marker.analysis.report import JumpReport, build_report, classify

__all__ = ["GRAVITY", "derive_result", "JumpReport", "build_report", "classify"]
