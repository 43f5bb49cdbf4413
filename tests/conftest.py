"""Pytest fixtures for Jump Marker tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pytest

from jump_marker.analysis.benchmarks import get_benchmark_table
from jump_marker.analysis.calculator import derive_result
from jump_marker.core.config import Settings, StorageSettings
from jump_marker.core.types import BenchmarkTable, ResultRecord
from jump_marker.session.marking import MarkingSession
from jump_marker.storage.handoff import ResultStore

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


@dataclass
class FakePlayback:
    """In-memory playback surface with a settable position."""

    current_time: float = 0.0
    duration: float | None = 5.0
    seeks: list[float] = field(default_factory=list)

    def seek(self, position: float) -> None:
        self.seeks.append(position)
        self.current_time = position


@pytest.fixture
def fake_playback() -> FakePlayback:
    """Create a playback surface at the start of a 5 second video."""
    return FakePlayback()


@pytest.fixture
def session_240() -> MarkingSession:
    """Create an empty session at 240 fps."""
    return MarkingSession(240.0)


@pytest.fixture
def complete_session() -> MarkingSession:
    """Create a 240 fps session with take-off at 1.0 s and landing at 1.3 s."""
    session = MarkingSession(240.0)
    session.mark_takeoff(1.0)
    session.mark_landing(1.3)
    return session


@pytest.fixture
def sample_record(complete_session: MarkingSession) -> ResultRecord:
    """Create a result record for a 0.3 s flight at 240 fps."""
    return derive_result(complete_session, now=FIXED_TIME)


@pytest.fixture
def male_table() -> BenchmarkTable:
    """Create the built-in male benchmark table."""
    return get_benchmark_table("male")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create settings writing results into a temporary directory."""
    return Settings(
        storage=StorageSettings(
            results_path=str(tmp_path / "results.json"),
            share_export_path=str(tmp_path / "summary.txt"),
        )
    )


@pytest.fixture
def result_store(tmp_path: Path) -> ResultStore:
    """Create a result store in a temporary directory."""
    return ResultStore(tmp_path / "results.json")
