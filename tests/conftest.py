"""Pytest fixtures for guard-log tests."""

import pytest
from pathlib import Path
import tempfile
import shutil


SAMPLE_LINES = [
    "[1518-11-01 00:00] Guard #10 begins shift",
    "[1518-11-01 00:05] falls asleep",
    "[1518-11-01 00:25] wakes up",
    "[1518-11-01 00:30] falls asleep",
    "[1518-11-01 00:55] wakes up",
    "[1518-11-01 23:58] Guard #99 begins shift",
    "[1518-11-02 00:40] falls asleep",
    "[1518-11-02 00:50] wakes up",
    "[1518-11-03 00:05] Guard #10 begins shift",
    "[1518-11-03 00:24] falls asleep",
    "[1518-11-03 00:29] wakes up",
    "[1518-11-04 00:02] Guard #99 begins shift",
    "[1518-11-04 00:36] falls asleep",
    "[1518-11-04 00:46] wakes up",
    "[1518-11-05 00:03] Guard #99 begins shift",
    "[1518-11-05 00:45] falls asleep",
    "[1518-11-05 00:55] wakes up",
]


@pytest.fixture
def sample_lines() -> list[str]:
    """The four-night, two-guard sample log as a list of lines."""
    return list(SAMPLE_LINES)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / 'fixtures'


@pytest.fixture
def sample_log_path(fixtures_dir) -> Path:
    """Path to the sample log in chronological order."""
    return fixtures_dir / 'sample_log.txt'


@pytest.fixture
def unsorted_log_path(fixtures_dir) -> Path:
    """Path to the sample log with lines shuffled."""
    return fixtures_dir / 'unsorted_log.txt'


@pytest.fixture
def malformed_log_path(fixtures_dir) -> Path:
    """Path to a log with two malformed lines and a blank line."""
    return fixtures_dir / 'malformed_log.txt'


@pytest.fixture
def broken_sequence_log_path(fixtures_dir) -> Path:
    """Path to a well-formed log whose event sequence is inconsistent."""
    return fixtures_dir / 'broken_sequence_log.txt'


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)
