"""Data models for guard-log."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional


@dataclass(frozen=True, order=True)
class Date:
    """Calendar date as written in the log."""
    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, order=True)
class Time:
    """Hour and minute of day."""
    hour: int
    minutes: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minutes:02d}"


@dataclass(frozen=True, order=True)
class DateTime:
    """Date plus time, ordered by date first."""
    date: Date
    time: Time

    def __str__(self) -> str:
        return f"{self.date} {self.time}"


class EventType(Enum):
    """Kind of a shift log entry."""
    BEGINS_SHIFT = "begins_shift"
    FALLS_ASLEEP = "falls_asleep"
    WAKES_UP = "wakes_up"


@dataclass(frozen=True)
class Event:
    """
    A single parsed log entry.

    Equality covers the timestamp, kind and guard; ordering compares the
    timestamp only, so distinct events may tie. guard_id is set for
    BEGINS_SHIFT events.
    """
    datetime: DateTime
    event_type: EventType
    guard_id: Optional[int] = None
    line_number: Optional[int] = field(default=None, compare=False)

    def __lt__(self, other: "Event") -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.datetime < other.datetime

    def __le__(self, other: "Event") -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.datetime <= other.datetime

    def __gt__(self, other: "Event") -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.datetime > other.datetime

    def __ge__(self, other: "Event") -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.datetime >= other.datetime


@dataclass(frozen=True)
class SleepInterval:
    """One asleep -> awake span for a guard, within a single day."""
    start: DateTime
    duration_minutes: int

    @property
    def end(self) -> DateTime:
        total = self.start.time.minutes + self.duration_minutes
        return DateTime(
            self.start.date,
            Time(self.start.time.hour + total // 60, total % 60),
        )

    def minutes_asleep(self) -> list[tuple[int, int]]:
        """Every (hour, minute) covered by the interval, end excluded."""
        hour = self.start.time.hour
        minutes = self.start.time.minutes
        result = []
        for offset in range(self.duration_minutes):
            total = minutes + offset
            result.append((hour + total // 60, total % 60))
        return result


@dataclass(frozen=True)
class GuardSummary:
    """Aggregated sleep statistics for one guard."""
    guard_id: int
    most_missed_minute: Time
    most_missed_minute_count: int
    total_minutes_asleep: int

    @property
    def answer(self) -> int:
        return self.guard_id * self.most_missed_minute.minutes


@dataclass
class ValidationIssue:
    """Represents a consistency problem found in a shift log."""
    line_number: Optional[int]
    issue_type: Literal["parse_error", "sequence", "unclosed_sleep"]
    description: str
    severity: Literal["warning", "error"] = "warning"
