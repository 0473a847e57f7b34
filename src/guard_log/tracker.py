"""Per-guard sleep tracking and summary aggregation."""

from collections import Counter
from enum import Enum
from typing import Iterable, Optional

from .errors import SequenceViolation
from .models import DateTime, Event, EventType, GuardSummary, SleepInterval, Time


class SleepState(Enum):
    UNINITIALIZED = "uninitialized"
    AWAKE = "awake"
    ASLEEP = "asleep"


class SleepTracker:
    """
    State machine turning one guard's asleep/awake events into intervals.

    Starts UNINITIALIZED. asleep() is accepted from any state; awake() is
    only valid while ASLEEP.
    """

    def __init__(self):
        self.state = SleepState.UNINITIALIZED
        self.asleep_since: Optional[DateTime] = None
        self._intervals: list[SleepInterval] = []

    @property
    def intervals(self) -> tuple[SleepInterval, ...]:
        return tuple(self._intervals)

    @property
    def is_asleep(self) -> bool:
        return self.state is SleepState.ASLEEP

    def asleep(self, datetime: DateTime) -> None:
        self.state = SleepState.ASLEEP
        self.asleep_since = datetime

    def awake(self, datetime: DateTime, line_number: Optional[int] = None) -> None:
        """
        Close the open sleep span and record it as an interval.

        Raises:
            SequenceViolation: if not asleep, or the span crosses a date or runs backwards
        """
        if self.state is not SleepState.ASLEEP:
            raise SequenceViolation(
                f"Wake-up at {datetime} without a preceding fall-asleep",
                line_number,
            )

        start = self.asleep_since
        if start.date != datetime.date:
            raise SequenceViolation(
                f"Sleep span from {start} to {datetime} crosses a date boundary",
                line_number,
            )

        duration = (datetime.time.hour - start.time.hour) * 60 + (
            datetime.time.minutes - start.time.minutes
        )
        if duration < 0:
            raise SequenceViolation(
                f"Wake-up at {datetime} precedes fall-asleep at {start}",
                line_number,
            )

        self._intervals.append(SleepInterval(start, duration))
        self.state = SleepState.AWAKE
        self.asleep_since = None

    def minutes_asleep(self) -> list[tuple[int, int]]:
        """All (hour, minute) pairs covered by recorded intervals, duplicates kept."""
        minutes = []
        for interval in self._intervals:
            minutes.extend(interval.minutes_asleep())
        return minutes

    def total_minutes_asleep(self) -> int:
        return sum(i.duration_minutes for i in self._intervals)


def summarize_guard(guard_id: int, sleep_tracker: SleepTracker) -> GuardSummary:
    """
    Build the summary for one guard.

    Ties on the most-missed minute go to the earliest (hour, minute).
    A guard with only zero-length intervals reports 00:00 with count 0.
    """
    # (hour, minute) -> number of times asleep at that minute
    frequency = Counter(sleep_tracker.minutes_asleep())

    most_missed = (0, 0)
    most_missed_count = 0
    for minute in sorted(frequency):
        if frequency[minute] > most_missed_count:
            most_missed = minute
            most_missed_count = frequency[minute]

    return GuardSummary(
        guard_id=guard_id,
        most_missed_minute=Time(*most_missed),
        most_missed_minute_count=most_missed_count,
        total_minutes_asleep=sum(frequency.values()),
    )


class EventTracker:
    """
    Routes chronologically ordered events to the on-duty guard's tracker.

    Events must be fed in non-decreasing timestamp order; the tracker does
    not sort.
    """

    def __init__(self):
        self.current_guard: Optional[int] = None
        self._trackers: dict[int, SleepTracker] = {}
        self._last_seen: Optional[DateTime] = None

    def feed(self, event: Event) -> None:
        """
        Apply one event.

        Raises:
            SequenceViolation: on out-of-order input, a sleep event before
                any shift began, or an invalid sleep transition
        """
        if self._last_seen is not None and event.datetime < self._last_seen:
            raise SequenceViolation(
                f"Event at {event.datetime} is older than previous event at {self._last_seen}",
                event.line_number,
            )

        if event.event_type is EventType.BEGINS_SHIFT:
            self._begins_shift(event.guard_id)
        elif event.event_type is EventType.FALLS_ASLEEP:
            self._on_duty(event).asleep(event.datetime)
        else:
            self._on_duty(event).awake(event.datetime, event.line_number)

        self._last_seen = event.datetime

    def feed_all(self, events: Iterable[Event]) -> None:
        for event in events:
            self.feed(event)

    def _begins_shift(self, guard_id: int) -> None:
        if guard_id not in self._trackers:
            self._trackers[guard_id] = SleepTracker()
        self.current_guard = guard_id

    def _on_duty(self, event: Event) -> SleepTracker:
        if self.current_guard is None:
            raise SequenceViolation(
                f"Sleep event at {event.datetime} before any shift began",
                event.line_number,
            )
        return self._trackers[self.current_guard]

    def guard_ids(self) -> list[int]:
        return sorted(self._trackers)

    def tracker_for(self, guard_id: int) -> Optional[SleepTracker]:
        return self._trackers.get(guard_id)

    def guards_left_asleep(self) -> list[int]:
        """Guards whose last fall-asleep was never followed by a wake-up."""
        return [g for g in self.guard_ids() if self._trackers[g].is_asleep]

    def summaries(self) -> list[GuardSummary]:
        """
        One summary per guard with at least one recorded interval.

        Returned in ascending guard ID order.
        """
        return [
            summarize_guard(guard_id, self._trackers[guard_id])
            for guard_id in self.guard_ids()
            if self._trackers[guard_id].intervals
        ]
