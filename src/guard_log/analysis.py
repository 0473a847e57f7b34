"""Shift log analysis: replay, queries and reports."""

from pathlib import Path
from typing import Iterable, Optional
from datetime import datetime
import json

from .models import Date, Event, GuardSummary
from .parser import parse_log_file
from .tracker import EventTracker


def sort_events(events: Iterable[Event]) -> list[Event]:
    """Return events in chronological order (stable for equal timestamps)."""
    return sorted(events)


def build_tracker(events: Iterable[Event]) -> EventTracker:
    """
    Replay events through a fresh EventTracker.

    Events are sorted first, so raw log order does not matter.
    """
    tracker = EventTracker()
    tracker.feed_all(sort_events(events))
    return tracker


def load_tracker(path: Path, strict: bool = True) -> EventTracker:
    """Parse a shift log file and replay it."""
    return build_tracker(parse_log_file(path, strict=strict))


def sleepiest_guard(summaries: Iterable[GuardSummary]) -> Optional[GuardSummary]:
    """
    Guard with the most total minutes asleep.

    On ties the first summary seen wins; summaries from EventTracker come
    in ascending guard ID order.
    """
    best: Optional[GuardSummary] = None
    for summary in summaries:
        if best is None or summary.total_minutes_asleep > best.total_minutes_asleep:
            best = summary
    return best


def most_predictable_guard(summaries: Iterable[GuardSummary]) -> Optional[GuardSummary]:
    """Guard most frequently asleep on one particular minute. Same tie-break as sleepiest_guard."""
    best: Optional[GuardSummary] = None
    for summary in summaries:
        if best is None or summary.most_missed_minute_count > best.most_missed_minute_count:
            best = summary
    return best


def compute_answers(summaries: list[GuardSummary]) -> dict:
    """
    Compute both answers as guard ID x most-missed minute.

    Returns dict with 'sleepiest' and 'most_predictable' (None if no guard slept).
    """
    sleepiest = sleepiest_guard(summaries)
    predictable = most_predictable_guard(summaries)
    return {
        'sleepiest': sleepiest.answer if sleepiest else None,
        'most_predictable': predictable.answer if predictable else None,
    }


def summaries_to_dict(summaries: list[GuardSummary]) -> dict:
    """Serializable form of guard summaries plus both answers."""
    return {
        'guards': [
            {
                'guard_id': s.guard_id,
                'total_minutes_asleep': s.total_minutes_asleep,
                'most_missed_minute': str(s.most_missed_minute),
                'most_missed_minute_count': s.most_missed_minute_count,
            }
            for s in summaries
        ],
        'answers': compute_answers(summaries),
    }


def write_summaries_json(summaries: list[GuardSummary], output_path: Path):
    """
    Write guard summaries and answers to a JSON file.
    """
    data = {
        'generated_at': datetime.now().isoformat(),
        'count': len(summaries),
        **summaries_to_dict(summaries),
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def format_summary(summary: GuardSummary) -> str:
    """Format a single guard summary for display."""
    return (
        f"Guard #{summary.guard_id}: {summary.total_minutes_asleep} min asleep, "
        f"most often at {summary.most_missed_minute} ({summary.most_missed_minute_count}x)"
    )


def format_summary_report(summaries: list[GuardSummary]) -> str:
    """
    Format guard summaries as a human-readable report.
    """
    lines = []

    lines.append("Guard Sleep Report")
    lines.append("=" * 50)
    lines.append(f"Guards with recorded sleep: {len(summaries)}")
    lines.append("")

    if not summaries:
        lines.append("No sleep recorded.")
        return '\n'.join(lines)

    for summary in summaries:
        lines.append(f"  {format_summary(summary)}")
    lines.append("")

    sleepiest = sleepiest_guard(summaries)
    predictable = most_predictable_guard(summaries)

    lines.append(f"Sleepiest guard: #{sleepiest.guard_id} "
                 f"(minute {sleepiest.most_missed_minute.minutes}, answer {sleepiest.answer})")
    lines.append(f"Most predictable guard: #{predictable.guard_id} "
                 f"(minute {predictable.most_missed_minute.minutes}, answer {predictable.answer})")

    return '\n'.join(lines)


def get_sleep_stats(tracker: EventTracker) -> dict:
    """
    Calculate statistics about recorded sleep.

    Returns dict with:
    - total_guards: guards that began at least one shift
    - sleeping_guards: guards with at least one sleep interval
    - interval_count: number of recorded intervals
    - total_minutes_asleep: minutes asleep across all guards
    - guards_left_asleep: guards whose last fall-asleep never closed
    - date_range: (first_date, last_date) of recorded sleep
    """
    first_date: Optional[Date] = None
    last_date: Optional[Date] = None
    interval_count = 0
    total_minutes = 0
    sleeping = 0

    for guard_id in tracker.guard_ids():
        intervals = tracker.tracker_for(guard_id).intervals
        if intervals:
            sleeping += 1

        for interval in intervals:
            interval_count += 1
            total_minutes += interval.duration_minutes

            sleep_date = interval.start.date
            if first_date is None or sleep_date < first_date:
                first_date = sleep_date
            if last_date is None or sleep_date > last_date:
                last_date = sleep_date

    return {
        'total_guards': len(tracker.guard_ids()),
        'sleeping_guards': sleeping,
        'interval_count': interval_count,
        'total_minutes_asleep': total_minutes,
        'guards_left_asleep': tracker.guards_left_asleep(),
        'date_range': (first_date, last_date),
    }
