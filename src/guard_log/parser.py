"""Shift log line parser."""

from pathlib import Path
from typing import Iterable, Iterator, Optional
import re
import sys

from .errors import ParseError
from .models import Date, DateTime, Event, EventType, Time


LINE_PATTERN = re.compile(
    r'\[(?P<year>[0-9]+)-(?P<month>[0-9]+)-(?P<day>[0-9]+)'
    r' (?P<hour>[0-9]+):(?P<minute>[0-9]+)\]'
    r' (?:Guard #(?P<guard_id>[0-9]+) begins shift'
    r'|(?P<asleep>falls asleep)'
    r'|(?P<awake>wakes up))'
)


def _parse_datetime(match: re.Match) -> Optional[DateTime]:
    """Build a DateTime from matched fields, or None if a field is out of range."""
    year = int(match.group('year'))
    month = int(match.group('month'))
    day = int(match.group('day'))
    hour = int(match.group('hour'))
    minute = int(match.group('minute'))

    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None

    return DateTime(Date(year, month, day), Time(hour, minute))


def parse_line(line: str, line_number: Optional[int] = None) -> Event:
    """
    Parse one log line into an Event.

    The whole line must match, apart from its trailing line terminator.

    Raises:
        ParseError: if the line does not match the log grammar
    """
    text = line.rstrip('\r\n')
    match = LINE_PATTERN.fullmatch(text)
    if match is None:
        raise ParseError(line, line_number)

    timestamp = _parse_datetime(match)
    if timestamp is None:
        raise ParseError(line, line_number)

    if match.group('guard_id') is not None:
        return Event(
            datetime=timestamp,
            event_type=EventType.BEGINS_SHIFT,
            guard_id=int(match.group('guard_id')),
            line_number=line_number,
        )
    if match.group('asleep') is not None:
        return Event(timestamp, EventType.FALLS_ASLEEP, line_number=line_number)
    return Event(timestamp, EventType.WAKES_UP, line_number=line_number)


def parse_lines(lines: Iterable[str], strict: bool = True) -> Iterator[Event]:
    """
    Parse a sequence of log lines, skipping blank ones.

    In strict mode the first malformed line raises ParseError. Otherwise
    malformed lines are skipped with a warning to stderr.
    """
    for line_num, line in enumerate(lines, 1):
        if not line.strip():
            continue
        try:
            yield parse_line(line, line_num)
        except ParseError:
            if strict:
                raise
            # Only report the location, not the content
            print(f"Warning: Skipping malformed log entry at line {line_num}", file=sys.stderr)


def parse_log_file(path: Path, strict: bool = True) -> Iterator[Event]:
    """Stream parse a shift log file line by line."""
    with open(path, 'r', encoding='utf-8') as f:
        yield from parse_lines(f, strict=strict)
