"""Validation of shift logs for consistency issues."""

from pathlib import Path

from .errors import ParseError, SequenceViolation
from .models import Event, EventType, ValidationIssue
from .parser import parse_line
from .analysis import sort_events
from .tracker import EventTracker


def validate_log(path: Path) -> dict:
    """
    Validate a shift log for consistency issues.

    Checks:
    - Every non-blank line matches the log grammar
    - Replayed in chronological order, the events form a valid sleep sequence
    - No guard is left asleep when their shift ends or the log ends

    Events that cause a sequence error are skipped and replay continues.

    Returns dict with:
    - issues: list of ValidationIssue objects
    - valid_count: count of entries that parsed and replayed cleanly
    - total_count: total non-blank lines checked
    """
    issues: list[ValidationIssue] = []
    events: list[Event] = []
    total_count = 0

    if not path.exists():
        return {
            'issues': [ValidationIssue(
                line_number=None,
                issue_type='parse_error',
                description=f'Log file does not exist: {path}',
                severity='error'
            )],
            'valid_count': 0,
            'total_count': 0,
        }

    with open(path, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            total_count += 1
            try:
                events.append(parse_line(line, line_num))
            except ParseError as e:
                issues.append(ValidationIssue(
                    line_number=line_num,
                    issue_type='parse_error',
                    description=str(e),
                    severity='error'
                ))

    tracker = EventTracker()
    valid_count = 0

    for event in sort_events(events):
        if event.event_type is EventType.BEGINS_SHIFT:
            unclosed = _unclosed_sleep_issue(tracker, event)
            if unclosed:
                issues.append(unclosed)

        try:
            tracker.feed(event)
        except SequenceViolation as e:
            issues.append(ValidationIssue(
                line_number=event.line_number,
                issue_type='sequence',
                description=str(e),
                severity='error'
            ))
        else:
            valid_count += 1

    # Guards left asleep at earlier shift changes were reported above
    unclosed = _unclosed_sleep_issue(tracker, None)
    if unclosed:
        issues.append(unclosed)

    return {
        'issues': issues,
        'valid_count': valid_count,
        'total_count': total_count,
    }


def _unclosed_sleep_issue(tracker: EventTracker, next_shift: Event | None) -> ValidationIssue | None:
    """
    Check whether the on-duty guard is still asleep.

    Returns a ValidationIssue if so, None if OK.
    """
    if tracker.current_guard is None:
        return None

    sleep_tracker = tracker.tracker_for(tracker.current_guard)
    if not sleep_tracker.is_asleep:
        return None

    if next_shift is None:
        ending = 'the log ends'
        line_number = None
    else:
        ending = f'shift change at {next_shift.datetime}'
        line_number = next_shift.line_number

    return ValidationIssue(
        line_number=line_number,
        issue_type='unclosed_sleep',
        description=(
            f'Guard #{tracker.current_guard} fell asleep at '
            f'{sleep_tracker.asleep_since} and never woke before {ending}'
        ),
        severity='warning'
    )


ISSUE_LABELS = {
    'parse_error': 'malformed',
    'sequence': 'out of sequence',
    'unclosed_sleep': 'never woke',
}


def _issue_sort_key(issue: ValidationIssue) -> tuple[int, int]:
    # End-of-log issues have no line and sort last
    if issue.line_number is None:
        return (1, 0)
    return (0, issue.line_number)


def format_validation_report(validation_result: dict) -> str:
    """
    Format validation results as a replay log, one issue per line in file order.

    Errors are marked with '!', warnings with '~'.
    """
    issues = validation_result['issues']
    errors = sum(1 for i in issues if i.severity == 'error')
    warnings = len(issues) - errors

    lines = [
        "Shift Log Validation Report",
        "=" * 50,
        f"Entries: {validation_result['total_count']} checked, "
        f"{validation_result['valid_count']} replayed cleanly",
        f"Errors: {errors}  Warnings: {warnings}",
        "",
    ]

    if not issues:
        lines.append("All entries passed validation!")
        return '\n'.join(lines)

    lines.append("Issues in log order")
    lines.append("-" * 40)
    for issue in sorted(issues, key=_issue_sort_key):
        marker = '!' if issue.severity == 'error' else '~'
        if issue.line_number is not None:
            where = f"line {issue.line_number}"
        else:
            where = "file" if issue.issue_type == 'parse_error' else "end of log"
        label = ISSUE_LABELS.get(issue.issue_type, issue.issue_type)
        lines.append(f"{marker} {where:<11} {label:<16} {issue.description}")

    if errors:
        lines.append("")
        lines.append("Replay skipped the entries marked '!'; answers from this log may be incomplete.")

    return '\n'.join(lines)
