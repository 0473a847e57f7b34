"""Tests for analysis module."""

import json

import pytest

from guard_log.analysis import (
    build_tracker,
    compute_answers,
    format_summary,
    format_summary_report,
    get_sleep_stats,
    load_tracker,
    most_predictable_guard,
    sleepiest_guard,
    sort_events,
    write_summaries_json,
)
from guard_log.errors import SequenceViolation
from guard_log.models import Date, GuardSummary, Time
from guard_log.parser import parse_lines


class TestReplay:
    """Tests for sorting and replaying events."""

    def test_sort_events(self, unsorted_log_path):
        from guard_log.parser import parse_log_file

        events = sort_events(parse_log_file(unsorted_log_path))
        timestamps = [e.datetime for e in events]
        assert timestamps == sorted(timestamps)

    def test_unsorted_log_matches_sorted(self, sample_log_path, unsorted_log_path):
        """Raw line order does not change the result."""
        sorted_tracker = load_tracker(sample_log_path)
        unsorted_tracker = load_tracker(unsorted_log_path)

        assert sorted_tracker.summaries() == unsorted_tracker.summaries()

    def test_build_tracker_from_lines(self, sample_lines):
        tracker = build_tracker(parse_lines(reversed(sample_lines)))
        assert tracker.guard_ids() == [10, 99]

    def test_strict_sequence_error(self, broken_sequence_log_path):
        with pytest.raises(SequenceViolation) as exc_info:
            load_tracker(broken_sequence_log_path)
        assert exc_info.value.line_number == 4


class TestQueries:
    """Tests for the two guard queries."""

    def test_sample_answers(self, sample_log_path):
        """Sleepiest guard 10 at minute 24; guard 99 most predictable at minute 45."""
        answers = compute_answers(load_tracker(sample_log_path).summaries())

        assert answers['sleepiest'] == 240
        assert answers['most_predictable'] == 4455

    def test_no_summaries(self):
        assert sleepiest_guard([]) is None
        assert most_predictable_guard([]) is None
        assert compute_answers([]) == {'sleepiest': None, 'most_predictable': None}

    def test_ties_keep_first(self):
        """The first of equal candidates wins."""
        summaries = [
            GuardSummary(3, Time(0, 10), 2, 40),
            GuardSummary(7, Time(0, 20), 2, 40),
        ]

        assert sleepiest_guard(summaries).guard_id == 3
        assert most_predictable_guard(summaries).guard_id == 3

    def test_queries_can_differ(self):
        summaries = [
            GuardSummary(3, Time(0, 10), 2, 100),
            GuardSummary(7, Time(0, 20), 5, 40),
        ]

        assert sleepiest_guard(summaries).guard_id == 3
        assert most_predictable_guard(summaries).guard_id == 7
        assert compute_answers(summaries) == {'sleepiest': 30, 'most_predictable': 140}


class TestReports:
    """Tests for report formatting and JSON output."""

    def test_format_summary(self):
        formatted = format_summary(GuardSummary(99, Time(0, 45), 3, 30))

        assert '#99' in formatted
        assert '30 min' in formatted
        assert '00:45' in formatted
        assert '3x' in formatted

    def test_format_report(self, sample_log_path):
        report = format_summary_report(load_tracker(sample_log_path).summaries())

        assert 'Guard Sleep Report' in report
        assert 'Guard #10' in report
        assert 'answer 240' in report
        assert 'answer 4455' in report

    def test_format_empty_report(self):
        report = format_summary_report([])
        assert 'No sleep recorded' in report

    def test_write_json(self, sample_log_path, temp_dir):
        output_path = temp_dir / 'out' / 'summaries.json'
        write_summaries_json(load_tracker(sample_log_path).summaries(), output_path)

        data = json.loads(output_path.read_text())

        assert data['count'] == 2
        assert data['guards'][0]['guard_id'] == 10
        assert data['guards'][1]['most_missed_minute'] == '00:45'
        assert data['answers'] == {'sleepiest': 240, 'most_predictable': 4455}


class TestSleepStats:
    """Tests for get_sleep_stats function."""

    def test_sample_stats(self, sample_log_path):
        stats = get_sleep_stats(load_tracker(sample_log_path))

        assert stats['total_guards'] == 2
        assert stats['sleeping_guards'] == 2
        assert stats['interval_count'] == 6
        assert stats['total_minutes_asleep'] == 80
        assert stats['guards_left_asleep'] == []
        assert stats['date_range'] == (Date(1518, 11, 1), Date(1518, 11, 5))

    def test_empty_stats(self):
        stats = get_sleep_stats(build_tracker([]))

        assert stats['total_guards'] == 0
        assert stats['date_range'] == (None, None)
