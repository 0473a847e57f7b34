"""CLI entry point for guard-log."""

import os
import sys
from pathlib import Path

import click


# Default input location, overridable per command or via GUARD_LOG_INPUT
def get_default_input_path() -> Path:
    env_path = os.environ.get('GUARD_LOG_INPUT')
    if env_path:
        return Path(env_path)
    return Path('input') / 'data.txt'


def resolve_input(input_file) -> Path:
    """Resolve the input path, exiting if it does not exist."""
    input_path = Path(input_file) if input_file else get_default_input_path()

    if not input_path.exists():
        click.echo(f"Error: Log file not found: {input_path}", err=True)
        sys.exit(1)

    return input_path


def load_or_exit(input_path: Path, lenient: bool):
    """Replay the log, exiting with an error message on bad data."""
    from .analysis import load_tracker

    try:
        return load_tracker(input_path, strict=not lenient)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        if not lenient:
            click.echo("Use --lenient to skip malformed lines.", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="guard-log")
def main():
    """Guard Log - shift log sleep analysis."""
    pass


@main.command()
@click.option("--input", "input_file", default=None, help="Path to the shift log")
@click.option("--lenient", is_flag=True, help="Skip malformed lines instead of failing")
def solve(input_file, lenient):
    """Print the sleepiest-guard and most-predictable-guard answers."""
    from .analysis import compute_answers

    input_path = resolve_input(input_file)
    tracker = load_or_exit(input_path, lenient)

    answers = compute_answers(tracker.summaries())
    if answers['sleepiest'] is None:
        click.echo("No sleep recorded.")
        return

    click.echo(f"Result of task 1: {answers['sleepiest']}")
    click.echo(f"Result of task 2: {answers['most_predictable']}")


@main.command()
@click.option("--input", "input_file", default=None, help="Path to the shift log")
@click.option("--format", "output_format", default="text", type=click.Choice(['text', 'json']), help="Output format")
@click.option("--output", default=None, help="Write JSON to file")
@click.option("--lenient", is_flag=True, help="Skip malformed lines instead of failing")
def summary(input_file, output_format, output, lenient):
    """Show per-guard sleep summaries."""
    from .analysis import format_summary_report, write_summaries_json, summaries_to_dict

    input_path = resolve_input(input_file)
    tracker = load_or_exit(input_path, lenient)
    summaries = tracker.summaries()

    if output:
        output_path = Path(output)
        write_summaries_json(summaries, output_path)
        click.echo(f"Wrote {len(summaries)} guard summaries to {output_path}")
    elif output_format == 'json':
        import json

        click.echo(json.dumps(summaries_to_dict(summaries), indent=2))
    else:
        click.echo(format_summary_report(summaries))


@main.command()
@click.option("--input", "input_file", default=None, help="Path to the shift log")
def validate(input_file):
    """Check the shift log for parse and sequence issues."""
    from .validate import validate_log, format_validation_report

    input_path = resolve_input(input_file)

    click.echo(f"Validating: {input_path}")
    click.echo("")

    result = validate_log(input_path)
    report = format_validation_report(result)
    click.echo(report)

    # Exit with error if there are error-level issues
    if any(i.severity == 'error' for i in result['issues']):
        sys.exit(1)


@main.command()
@click.option("--input", "input_file", default=None, help="Path to the shift log")
@click.option("--lenient", is_flag=True, help="Skip malformed lines instead of failing")
def stats(input_file, lenient):
    """Show aggregate sleep statistics."""
    from .analysis import get_sleep_stats

    input_path = resolve_input(input_file)
    tracker = load_or_exit(input_path, lenient)
    sleep_stats = get_sleep_stats(tracker)

    click.echo("Guard Log Statistics")
    click.echo("=" * 50)
    click.echo("")
    click.echo(f"  Guards on duty: {sleep_stats['total_guards']}")
    click.echo(f"  Guards who slept: {sleep_stats['sleeping_guards']}")
    click.echo(f"  Sleep intervals: {sleep_stats['interval_count']}")
    click.echo(f"  Total minutes asleep: {sleep_stats['total_minutes_asleep']}")

    first_date, last_date = sleep_stats['date_range']
    if first_date and last_date:
        click.echo(f"  Date range: {first_date} to {last_date}")

    if sleep_stats['guards_left_asleep']:
        left = ', '.join(f"#{g}" for g in sleep_stats['guards_left_asleep'])
        click.echo(f"  Never woke up: {left}")

    click.echo("")


if __name__ == "__main__":
    main()
