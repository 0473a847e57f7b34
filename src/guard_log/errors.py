"""Exceptions raised while reading and replaying shift logs."""

from typing import Optional


class ParseError(ValueError):
    """A line did not match the shift log grammar."""

    def __init__(self, line: str, line_number: Optional[int] = None):
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"Malformed log entry at {where}")


class SequenceViolation(ValueError):
    """Well-formed events arrived in an order the sleep model cannot accept."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)
