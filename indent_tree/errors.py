"""Error kinds raised or reported while scanning and building trees."""

from __future__ import annotations


class IndentTreeError(Exception):
    """Base class for indent_tree failures."""


class SourceReadError(IndentTreeError):
    """The line source produced something the scanner could not read."""

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class LineTooLongError(SourceReadError):
    def __init__(self, line_number: int, limit: int) -> None:
        super().__init__(f"Line {line_number} exceeds {limit} characters", line_number)
        self.limit = limit


class ExtraIndentationError(IndentTreeError):
    """A line is indented more than one level deeper than the previous line."""

    def __init__(self, line_number: int) -> None:
        super().__init__(f"Extra indentation at line {line_number}")
        self.line_number = line_number
