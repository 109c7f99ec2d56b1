"""Indentation styles and level computation."""

from __future__ import annotations

from dataclasses import dataclass
import re


SPACE = " "
TAB = "\t"
INDENT_CHARS = frozenset({SPACE, TAB})
DEFAULT_SPACES = 2

STYLE_NAME_RE = re.compile(r"^(spaces?|tabs?)(?::(\d+))?$")


@dataclass(frozen=True)
class IndentStyle:
    """One indentation level is ``size`` repetitions of ``char``."""

    char: str
    size: int

    def __post_init__(self) -> None:
        if self.char not in INDENT_CHARS:
            raise ValueError(f"Indent character must be a space or a tab, got {self.char!r}")
        if self.size < 1:
            raise ValueError(f"Indent size must be at least 1, got {self.size}")

    @classmethod
    def detect(cls, line: str) -> IndentStyle | None:
        return detect_style(line)

    def level(self, line: str) -> int:
        """Return the indentation level of ``line``; partial units round down."""
        run = 0
        for char in line:
            if char != self.char:
                break
            run += 1
        return run // self.size

    def strip(self, line: str) -> str:
        return line[self.level(line) * self.size :]

    def __str__(self) -> str:
        name = "spaces" if self.char == SPACE else "tabs"
        return f"{name}:{self.size}"


def detect_style(line: str) -> IndentStyle | None:
    """Detect a style from a line assumed to carry one level of indentation.

    Only the leading run of a single indent character is considered, so
    ``"  \\tx"`` detects two spaces. Returns None for unindented lines.
    """
    if not line or line[0] not in INDENT_CHARS:
        return None

    char = line[0]
    size = 0
    for current in line:
        if current != char:
            break
        size += 1
    return IndentStyle(char, size)


def spaces(size: int) -> IndentStyle:
    return IndentStyle(SPACE, size)


def tabs(size: int) -> IndentStyle:
    return IndentStyle(TAB, size)


def parse_style(value: str | None) -> IndentStyle | None:
    """Parse ``auto``, ``tabs``, ``tabs:N``, ``spaces`` or ``spaces:N``."""
    raw = (value or "").strip().lower()
    if not raw or raw == "auto":
        return None

    match = STYLE_NAME_RE.match(raw)
    if match is None:
        raise ValueError(f"Unrecognized indent style: {value!r}")

    kind, size = match.groups()
    if kind.startswith("tab"):
        return tabs(int(size) if size else 1)
    return spaces(int(size) if size else DEFAULT_SPACES)
