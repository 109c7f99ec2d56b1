"""Line-by-line indentation scanning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import io
import logging
from typing import Iterable, Iterator

from indent_tree.errors import LineTooLongError, SourceReadError
from indent_tree.style import IndentStyle, detect_style


LOGGER = logging.getLogger(__name__)

MAX_LINE_LENGTH = 64 * 1024


@dataclass(frozen=True)
class Line:
    text: str
    number: int
    level: int


class StyleState(Enum):
    UNSET = "unset"
    FIXED = "fixed"
    DETECTED = "detected"


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


class LineScanner:
    """Step through an indented line source one line at a time.

    The scanner only measures indentation; it does not care how levels
    relate from one line to the next. That is the tree builder's job.

    A style passed at construction is FIXED and never changes. Without one the
    scanner starts UNSET and moves to DETECTED on the first line whose leading
    run of spaces or tabs can be measured; from then on that style is used for
    every line.

    Source failures never escape ``advance``: they are latched and exposed via
    ``error``, which stays None on a clean end of input.
    """

    def __init__(
        self,
        source: Iterable[str] | Iterable[bytes],
        style: IndentStyle | None = None,
        *,
        encoding: str = "utf-8",
        max_line_length: int | None = MAX_LINE_LENGTH,
    ) -> None:
        self._source = source
        self._iterator: Iterator[str | bytes] | None = None
        self._style = style
        self._style_state = StyleState.FIXED if style is not None else StyleState.UNSET
        self._encoding = encoding
        self._max_line_length = max_line_length
        self._line_count = 0
        self._raw: str | None = None
        self._error: BaseException | None = None
        self._done = False

    @classmethod
    def from_text(cls, text: str, style: IndentStyle | None = None, **kwargs) -> LineScanner:
        return cls(io.StringIO(text), style, **kwargs)

    @property
    def line_count(self) -> int:
        return self._line_count

    @property
    def style(self) -> IndentStyle | None:
        return self._style

    @property
    def style_state(self) -> StyleState:
        return self._style_state

    @property
    def error(self) -> BaseException | None:
        """First read failure, or None if scanning ended cleanly (or has not ended)."""
        return self._error

    def _fail(self, exc: BaseException) -> bool:
        self._error = exc
        self._done = True
        self._raw = None
        LOGGER.debug("Line source failed after %d lines: %s", self._line_count, exc)
        return False

    def advance(self) -> bool:
        """Read the next line. Returns False at end of input or on failure."""
        if self._done:
            return False

        try:
            if self._iterator is None:
                self._iterator = iter(self._source)
            raw = next(self._iterator)
            if isinstance(raw, bytes):
                raw = raw.decode(self._encoding)
            text = _strip_terminator(raw)
        except StopIteration:
            self._done = True
            self._raw = None
            return False
        except UnicodeDecodeError as exc:
            # Text-mode sources decode ahead in chunks, so the line is approximate there.
            error = SourceReadError(
                f"Cannot decode input near line {self._line_count + 1} as {exc.encoding}: {exc}",
                self._line_count + 1,
            )
            error.__cause__ = exc
            return self._fail(error)
        except Exception as exc:
            return self._fail(exc)

        if self._max_line_length is not None and len(text) > self._max_line_length:
            return self._fail(LineTooLongError(self._line_count + 1, self._max_line_length))

        self._line_count += 1
        self._raw = text
        return True

    def current_line(self) -> Line:
        """Return the line read by the last successful ``advance`` call."""
        if self._raw is None:
            raise RuntimeError("current_line() requires a successful advance()")

        text = self._raw
        if self._style_state is StyleState.UNSET:
            detected = detect_style(text)
            if detected is not None:
                self._style = detected
                self._style_state = StyleState.DETECTED
                LOGGER.debug("Detected indent style %s at line %d", detected, self._line_count)

        level = 0
        if self._style is not None:
            level = self._style.level(text)
            text = text[level * self._style.size :]

        return Line(text=text, number=self._line_count, level=level)

    def __iter__(self) -> Iterator[Line]:
        while self.advance():
            yield self.current_line()
