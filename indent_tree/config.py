"""Configuration loader for indent_tree."""

from __future__ import annotations

from dataclasses import dataclass
import os

from indent_tree.env import load_env
from indent_tree.scanner import MAX_LINE_LENGTH
from indent_tree.style import IndentStyle, parse_style


@dataclass
class IndentTreeConfig:
    style: IndentStyle | None
    ignore_extra_indentation: bool
    max_line_length: int | None
    encoding: str
    log_level: str


def _get_max_line_length() -> int | None:
    raw = os.getenv("INDENT_TREE_MAX_LINE_LENGTH", "").strip()
    try:
        value = int(raw) if raw else MAX_LINE_LENGTH
    except ValueError:
        value = MAX_LINE_LENGTH
    return value if value > 0 else None


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def load_config(load_dotenv: bool = True) -> IndentTreeConfig:
    if load_dotenv:
        load_env()

    return IndentTreeConfig(
        style=parse_style(os.getenv("INDENT_TREE_STYLE", "auto")),
        ignore_extra_indentation=_get_bool("INDENT_TREE_IGNORE_EXTRA_INDENTATION", False),
        max_line_length=_get_max_line_length(),
        encoding=os.getenv("INDENT_TREE_ENCODING", "utf-8").strip() or "utf-8",
        log_level=os.getenv("INDENT_TREE_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )
