"""Fold scanned lines into a node tree."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from pathlib import Path
from typing import Callable, Optional

from indent_tree.errors import ExtraIndentationError
from indent_tree.scanner import MAX_LINE_LENGTH, LineScanner
from indent_tree.style import IndentStyle
from indent_tree.tree import ContentNode, Node, RootNode, attach


LOGGER = logging.getLogger(__name__)

NodeCallback = Callable[[ContentNode, "ParseOptions"], None]


@dataclass
class ParseOptions:
    # Treat a jump of more than one level as a single-level step.
    ignore_extra_indentation: bool = False
    # Called after each node is attached; raising aborts the build.
    on_node: Optional[NodeCallback] = None


@dataclass
class BuildResult:
    root: RootNode
    error: Optional[BaseException] = None
    line_count: int = 0
    node_count: int = 0
    style: Optional[IndentStyle] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> RootNode:
        if self.error is not None:
            raise self.error
        return self.root


def _find_block(block: Node, level: int) -> Node:
    target = level - 1
    while block.level != target:
        parent = block.parent
        if parent is None:
            raise RuntimeError(f"No ancestor at level {target} while unindenting")
        block = parent
    return block


def build_node_tree(
    scanner: LineScanner,
    root: RootNode | None = None,
    options: ParseOptions | None = None,
) -> BuildResult:
    """Read lines from ``scanner`` and build a tree under ``root``.

    A line may be at most one level deeper than the previous non-blank line;
    it may return to any shallower level. Lines that are empty once their
    indentation is stripped are skipped.

    Failures are not raised. The first structural, callback or source error
    stops the build and is returned in ``BuildResult.error`` together with
    the tree built up to that point.
    """
    if root is None:
        root = RootNode()
    if options is None:
        options = ParseOptions()

    root.reset()
    result = BuildResult(root=root)

    block: Node = root
    previous: Node = root

    while scanner.advance():
        line = scanner.current_line()
        if not line.text:
            continue

        if line.level == previous.level:
            pass
        elif line.level == previous.level + 1:
            block = previous
        elif line.level < previous.level:
            block = _find_block(block, line.level)
        elif not options.ignore_extra_indentation:
            result.error = ExtraIndentationError(line.number)
            break
        else:
            message = (
                f"Extra indentation at line {line.number} treated as level "
                f"{previous.level + 1} (was {line.level})"
            )
            LOGGER.warning(message)
            result.warnings.append(message)
            line = replace(line, level=previous.level + 1)
            block = previous

        node = attach(block, line)
        previous = node
        result.node_count += 1

        if options.on_node is not None:
            try:
                options.on_node(node, options)
            except Exception as exc:
                result.error = exc
                break

    if result.error is None and scanner.error is not None:
        result.error = scanner.error

    result.line_count = scanner.line_count
    result.style = scanner.style

    if result.error is not None:
        LOGGER.debug("Build stopped after %d lines: %s", result.line_count, result.error)
    else:
        LOGGER.debug(
            "Built tree with %d nodes from %d lines (style=%s)",
            result.node_count,
            result.line_count,
            result.style,
        )
    return result


def parse_text(
    text: str,
    style: IndentStyle | None = None,
    options: ParseOptions | None = None,
    max_line_length: int | None = MAX_LINE_LENGTH,
) -> RootNode:
    """Parse indented text and return the root, raising the first build error."""
    scanner = LineScanner.from_text(text, style, max_line_length=max_line_length)
    return build_node_tree(scanner, options=options).raise_for_error()


def parse_file(
    path: Path,
    style: IndentStyle | None = None,
    options: ParseOptions | None = None,
    encoding: str = "utf-8",
    max_line_length: int | None = MAX_LINE_LENGTH,
) -> BuildResult:
    """Build a tree from a file. Opening the file may raise OSError."""
    with path.open(encoding=encoding, newline="\n") as handle:
        scanner = LineScanner(handle, style, encoding=encoding, max_line_length=max_line_length)
        return build_node_tree(scanner, options=options)
