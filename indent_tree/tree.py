"""Node tree produced from indented lines."""

from __future__ import annotations

from typing import Iterator

from indent_tree.scanner import Line


ROOT_LEVEL = -1
ROOT_NUMBER = -1


class Node:
    """Common behaviour of the root and content nodes.

    A node owns its children. Children keep a reference back to their
    parent, used for upward walks.
    """

    __slots__ = ("children",)

    def __init__(self) -> None:
        self.children: list[ContentNode] = []

    @property
    def level(self) -> int:
        raise NotImplementedError

    @property
    def number(self) -> int:
        raise NotImplementedError

    @property
    def text(self) -> str:
        raise NotImplementedError

    @property
    def parent(self) -> Node | None:
        return None

    @property
    def line(self) -> Line | None:
        return None

    @property
    def is_root(self) -> bool:
        return False

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    @property
    def depth(self) -> int:
        """Number of ancestors (root = 0)."""
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    @property
    def path(self) -> list[str]:
        """Texts from the top-level ancestor down to this node."""
        parts: list[str] = []
        current: Node | None = self
        while current is not None and not current.is_root:
            parts.append(current.text)
            current = current.parent
        parts.reverse()
        return parts

    def iter_descendants(self) -> Iterator[ContentNode]:
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class RootNode(Node):
    """Synthetic tree root: no line, no parent, level -1."""

    __slots__ = ()

    @property
    def level(self) -> int:
        return ROOT_LEVEL

    @property
    def number(self) -> int:
        return ROOT_NUMBER

    @property
    def text(self) -> str:
        return ""

    @property
    def is_root(self) -> bool:
        return True

    def reset(self) -> None:
        self.children = []

    def __repr__(self) -> str:
        return f"RootNode(children={len(self.children)})"


class ContentNode(Node):
    __slots__ = ("_line", "_parent")

    def __init__(self, line: Line, parent: Node) -> None:
        super().__init__()
        self._line = line
        self._parent = parent

    @property
    def line(self) -> Line:
        return self._line

    @property
    def parent(self) -> Node | None:
        return self._parent

    @property
    def level(self) -> int:
        return self._line.level

    @property
    def number(self) -> int:
        return self._line.number

    @property
    def text(self) -> str:
        return self._line.text

    def __repr__(self) -> str:
        return f"ContentNode(number={self.number}, level={self.level}, text={self.text!r})"


def attach(parent: Node, line: Line) -> ContentNode:
    node = ContentNode(line, parent)
    parent.children.append(node)
    return node


def traverse_all_nodes(root: Node) -> list[Node]:
    """Return all nodes in pre-order, including root."""
    return [root, *root.iter_descendants()]


def postorder_nodes(root: Node) -> list[Node]:
    """Return tree nodes in post-order, including root as the last element."""
    ordered: list[Node] = []

    def visit(node: Node) -> None:
        for child in node.children:
            visit(child)
        ordered.append(node)

    visit(root)
    return ordered


def iter_lines(root: Node) -> Iterator[Line]:
    """Yield the Line of every content node in attachment order."""
    for node in root.iter_descendants():
        yield node.line
