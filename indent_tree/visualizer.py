"""Tree rendering and serialization utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from indent_tree.builder import BuildResult
from indent_tree.tree import Node


def node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "number": node.number,
        "level": node.level,
        "text": node.text,
        "is_leaf": node.is_leaf,
        "children": [node_to_dict(child) for child in node.children],
    }


def tree_to_dict(result: BuildResult) -> dict[str, Any]:
    """Serialize a build result into a JSON-compatible dictionary."""
    return {
        "style": str(result.style) if result.style is not None else None,
        "line_count": result.line_count,
        "node_count": result.node_count,
        "tree": node_to_dict(result.root),
    }


def export_tree_json(result: BuildResult, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(tree_to_dict(result), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def print_tree(root: Node) -> None:
    """Print a readable ASCII tree with line numbers and levels."""

    def print_node(node: Node, prefix: str, is_last: bool) -> None:
        connector = "`-- " if is_last else "|-- "
        print(f"{prefix}{connector}[L{node.level}:{node.number}] {node.text}")

        child_prefix = prefix + ("    " if is_last else "|   ")
        for index, child in enumerate(node.children):
            print_node(child, child_prefix, index == len(node.children) - 1)

    for index, child in enumerate(root.children):
        print_node(child, "", index == len(root.children) - 1)
