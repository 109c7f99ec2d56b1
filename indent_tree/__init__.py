"""Parse indentation-structured text into a tree of lines."""

from indent_tree.builder import BuildResult, ParseOptions, build_node_tree, parse_file, parse_text
from indent_tree.config import IndentTreeConfig, load_config
from indent_tree.errors import ExtraIndentationError, IndentTreeError, LineTooLongError, SourceReadError
from indent_tree.scanner import Line, LineScanner, StyleState
from indent_tree.style import SPACE, TAB, IndentStyle, detect_style, parse_style, spaces, tabs
from indent_tree.tree import ContentNode, Node, RootNode, iter_lines, postorder_nodes, traverse_all_nodes
from indent_tree.visualizer import export_tree_json, node_to_dict, print_tree, tree_to_dict

__all__ = [
    "SPACE",
    "TAB",
    "BuildResult",
    "ContentNode",
    "ExtraIndentationError",
    "IndentStyle",
    "IndentTreeConfig",
    "IndentTreeError",
    "Line",
    "LineScanner",
    "LineTooLongError",
    "Node",
    "ParseOptions",
    "RootNode",
    "SourceReadError",
    "StyleState",
    "build_node_tree",
    "detect_style",
    "export_tree_json",
    "iter_lines",
    "load_config",
    "node_to_dict",
    "parse_file",
    "parse_style",
    "parse_text",
    "postorder_nodes",
    "print_tree",
    "spaces",
    "tabs",
    "traverse_all_nodes",
    "tree_to_dict",
]
