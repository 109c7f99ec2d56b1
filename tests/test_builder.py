from pathlib import Path
import tempfile
import unittest

from indent_tree.builder import ParseOptions, build_node_tree, parse_file, parse_text
from indent_tree.errors import ExtraIndentationError, SourceReadError
from indent_tree.scanner import LineScanner
from indent_tree.style import spaces, tabs
from indent_tree.tree import RootNode, iter_lines


def _shape(node) -> list:
    return [(child.text, child.level, _shape(child)) for child in node.children]


def _build(text: str, style=tabs(1), options: ParseOptions | None = None):
    return build_node_tree(LineScanner.from_text(text, style), options=options)


class _FailingSource:
    def __init__(self, error: Exception, good_lines: list[str]) -> None:
        self.error = error
        self.good_lines = good_lines

    def __iter__(self):
        yield from self.good_lines
        raise self.error


class BuildNodeTreeTests(unittest.TestCase):
    def test_one_level_steps(self) -> None:
        result = _build("0\n\t1\n\t\t2\n")

        self.assertTrue(result.ok)
        self.assertEqual(_shape(result.root), [("0", 0, [("1", 1, [("2", 2, [])])])])
        self.assertEqual(result.node_count, 3)
        self.assertEqual(result.line_count, 3)

    def test_autodetected_spaces_give_same_shape(self) -> None:
        tab_result = _build("0\n\t1\n\t\t2\n")
        space_result = _build("0\n  1\n    2\n", style=None)

        self.assertTrue(space_result.ok)
        self.assertEqual(space_result.style, spaces(2))
        self.assertEqual(_shape(space_result.root), _shape(tab_result.root))

    def test_unindent_one_level(self) -> None:
        root = _build("0\n\t1\n\t\t2\n\t1\n0\n").raise_for_error()

        self.assertEqual(
            _shape(root),
            [
                ("0", 0, [("1", 1, [("2", 2, [])]), ("1", 1, [])]),
                ("0", 0, []),
            ],
        )

    def test_unindent_several_levels_at_once(self) -> None:
        root = _build("0\n\t1\n\t\t2\n\t\t\t3\n\t\t\t\t4\n\t1\n0\n").raise_for_error()

        first = root.children[0]
        self.assertEqual(len(root.children), 2)
        self.assertEqual([child.number for child in first.children], [2, 6])
        self.assertEqual(first.children[0].children[0].children[0].children[0].text, "4")
        self.assertIs(root.children[1].parent, root)

    def test_unindent_straight_to_zero(self) -> None:
        root = _build("0\n\t1\n\t\t2\n\t\t\t3\n0\n").raise_for_error()
        self.assertEqual([child.number for child in root.children], [1, 5])

    def test_siblings_at_each_level(self) -> None:
        text = "0\n\t1\n\t1\n\t\t2\n\t\t2\n\t\t2\n\t\t\t3\n\t\t\t3\n"
        root = _build(text).raise_for_error()

        level_one = root.children[0].children
        self.assertEqual(len(level_one), 2)
        self.assertEqual(len(level_one[1].children), 3)
        self.assertEqual(len(level_one[1].children[2].children), 2)

    def test_blank_lines_are_skipped(self) -> None:
        text = "0\n\n\t1\n\n\t\t2\n\n\t1\n\n0\n"
        result = _build(text)

        self.assertTrue(result.ok)
        self.assertEqual(result.node_count, 5)
        self.assertEqual(result.line_count, 9)
        self.assertEqual([line.number for line in iter_lines(result.root)], [1, 3, 5, 7, 9])

    def test_blank_lines_do_not_change_shape(self) -> None:
        dense = _build("0\n\t1\n\t\t2\n\t1\n0\n")
        sparse = _build("\n0\n\n\n\t1\n\t\t2\n\n\t1\n\n0\n\n")

        self.assertEqual(_shape(dense.root), _shape(sparse.root))

    def test_indented_blank_line_is_skipped(self) -> None:
        root = _build("0\n\t\n\t\t\n\t1\n").raise_for_error()
        self.assertEqual(_shape(root), [("0", 0, [("1", 1, [])])])

    def test_empty_input(self) -> None:
        result = _build("")

        self.assertTrue(result.ok)
        self.assertEqual(result.root.children, [])
        self.assertEqual(result.node_count, 0)

    def test_round_trip_reproduces_non_blank_lines(self) -> None:
        text = "a\n\tb\n\n\t\tc\n\td\ne\n\n\tf\n"
        result = _build(text)
        expected = [
            (line.level, line.number, line.text)
            for line in LineScanner.from_text(text, tabs(1))
            if line.text
        ]

        self.assertEqual(
            [(line.level, line.number, line.text) for line in iter_lines(result.root)],
            expected,
        )

    def test_supplied_root_is_reset_and_reused(self) -> None:
        root = RootNode()
        first = build_node_tree(LineScanner.from_text("a\nb\n"), root=root)
        second = build_node_tree(LineScanner.from_text("c\n"), root=root)

        self.assertIs(first.root, root)
        self.assertIs(second.root, root)
        self.assertEqual([child.text for child in root.children], ["c"])


class ExtraIndentationTests(unittest.TestCase):
    TEXT = "0\n\t1\n\t\t\t3\n"

    def test_extra_indentation_fails_by_default(self) -> None:
        result = _build(self.TEXT)

        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, ExtraIndentationError)
        self.assertEqual(result.error.line_number, 3)
        self.assertEqual(str(result.error), "Extra indentation at line 3")
        self.assertEqual(_shape(result.root), [("0", 0, [("1", 1, [])])])

    def test_extra_indentation_on_first_line(self) -> None:
        result = _build("\t\tx\n")
        self.assertIsInstance(result.error, ExtraIndentationError)
        self.assertEqual(result.error.line_number, 1)

    def test_build_stops_at_first_error(self) -> None:
        scanner = LineScanner.from_text(self.TEXT + "0\n0\n", tabs(1))
        result = build_node_tree(scanner)

        self.assertEqual(result.line_count, 3)
        self.assertTrue(scanner.advance())

    def test_ignore_extra_indentation(self) -> None:
        result = _build(self.TEXT, options=ParseOptions(ignore_extra_indentation=True))

        self.assertTrue(result.ok)
        self.assertEqual(_shape(result.root), [("0", 0, [("1", 1, [("3", 2, [])])])])
        node = result.root.children[0].children[0].children[0]
        self.assertEqual(node.number, 3)
        self.assertEqual(len(result.warnings), 1)

    def test_tolerated_jump_keeps_later_unindent_valid(self) -> None:
        text = "0\n\t1\n\t\t\t3\n\t\t\t3\n\t\t2\n0\n"
        with self.assertLogs("indent_tree.builder", level="WARNING"):
            result = _build(text, options=ParseOptions(ignore_extra_indentation=True))

        self.assertTrue(result.ok)
        one = result.root.children[0].children[0]
        self.assertEqual([child.number for child in one.children], [3, 5])
        self.assertEqual([child.number for child in one.children[0].children], [4])
        self.assertEqual([child.number for child in result.root.children], [1, 6])

    def test_raise_for_error(self) -> None:
        with self.assertRaises(ExtraIndentationError):
            parse_text(self.TEXT, tabs(1))


class CallbackTests(unittest.TestCase):
    def test_callback_sees_every_node_in_order(self) -> None:
        seen: list[tuple[int, int]] = []
        options = ParseOptions(on_node=lambda node, opts: seen.append((node.number, node.level)))

        result = _build("0\n\n\t1\n\t\t2\n0\n", options=options)

        self.assertTrue(result.ok)
        self.assertEqual(seen, [(1, 0), (3, 1), (4, 2), (5, 0)])

    def test_callback_receives_options_and_attached_node(self) -> None:
        calls = []

        def on_node(node, opts) -> None:
            calls.append(opts)
            self.assertIn(node, node.parent.children)

        options = ParseOptions(on_node=on_node)
        _build("a\n\tb\n", options=options)

        self.assertEqual(len(calls), 2)
        self.assertIs(calls[0], options)

    def test_callback_failure_propagates_unchanged(self) -> None:
        failure = KeyError("bad node")

        def on_node(node, opts) -> None:
            if node.text == "2":
                raise failure

        result = _build("0\n\t1\n\t\t2\n\t1\n", options=ParseOptions(on_node=on_node))

        self.assertIs(result.error, failure)
        self.assertEqual(result.node_count, 3)
        self.assertEqual(_shape(result.root), [("0", 0, [("1", 1, [("2", 2, [])])])])
        with self.assertRaises(KeyError):
            result.raise_for_error()


class SourceFailureTests(unittest.TestCase):
    def test_read_failure_is_reported_with_partial_tree(self) -> None:
        error = OSError("connection reset")
        scanner = LineScanner(_FailingSource(error, ["0\n", "\t1\n"]), tabs(1))
        result = build_node_tree(scanner)

        self.assertIs(result.error, error)
        self.assertIs(scanner.error, error)
        self.assertEqual(_shape(result.root), [("0", 0, [("1", 1, [])])])


class ParseFileTests(unittest.TestCase):
    def test_utf16_file_is_decoded_before_splitting(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "wide.txt"
            path.write_text("a\n\tb\n\t\tc\n", encoding="utf-16")

            result = parse_file(path, encoding="utf-16")

        self.assertTrue(result.ok)
        self.assertEqual(result.style, tabs(1))
        self.assertEqual(_shape(result.root), [("a", 0, [("b", 1, [("c", 2, [])])])])

    def test_crlf_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "crlf.txt"
            path.write_bytes(b"a\r\n  b\r\n")

            result = parse_file(path)

        self.assertEqual(_shape(result.root), [("a", 0, [("b", 1, [])])])

    def test_undecodable_file_is_a_source_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "binary.txt"
            path.write_bytes(b"ok\n\xff\xfe\n")

            result = parse_file(path)

        self.assertIsInstance(result.error, SourceReadError)
        self.assertIsInstance(result.error.__cause__, UnicodeDecodeError)


if __name__ == "__main__":
    unittest.main()
