"""Tests for the outline tree builder."""

from __future__ import annotations

from pathlib import Path

from otl2latex.outline import flatten_values, line_depth, parse_outline, parse_outline_file


def _values(nodes) -> list[str | None]:
    return [node.value for node in nodes]


class TestParseOutline:
    """Tests for parse_outline function."""

    def test_blank_lines_only_yield_empty_forest(self) -> None:
        assert parse_outline(["", "   ", "\t\t", "\n"]) == []

    def test_siblings_at_root(self) -> None:
        forest = parse_outline(["one", "two", "three"])
        assert _values(forest) == ["one", "two", "three"]
        assert all(not node.children for node in forest)

    def test_single_level_step_inserts_no_placeholder(self) -> None:
        forest = parse_outline(["parent", "\tchild", "\t\tgrandchild"])

        assert _values(forest) == ["parent"]
        child = forest[0].children[0]
        assert child.value == "child"
        assert child.children[0].value == "grandchild"

    def test_multi_level_jump_inserts_placeholders(self) -> None:
        """A jump of k levels inserts exactly k-1 placeholders."""
        forest = parse_outline(["top", "\t\t\tdeep"])

        first = forest[0].children[0]
        second = first.children[0]
        deep = second.children[0]
        assert first.is_placeholder
        assert second.is_placeholder
        assert deep.value == "deep"
        assert not deep.children

    def test_leading_indent_creates_root_placeholder(self) -> None:
        forest = parse_outline(["\tindented"])

        assert len(forest) == 1
        assert forest[0].is_placeholder
        assert forest[0].children[0].value == "indented"

    def test_dedent_returns_to_ancestor(self) -> None:
        forest = parse_outline(["a", "\tb", "\t\tc", "d", "\te"])

        assert _values(forest) == ["a", "d"]
        assert _values(forest[0].children) == ["b"]
        assert _values(forest[1].children) == ["e"]

    def test_blank_lines_do_not_affect_depth(self) -> None:
        forest = parse_outline(["a", "", "\tb", "\t", "\tc"])

        assert _values(forest[0].children) == ["b", "c"]

    def test_tabs_removed_and_trailing_whitespace_stripped(self) -> None:
        forest = parse_outline(["a", "\tb\tc  \n"])

        assert forest[0].children[0].value == "bc"

    def test_leading_spaces_are_kept(self) -> None:
        forest = parse_outline(["lead", " continued"])

        assert _values(forest) == ["lead", " continued"]

    def test_source_labels_use_physical_line_numbers(self) -> None:
        forest = parse_outline(["a", "", "b"], source_name="notes.otl")

        assert forest[0].source == "notes.otl:1"
        assert forest[1].source == "notes.otl:3"

    def test_placeholder_carries_source_of_deeper_line(self) -> None:
        forest = parse_outline(["a", "\t\tb"], source_name="x.otl")

        assert forest[0].children[0].source == "x.otl:2"


class TestParseOutlineFile:
    """Tests for parse_outline_file function."""

    def test_reads_file_and_labels_with_path(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.otl"
        path.write_text("Title\n\tBody\n", encoding="utf-8")

        forest = parse_outline_file(path)

        assert forest[0].value == "Title"
        assert forest[0].children[0].source == f"{path}:2"


class TestHelpers:
    """Tests for line_depth and flatten_values."""

    def test_line_depth_counts_leading_tabs(self) -> None:
        assert line_depth("text") == 0
        assert line_depth("\t\ttext\t") == 2

    def test_flatten_values_is_depth_first_and_skips_placeholders(self) -> None:
        forest = parse_outline(["!ruby", "\ta", "\t\tb", "\t\t\t\tc", "\td"])

        assert flatten_values(forest[0]) == ["a", "b", "c", "d"]
