"""Tests for whole-document conversion."""

from __future__ import annotations

from pathlib import Path

from otl2latex.document import (
    DEFAULT_PACKAGES,
    build_document,
    collect_preamble,
    convert_file,
    convert_outline,
    output_path_for,
)
from otl2latex.outline import parse_outline
from otl2latex.scripting import DisabledScriptEvaluator


class TestCollectPreamble:
    """Tests for collect_preamble function."""

    def test_collects_preamble_text_and_children(self) -> None:
        forest = parse_outline(
            [
                "!documentclass[a4paper]{article}",
                "!preamble \\usepackage{amsmath}",
                "\t\\usepackage{graphicx}",
                "Body",
                "\t!PREAMBLE \\title{Notes}",
            ]
        )

        documentclass, preamble = collect_preamble(forest)

        assert documentclass == "[a4paper]{article}"
        assert preamble == ["\\usepackage{amsmath}", "\\usepackage{graphicx}", "\\title{Notes}"]

    def test_last_documentclass_wins(self) -> None:
        forest = parse_outline(["!documentclass{article}", "!documentclass{report}"])

        assert collect_preamble(forest) == ("{report}", [])

    def test_no_directives(self) -> None:
        assert collect_preamble(parse_outline(["Text"])) == (None, [])


class TestBuildDocument:
    """Tests for build_document function."""

    def test_wraps_body(self) -> None:
        document = build_document("BODY", source_name="notes.otl", preamble=["\\title{T}"])
        lines = document.splitlines()

        assert lines[0] == "% Autogenerated by otl2latex from notes.otl."
        assert lines[2] == "\\documentclass{article}"
        assert lines[3 : 3 + len(DEFAULT_PACKAGES)] == list(DEFAULT_PACKAGES)
        assert lines[-4:] == ["\\title{T}", "\\begin{document}", "BODY", "\\end{document}"]

    def test_custom_documentclass(self) -> None:
        document = build_document("", source_name="x.otl", documentclass="[12pt]{report}")

        assert "\\documentclass[12pt]{report}\n" in document


class TestConvert:
    """Tests for convert_outline and convert_file."""

    def test_output_path_keeps_base_name(self) -> None:
        assert output_path_for(Path("dir/notes.otl")) == Path("dir/notes.tex")

    def test_convert_outline(self, write_outline) -> None:
        path = write_outline("notes.otl", "!documentclass{report}\nTitle\n\tbody text\n")

        result = convert_outline(path, style_code="SN")

        assert result.documentclass == "{report}"
        assert result.body.splitlines() == [
            f"\\section{{Title}} % {path}:2",
            f"\tbody text % {path}:3",
        ]
        assert "\\documentclass{report}" in result.document
        assert result.document.endswith("\\end{document}\n")

    def test_convert_outline_options(self, write_outline) -> None:
        path = write_outline("notes.otl", "!preliminary a_b\n!ruby print(1)\n")

        result = convert_outline(
            path,
            style_code="N",
            escaping=False,
            show_preliminary=True,
            evaluator=DisabledScriptEvaluator(),
        )

        lines = result.body.splitlines()
        assert lines[0] == f"a_b % {path}:1"
        assert lines[1] == "\\begin{verbatim}"

    def test_main_file_counts_as_included(self, write_outline) -> None:
        path = write_outline("self.otl", "Text\n!include- self.otl\n")

        result = convert_outline(path, style_code="N")

        assert result.body.splitlines() == [f"Text % {path}:1", "% !include- self.otl"]

    def test_convert_file_writes_derived_path(self, write_outline) -> None:
        path = write_outline("notes.otl", "Hello\n")

        target = convert_file(path, style_code="N")

        assert target == path.with_suffix(".tex")
        assert f"Hello % {path}:1" in target.read_text(encoding="utf-8")

    def test_convert_file_explicit_output(self, write_outline, tmp_path: Path) -> None:
        path = write_outline("notes.otl", "Hello\n")
        output = tmp_path / "out" / "doc.tex"
        output.parent.mkdir()

        assert convert_file(path, output, style_code="N") == output
        assert output.exists()
