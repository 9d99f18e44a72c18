"""Wrap a rendered outline body into a complete LaTeX document."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from otl2latex.config import (
    OTL2LATEX_DOCUMENTCLASS,
    OTL2LATEX_OUTPUT_SUFFIX,
    OTL2LATEX_STYLE_CODE,
)
from otl2latex.outline import parse_outline_file
from otl2latex.renderer import RenderContext, render_forest
from otl2latex.schemas import ConversionResult, Node
from otl2latex.scripting import PythonScriptEvaluator, ScriptEvaluator
from otl2latex.styles import StyleStack
from otl2latex.utils.logging_config import get_logger

logger = get_logger(__name__)

_DOCUMENTCLASS_RE = re.compile(r"^!documentclass\b(?P<args>.*)$", re.IGNORECASE)
_PREAMBLE_RE = re.compile(r"^!preamble(?:\s+(?P<text>.*))?$", re.IGNORECASE)

DEFAULT_PACKAGES = (
    "\\usepackage[utf8]{inputenc}",
    "\\usepackage{hyperref}",
)


def collect_preamble(nodes: Iterable[Node]) -> tuple[str | None, list[str]]:
    """Gather ``!documentclass`` and ``!preamble`` lines from the forest.

    The last ``!documentclass`` wins. A ``!preamble`` node contributes its
    trailing text and the raw values of its children.

    Returns:
        Tuple of (documentclass arguments or None, preamble lines).
    """
    documentclass: str | None = None
    preamble: list[str] = []

    def _walk(items: Iterable[Node]) -> None:
        nonlocal documentclass
        for node in items:
            value = node.value or ""
            class_match = _DOCUMENTCLASS_RE.match(value)
            preamble_match = _PREAMBLE_RE.match(value)
            if class_match:
                documentclass = class_match.group("args").strip()
            elif preamble_match:
                if preamble_match.group("text"):
                    preamble.append(preamble_match.group("text"))
                preamble.extend(child.value for child in node.children if child.value is not None)
                continue
            _walk(node.children)

    _walk(nodes)
    return documentclass, preamble


def build_document(
    body: str,
    *,
    source_name: str,
    documentclass: str | None = None,
    preamble: Iterable[str] = (),
) -> str:
    """Assemble banner, header, body and footer."""
    lines = [
        f"% Autogenerated by otl2latex from {source_name}.",
        "% Do not edit: changes are overwritten on the next conversion.",
        f"\\documentclass{documentclass or OTL2LATEX_DOCUMENTCLASS}",
        *DEFAULT_PACKAGES,
        *preamble,
        "\\begin{document}",
        body,
        "\\end{document}",
    ]
    return "\n".join(lines) + "\n"


def output_path_for(input_path: Path, suffix: str = OTL2LATEX_OUTPUT_SUFFIX) -> Path:
    """Derive the output path: same base name, LaTeX suffix."""
    return input_path.with_suffix(suffix)


def convert_outline(
    path: Path,
    *,
    style_code: str = OTL2LATEX_STYLE_CODE,
    escaping: bool = True,
    show_preliminary: bool = False,
    evaluator: ScriptEvaluator | None = None,
) -> ConversionResult:
    """Parse, render and wrap one outline file.

    Args:
        path: Outline file to convert.
        style_code: Initial style code, e.g. ``"SSSI"``.
        escaping: Whether text is escaped from the start.
        show_preliminary: Render ``!preliminary`` subtrees from the start.
        evaluator: Backend for script directives.

    Returns:
        ConversionResult with the body and the complete document.

    Raises:
        Otl2latexError: On unknown styles, malformed indentation or missing
            includes.
    """
    forest = parse_outline_file(path)
    documentclass, preamble = collect_preamble(forest)

    context = RenderContext(
        evaluator=evaluator or PythonScriptEvaluator(),
        show_preliminary=show_preliminary,
    )
    # The top-level file counts as included for !include-
    context.included[str(path.resolve())] = True
    lines = render_forest(forest, StyleStack.parse(style_code), context, escaping=escaping)

    body = "\n".join(lines)
    document = build_document(
        body,
        source_name=path.name,
        documentclass=documentclass,
        preamble=preamble,
    )
    logger.debug("Rendered %s into %d lines", path, len(lines))
    return ConversionResult(
        body=body,
        document=document,
        documentclass=documentclass or OTL2LATEX_DOCUMENTCLASS,
        preamble=preamble,
    )


def convert_file(
    input_path: Path,
    output_path: Path | None = None,
    *,
    style_code: str = OTL2LATEX_STYLE_CODE,
    escaping: bool = True,
    show_preliminary: bool = False,
    evaluator: ScriptEvaluator | None = None,
) -> Path:
    """Convert ``input_path`` and write the document next to it.

    Returns:
        The path written.
    """
    result = convert_outline(
        input_path,
        style_code=style_code,
        escaping=escaping,
        show_preliminary=show_preliminary,
        evaluator=evaluator,
    )
    target = output_path or output_path_for(input_path)
    target.write_text(result.document, encoding="utf-8")
    return target
