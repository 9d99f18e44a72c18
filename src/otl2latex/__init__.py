"""otl2latex: convert tab-indented outlines into LaTeX."""

from otl2latex.document import convert_file, convert_outline
from otl2latex.exceptions import (
    IncludeError,
    Otl2latexError,
    OutlineError,
    ScriptError,
    StyleError,
)
from otl2latex.outline import parse_outline, parse_outline_file
from otl2latex.renderer import RenderContext, render_forest, render_nodes
from otl2latex.schemas import ConversionResult, Node, Style
from otl2latex.styles import STYLE_TABLE, StyleStack

__all__ = [
    "STYLE_TABLE",
    "ConversionResult",
    "IncludeError",
    "Node",
    "Otl2latexError",
    "OutlineError",
    "RenderContext",
    "ScriptError",
    "Style",
    "StyleError",
    "StyleStack",
    "convert_file",
    "convert_outline",
    "parse_outline",
    "parse_outline_file",
    "render_forest",
    "render_nodes",
]
