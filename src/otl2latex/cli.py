"""Command-line entry point for otl2latex."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from otl2latex.config import (
    OTL2LATEX_ALLOW_SCRIPTS,
    OTL2LATEX_ESCAPE,
    OTL2LATEX_LOG_LEVEL,
    OTL2LATEX_STYLE_CODE,
)
from otl2latex.document import convert_outline, output_path_for
from otl2latex.exceptions import Otl2latexError
from otl2latex.scripting import DisabledScriptEvaluator, PythonScriptEvaluator
from otl2latex.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="otl2latex",
        description="Convert a tab-indented outline into a LaTeX document.",
    )
    parser.add_argument("input", type=Path, help="Outline file (.otl)")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("-o", "--output", type=Path, help="Output path (default: input with .tex suffix)")
    target.add_argument("--stdout", action="store_true", help="Write the document to standard output")
    parser.add_argument(
        "-f",
        "--format",
        default=OTL2LATEX_STYLE_CODE,
        help=f"Initial style code (default: {OTL2LATEX_STYLE_CODE})",
    )
    parser.add_argument("--no-escape", action="store_true", help="Do not escape LaTeX special characters")
    parser.add_argument("--show-preliminary", action="store_true", help="Render !preliminary subtrees")
    parser.add_argument("--no-scripts", action="store_true", help="Do not evaluate !ruby blocks")
    parser.add_argument("--log-level", default=OTL2LATEX_LOG_LEVEL, help="Logging level name")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    allow_scripts = OTL2LATEX_ALLOW_SCRIPTS and not args.no_scripts
    evaluator = PythonScriptEvaluator() if allow_scripts else DisabledScriptEvaluator()

    logger.info("Converting outline", extra={"input": str(args.input), "format": args.format})
    try:
        result = convert_outline(
            args.input,
            style_code=args.format,
            escaping=OTL2LATEX_ESCAPE and not args.no_escape,
            show_preliminary=args.show_preliminary,
            evaluator=evaluator,
        )
        if args.stdout:
            sys.stdout.write(result.document)
            return 0
        target = args.output or output_path_for(args.input)
        target.write_text(result.document, encoding="utf-8")
    except (Otl2latexError, OSError, UnicodeDecodeError) as exc:
        logger.error("Conversion failed", extra={"input": str(args.input), "error": str(exc)})
        print(f"otl2latex: {exc}", file=sys.stderr)
        return 1

    logger.info("Conversion completed", extra={"input": str(args.input), "output": str(target)})
    return 0
