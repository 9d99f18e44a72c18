"""Structural directives embedded in outline lines.

A directive is a node value starting with ``!``. Directives are tried in
a fixed priority order and the first whose pattern matches handles the node.
Anything that matches no pattern, including unknown ``!`` lines, is ordinary
text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Final

from otl2latex.exceptions import IncludeError, ScriptError
from otl2latex.outline import flatten_values
from otl2latex.schemas import Node
from otl2latex.styles import StyleStack
from otl2latex.utils.logging_config import get_logger

if TYPE_CHECKING:
    from otl2latex.renderer import SiblingRenderer

logger = get_logger(__name__)

_TRUE_FLAGS: Final[frozenset[str]] = frozenset({"1", "true"})


class Outcome(Enum):
    """What a directive did with its node."""

    CONTINUE = "continue"
    RENDERED = "rendered"
    STYLE_CHANGED = "style_changed"
    ESCAPE_CHANGED = "escape_changed"
    INCLUDED = "included"


@dataclass(frozen=True)
class DirectiveResult:
    """Result of dispatching one node.

    Attributes:
        outcome: Tag describing the result.
        value: Text for the generic rendering path (CONTINUE).
        styles: New style stack (STYLE_CHANGED, INCLUDED).
        escaping: New escaping flag (ESCAPE_CHANGED, INCLUDED).
        temporary: Whether a style change reverts after one line.
    """

    outcome: Outcome
    value: str | None = None
    styles: StyleStack | None = None
    escaping: bool | None = None
    temporary: bool = False


RENDERED: Final[DirectiveResult] = DirectiveResult(Outcome.RENDERED)

Handler = Callable[[re.Match[str], Node, "SiblingRenderer"], DirectiveResult]


@dataclass(frozen=True)
class Directive:
    name: str
    pattern: re.Pattern[str]
    handler: Handler


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def _source_dir(source: str) -> Path:
    """Directory of the file a source label points into."""
    file_name, _, _ = source.rpartition(":")
    return Path(file_name or ".").parent


def _read_lines(path: Path, source: str) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise IncludeError(f"{source}: cannot include {path}: {exc}") from exc


def _emit_annotations(nodes: list[Node], level: SiblingRenderer, depth: int) -> None:
    """Write a subtree as LaTeX comment lines."""
    for node in nodes:
        if node.value is not None:
            level.emit(f"% {node.value}", depth=depth)
        _emit_annotations(node.children, level, depth + 1)


def _include(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    context = level.context
    level.emit(f"% {node.value}")
    once = match.group("once") is not None
    styles, escaping = level.styles, level.escaping

    for name in (match.group("paths") or "").split():
        path = Path(name)
        if not path.is_absolute():
            path = _source_dir(node.source) / path
        key = str(path.resolve())
        if once and context.included.get(key):
            logger.debug("Skipping %s, already included", path)
            continue
        context.included[key] = True

        if name.endswith(context.outline_suffix):
            logger.debug("Including outline %s at depth %d", path, level.depth)
            styles, escaping = level.render_outline(path, styles, escaping)
        else:
            logger.debug("Including raw file %s", path)
            for line in _read_lines(path, node.source):
                context.emit(line)

    return DirectiveResult(Outcome.INCLUDED, styles=styles, escaping=escaping)


def _verbatim(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    text = match.group("text")
    if text:
        level.context.emit(text)
    for child in node.children:
        if child.value is not None:
            level.context.emit(child.value)
    return RENDERED


def _ignore(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    return RENDERED


def _show_preliminary(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    level.context.show_preliminary = True
    return RENDERED


def _comment(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    level.emit(f"% {match.group('text') or ''}".rstrip())
    _emit_annotations(node.children, level, level.depth + 1)
    return RENDERED


def _preliminary(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    text = match.group("text") or ""
    if level.context.show_preliminary:
        return DirectiveResult(Outcome.CONTINUE, value=text)
    level.emit(f"% PRELIMINARY {text}".rstrip())
    _emit_annotations(node.children, level, level.depth + 1)
    return RENDERED


def _escape(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    flag = (match.group("flag") or "").lower()
    return DirectiveResult(Outcome.ESCAPE_CHANGED, escaping=flag in _TRUE_FLAGS)


def _format(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    styles = level.styles.update(level.depth, match.group("code"))
    temporary = match.group("tmp") is not None
    logger.debug("%s: style switched to %s (temporary=%s)", node.source, styles.code, temporary)
    return DirectiveResult(Outcome.STYLE_CHANGED, styles=styles, temporary=temporary)


def _diagnostic_block(node: Node, lines: list[str], error: ScriptError) -> list[str]:
    return [
        "\\begin{verbatim}",
        f"Script evaluation failed at {node.source}: {error}",
        *lines,
        "\\end{verbatim}",
    ]


def _script(match: re.Match[str], node: Node, level: SiblingRenderer) -> DirectiveResult:
    lines = flatten_values(node)
    code = match.group("code")
    if code:
        lines.insert(0, code)
    verbose = match.group("verbose") is not None

    try:
        output = level.context.evaluator.evaluate(lines, verbose)
    except ScriptError as exc:
        logger.warning("Script block at %s failed: %s", node.source, exc)
        output = _diagnostic_block(node, lines, exc)

    if isinstance(output, str):
        output = [output]
    for line in output:
        level.context.emit(line)
    return RENDERED


DIRECTIVES: Final[tuple[Directive, ...]] = (
    Directive("include", _compile(r"!include(?P<once>-)?(?:\s+(?P<paths>.*))?$"), _include),
    Directive("verbatim", _compile(r"!verbatim(?:\s+(?P<text>.*))?$"), _verbatim),
    Directive("preamble", _compile(r"!(?:preamble(?:\s.*)?|documentclass\b.*)$"), _ignore),
    Directive("showPreliminary", _compile(r"!showpreliminary\s*$"), _show_preliminary),
    Directive("comment", _compile(r"!comment(?:\s+(?P<text>.*))?$"), _comment),
    Directive("preliminary", _compile(r"!preliminary(?:\s+(?P<text>.*))?$"), _preliminary),
    Directive("escape", _compile(r"!escape(?:\s+(?P<flag>\S+))?\s*$"), _escape),
    Directive("format", _compile(r"!(?P<tmp>tmp)?format\s+(?P<code>\S+)\s*$"), _format),
    Directive("ruby", _compile(r"!(?:ruby|python)(?P<verbose>-verbose)?(?:\s+(?P<code>.*))?$"), _script),
)


def dispatch(node: Node, level: SiblingRenderer) -> DirectiveResult:
    """Run the first directive matching ``node``.

    Returns a CONTINUE result carrying the node's own value when no directive
    matches.
    """
    if node.value is not None:
        for directive in DIRECTIVES:
            match = directive.pattern.match(node.value)
            if match:
                logger.debug("%s: !%s directive", node.source, directive.name)
                return directive.handler(match, node, level)
    return DirectiveResult(Outcome.CONTINUE, value=node.value)
