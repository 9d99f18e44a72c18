"""Render an outline forest into LaTeX lines."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from otl2latex.config import OTL2LATEX_OUTLINE_SUFFIX
from otl2latex.directives import Outcome, dispatch
from otl2latex.escape import escape_text
from otl2latex.exceptions import IncludeError, OutlineError
from otl2latex.outline import parse_outline_file
from otl2latex.schemas import Node, Style
from otl2latex.scripting import PythonScriptEvaluator, ScriptEvaluator
from otl2latex.styles import StyleStack
from otl2latex.utils.logging_config import get_logger

logger = get_logger(__name__)

_CONTINUATION_RE = re.compile(r"^ (?=\S)")
_URL_RE = re.compile(r"^(?:ftp|https?)://\S+$")
_URL_SPECIALS = str.maketrans({"%": "\\%", "#": "\\#"})


@dataclass
class RenderContext:
    """State shared by every render call of one conversion run.

    Attributes:
        evaluator: Backend for script directives.
        included: Files already included, keyed by resolved path.
        show_preliminary: Whether preliminary subtrees are rendered.
        lines: Output lines, in document order.
        outline_suffix: Extension of files included as outlines.
    """

    evaluator: ScriptEvaluator = field(default_factory=PythonScriptEvaluator)
    included: dict[str, bool] = field(default_factory=dict)
    show_preliminary: bool = False
    lines: list[str] = field(default_factory=list)
    outline_suffix: str = OTL2LATEX_OUTLINE_SUFFIX

    def emit(self, line: str) -> None:
        self.lines.append(line)


def _is_continuation(value: str | None) -> bool:
    return value is not None and _CONTINUATION_RE.match(value) is not None


def _folded_url(node: Node) -> str | None:
    """Return the bare URL held by the node's first child, if it is a leaf."""
    if not node.children:
        return None
    first = node.children[0]
    if first.is_leaf and first.value is not None and _URL_RE.match(first.value):
        return first.value
    return None


class SiblingRenderer:
    """Render one list of sibling nodes at a fixed depth.

    Holds the state that lives for the duration of a sibling list: the open
    begin/end run, math mode carried between lines and any pending
    temporary-format restoration.
    """

    def __init__(
        self,
        context: RenderContext,
        depth: int,
        styles: StyleStack,
        escaping: bool,
    ) -> None:
        self.context = context
        self.depth = depth
        self.styles = styles
        self.escaping = escaping
        self.open_style: Style | None = None
        self.in_math = False
        self.pending_restore: StyleStack | None = None
        self.temporary_used = False

    def emit(self, text: str, *, depth: int | None = None) -> None:
        indent = self.depth if depth is None else depth
        self.context.emit("\t" * indent + text)

    def render(self, nodes: list[Node]) -> tuple[StyleStack, bool]:
        for index, node in enumerate(nodes):
            next_node = nodes[index + 1] if index + 1 < len(nodes) else None
            result = dispatch(node, self)
            if result.outcome is Outcome.CONTINUE:
                self._render_line(node, result.value, next_node)
            elif result.outcome is Outcome.STYLE_CHANGED:
                self._switch_styles(result.styles, temporary=result.temporary)
            elif result.outcome is Outcome.ESCAPE_CHANGED:
                self.escaping = bool(result.escaping)
            elif result.outcome is Outcome.INCLUDED:
                if result.styles is not None:
                    self.styles = result.styles
                self.escaping = bool(result.escaping)
        self.close_run()
        return self.styles, self.escaping

    def render_outline(self, path: Path, styles: StyleStack, escaping: bool) -> tuple[StyleStack, bool]:
        """Render an outline file in place, at this depth."""
        try:
            nodes = parse_outline_file(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise IncludeError(f"Cannot include {path}: {exc}") from exc
        return render_nodes(nodes, self.depth, styles, self.context, escaping)

    def close_run(self) -> None:
        if self.open_style is None:
            return
        if self.open_style.end is not None:
            self.emit(self.open_style.end)
        self.open_style = None

    def _switch_styles(self, styles: StyleStack | None, *, temporary: bool) -> None:
        if styles is None:
            return
        self.close_run()
        if temporary and self.pending_restore is None:
            self.pending_restore = self.styles
            self.temporary_used = False
        self.styles = styles

    def _restore_temporary(self) -> None:
        # First line after the switch keeps the temporary style
        if self.pending_restore is None:
            return
        if not self.temporary_used:
            self.temporary_used = True
            return
        self.close_run()
        logger.debug("Restoring style %s", self.pending_restore.code)
        self.styles = self.pending_restore
        self.pending_restore = None
        self.temporary_used = False

    def _render_line(self, node: Node, value: str | None, next_node: Node | None) -> None:
        if value is None:
            raise OutlineError(
                f"{node.source}: no content at depth {self.depth}; "
                "the outline skips an indentation level"
            )

        continuation = _is_continuation(value)
        text = value[1:] if continuation else value
        if not continuation:
            self._restore_temporary()

        style = self.styles.at(self.depth)
        if self.open_style is not None and self.open_style != style:
            self.close_run()
        if style.begin is not None and self.open_style is None:
            self.emit(f"{style.begin} % {node.source}")
            self.open_style = style

        children = node.children
        url = _folded_url(node)
        if url is not None:
            children = children[1:]

        if self.escaping:
            text, self.in_math = escape_text(text, self.in_math)
        if url is not None:
            text = f"\\href{{{url.translate(_URL_SPECIALS)}}}{{{text}}}"

        before = " " * len(style.before) if continuation else style.before
        after = "" if _is_continuation(next_node.value if next_node else None) else style.after
        self.emit(f"{before}{text}{after} % {node.source}")

        if children:
            self.styles, self.escaping = render_nodes(
                children, self.depth + 1, self.styles, self.context, self.escaping
            )


def render_nodes(
    nodes: list[Node],
    depth: int,
    styles: StyleStack,
    context: RenderContext,
    escaping: bool = True,
) -> tuple[StyleStack, bool]:
    """Render sibling nodes at ``depth``.

    Args:
        nodes: Sibling nodes, in document order.
        depth: Depth of the nodes in the outline.
        styles: Style stack in effect for the first node.
        context: Shared run state and output.
        escaping: Whether text is escaped.

    Returns:
        The style stack and escaping flag in effect after the last node, so
        callers continue with changes made by directives inside the list.

    Raises:
        OutlineError: If a placeholder node reaches a content position.
        StyleError: If a format directive names an unknown style.
        IncludeError: If an included file cannot be read.
    """
    return SiblingRenderer(context, depth, styles, escaping).render(nodes)


def render_forest(
    nodes: list[Node],
    styles: StyleStack,
    context: RenderContext | None = None,
    *,
    escaping: bool = True,
) -> list[str]:
    """Render a whole forest and return the output lines."""
    ctx = context or RenderContext()
    render_nodes(nodes, 0, styles, ctx, escaping)
    return ctx.lines
