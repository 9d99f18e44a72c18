"""Style table and depth-indexed style stacks."""

from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Final, Mapping

from pydantic import BaseModel, ConfigDict

from otl2latex.exceptions import StyleError
from otl2latex.schemas import Style

# Letters numbered by their occurrence within one style code ("SS" -> S1, S2)
NUMBERED_FAMILIES: Final[frozenset[str]] = frozenset({"S", "s", "T"})

_SECTIONS = ("section", "subsection", "subsubsection", "paragraph", "subparagraph")
_BOOK_SECTIONS = ("part", "chapter", "section", "subsection", "subsubsection")


def _build_table() -> Mapping[str, Style]:
    styles = [
        Style(id="N"),
        Style(id="P", after="\\par"),
        Style(id="I", before="\\item ", begin="\\begin{itemize}", end="\\end{itemize}"),
        Style(id="E", before="\\item ", begin="\\begin{enumerate}", end="\\end{enumerate}"),
    ]
    for level, command in enumerate(_SECTIONS, start=1):
        styles.append(Style(id=f"S{level}", before=f"\\{command}{{", after="}"))
        styles.append(Style(id=f"s{level}", before=f"\\{command}*{{", after="}"))
    for level, command in enumerate(_BOOK_SECTIONS, start=1):
        styles.append(Style(id=f"T{level}", before=f"\\{command}{{", after="}"))
    return MappingProxyType({style.id: style for style in styles})


STYLE_TABLE: Final[Mapping[str, Style]] = _build_table()


def lookup_style(style_id: str) -> Style:
    """Return the style registered under ``style_id``.

    Raises:
        StyleError: If no such style exists.
    """
    try:
        return STYLE_TABLE[style_id]
    except KeyError:
        raise StyleError(f"Unknown style id {style_id!r}") from None


def expand_style_code(code: str) -> list[str]:
    """Expand a compact style code into style ids.

    ``"SSN"`` becomes ``["S1", "S2", "N"]``; numbering restarts for every
    code string.
    """
    seen: Counter[str] = Counter()
    ids: list[str] = []
    for letter in code:
        if letter.isspace():
            continue
        if letter in NUMBERED_FAMILIES:
            seen[letter] += 1
            ids.append(f"{letter}{seen[letter]}")
        else:
            ids.append(letter)
    return ids


class StyleStack(BaseModel):
    """Immutable sequence of styles indexed by depth.

    Depths past the end of the stack reuse the last style.
    """

    model_config = ConfigDict(frozen=True)

    styles: tuple[Style, ...] = ()

    @classmethod
    def parse(cls, code: str) -> StyleStack:
        """Build a stack from a style code such as ``"SSSI"``."""
        return cls(styles=tuple(lookup_style(style_id) for style_id in expand_style_code(code)))

    @property
    def code(self) -> str:
        return "".join(style.id for style in self.styles)

    def at(self, depth: int) -> Style:
        """Return the style for ``depth``, clamped to the deepest entry."""
        if not self.styles:
            raise StyleError("No style configured")
        return self.styles[min(depth, len(self.styles) - 1)]

    def update(self, depth: int, code: str) -> StyleStack:
        """Return a new stack switching to ``code`` from ``depth`` downwards.

        Levels above ``depth`` are kept; a stack shorter than ``depth`` is
        padded with its last style first.
        """
        kept = list(self.styles[:depth])
        if kept and len(kept) < depth:
            kept.extend([kept[-1]] * (depth - len(kept)))
        return StyleStack(styles=tuple(kept) + StyleStack.parse(code).styles)
