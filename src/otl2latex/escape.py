"""Escape LaTeX special characters outside math regions."""

from __future__ import annotations

from typing import Final

OPEN_QUOTE: Final[str] = "``"
CLOSE_QUOTE: Final[str] = "''"

_MATH_PROMOTED: Final[frozenset[str]] = frozenset("|<>")
_BACKSLASHED: Final[frozenset[str]] = frozenset("_%")


def math_trace(text: str, in_math: bool = False) -> list[bool]:
    """Mark, for each character of ``text``, whether it lies in math mode.

    ``$`` toggles math mode for itself and what follows; ``\\[`` and ``\\]``
    switch it on and off explicitly.

    Args:
        text: Fragment to scan.
        in_math: Math state before the first character.
    """
    trace: list[bool] = []
    state = in_math
    for index, char in enumerate(text):
        if char == "\\" and text[index + 1 : index + 2] == "[":
            state = True
        elif char == "\\" and text[index + 1 : index + 2] == "]":
            state = False
        elif char == "$":
            state = not state
        trace.append(state)
    return trace


def escape_text(text: str, in_math: bool = False) -> tuple[str, bool]:
    """Escape ``text`` for LaTeX, leaving math regions untouched.

    Args:
        text: Fragment to escape.
        in_math: Whether the fragment starts inside a math region, usually
            the state returned for the previous fragment.

    Returns:
        The escaped text and whether the fragment ends inside math.
    """
    trace = math_trace(text, in_math)
    quoted = False
    parts: list[str] = []
    for char, is_math in zip(text, trace):
        if is_math:
            parts.append(char)
        elif char == '"':
            parts.append(CLOSE_QUOTE if quoted else OPEN_QUOTE)
            quoted = not quoted
        elif char in _MATH_PROMOTED:
            parts.append(f"${char}$")
        elif char in _BACKSLASHED:
            parts.append(f"\\{char}")
        else:
            parts.append(char)
    return "".join(parts), trace[-1] if trace else in_math
