"""Custom exceptions for otl2latex."""


class Otl2latexError(Exception):
    """Base exception for otl2latex operations."""


class StyleError(Otl2latexError):
    """A style code references an unknown style id."""


class OutlineError(Otl2latexError):
    """Outline structure cannot be rendered."""


class IncludeError(Otl2latexError):
    """An included file cannot be read."""


class ScriptError(Otl2latexError):
    """Embedded script evaluation failed."""
