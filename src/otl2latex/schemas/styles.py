"""Style model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Style(BaseModel):
    """Markup wrapper for a line and, optionally, a run of lines.

    Attributes:
        id: Style code, a letter with an optional level digit (e.g. "S2").
        before: Text written before each line's content.
        after: Text written after each line's content.
        begin: Text opening a run of same-depth, same-style lines.
        end: Text closing such a run.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    before: str = ""
    after: str = ""
    begin: str | None = None
    end: str | None = None
