"""Outline tree models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Node(BaseModel):
    """A node of the outline forest.

    A node whose ``value`` is None is a placeholder bridging an indentation
    jump of more than one level.
    """

    value: str | None = None
    children: list["Node"] = Field(default_factory=list)
    source: str = ""

    @property
    def is_placeholder(self) -> bool:
        return self.value is None

    @property
    def is_leaf(self) -> bool:
        return not self.children
