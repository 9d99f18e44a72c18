"""Conversion output model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Final conversion output."""

    body: str
    document: str
    documentclass: str
    preamble: list[str] = Field(default_factory=list)
