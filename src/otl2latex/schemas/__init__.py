"""Shared schemas for otl2latex."""

from otl2latex.schemas.conversion import ConversionResult
from otl2latex.schemas.nodes import Node
from otl2latex.schemas.styles import Style

__all__ = ["ConversionResult", "Node", "Style"]
