"""Test setup for otl2latex."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from otl2latex.exceptions import ScriptError  # noqa: E402


class RecordingEvaluator:
    """Script evaluator double that records its calls."""

    def __init__(self, output: list[str] | str | None = None, error: str | None = None) -> None:
        self.output = output if output is not None else []
        self.error = error
        self.calls: list[tuple[list[str], bool]] = []

    def evaluate(self, lines: Sequence[str], verbose: bool = False) -> list[str] | str:
        self.calls.append((list(lines), verbose))
        if self.error:
            raise ScriptError(self.error)
        return self.output


@pytest.fixture
def recording_evaluator() -> RecordingEvaluator:
    return RecordingEvaluator(output=["generated"])


@pytest.fixture
def write_outline(tmp_path: Path):
    """Write an outline file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_evaluator():
    """Factory for RecordingEvaluator instances."""
    return RecordingEvaluator
