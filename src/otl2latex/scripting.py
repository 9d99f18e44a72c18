"""Script evaluators backing the !ruby directive."""

from __future__ import annotations

import os
import subprocess
import sys
import textwrap
from typing import Protocol, Sequence

from otl2latex.config import OTL2LATEX_SCRIPT_TIMEOUT_S
from otl2latex.exceptions import ScriptError
from otl2latex.utils.logging_config import get_logger

logger = get_logger(__name__)


class ScriptEvaluator(Protocol):
    """Turn a block of script lines into output lines.

    Implementations raise ScriptError when the script cannot be evaluated.
    """

    def evaluate(self, lines: Sequence[str], verbose: bool = False) -> list[str] | str: ...


class PythonScriptEvaluator:
    """Run script lines in a child Python interpreter and return what they print.

    Every block runs in a fresh process, so a block cannot see names defined
    by an earlier one, and nothing it does (exiting included) reaches the
    converter.

    Args:
        timeout: Seconds a block may run before it is killed.
        executable: Interpreter to run blocks with.
    """

    def __init__(self, timeout: float = OTL2LATEX_SCRIPT_TIMEOUT_S, executable: str = sys.executable) -> None:
        self.timeout = timeout
        self.executable = executable

    def evaluate(self, lines: Sequence[str], verbose: bool = False) -> list[str]:
        code = textwrap.dedent("\n".join(lines))
        logger.debug("Evaluating script block of %d lines", len(lines))
        try:
            result = subprocess.run(
                [self.executable, "-c", code],
                capture_output=True,
                encoding="utf-8",
                env={**os.environ, "PYTHONIOENCODING": "utf-8"},
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ScriptError(f"Script timed out after {self.timeout:g}s") from exc
        except OSError as exc:
            raise ScriptError(f"Cannot run {self.executable}: {exc}") from exc

        if result.returncode != 0:
            stderr = result.stderr.strip().splitlines()
            message = f"exited with status {result.returncode}"
            if stderr:
                message = f"{message}: {stderr[-1]}"
            raise ScriptError(message)

        output = result.stdout.splitlines()
        if verbose:
            return [f"% {line}" for line in lines] + output
        return output


class DisabledScriptEvaluator:
    """Evaluator used when script execution is turned off."""

    def evaluate(self, lines: Sequence[str], verbose: bool = False) -> list[str]:
        raise ScriptError("Script evaluation is disabled")
