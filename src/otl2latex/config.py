"""Local configuration for otl2latex."""

from __future__ import annotations

import os


DEFAULT_STYLE_CODE = "SSSI"
DEFAULT_OUTLINE_SUFFIX = ".otl"
DEFAULT_OUTPUT_SUFFIX = ".tex"
DEFAULT_DOCUMENTCLASS = "{article}"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_SCRIPT_TIMEOUT_S = 30.0

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


# Style code applied to the document body before any !format directive.
OTL2LATEX_STYLE_CODE = os.getenv("OTL2LATEX_STYLE_CODE", DEFAULT_STYLE_CODE)
OTL2LATEX_OUTLINE_SUFFIX = os.getenv("OTL2LATEX_OUTLINE_SUFFIX", DEFAULT_OUTLINE_SUFFIX)
OTL2LATEX_OUTPUT_SUFFIX = os.getenv("OTL2LATEX_OUTPUT_SUFFIX", DEFAULT_OUTPUT_SUFFIX)
OTL2LATEX_DOCUMENTCLASS = os.getenv("OTL2LATEX_DOCUMENTCLASS", DEFAULT_DOCUMENTCLASS)
OTL2LATEX_ESCAPE = _env_flag("OTL2LATEX_ESCAPE", True)
OTL2LATEX_ALLOW_SCRIPTS = _env_flag("OTL2LATEX_ALLOW_SCRIPTS", True)
# Seconds a !ruby block may run in its child interpreter.
OTL2LATEX_SCRIPT_TIMEOUT_S = float(os.getenv("OTL2LATEX_SCRIPT_TIMEOUT_S", str(DEFAULT_SCRIPT_TIMEOUT_S)))
OTL2LATEX_LOG_LEVEL = os.getenv("OTL2LATEX_LOG_LEVEL", DEFAULT_LOG_LEVEL)
