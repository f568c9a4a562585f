"""
Interpretation of the ``status`` sub-document of a resource.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .models.base import ReadinessVerdict, StatusCode

_FAILED_CODES = {int(StatusCode.FAULTY), int(StatusCode.UNKNOWN)}


def status_code(document: Optional[Mapping[str, Any]]) -> Optional[int]:
    """Return ``document["status"]["code"]`` as an int, or None if absent."""
    if not isinstance(document, Mapping):
        return None
    status = document.get("status")
    if not isinstance(status, Mapping):
        return None
    code = status.get("code")
    if isinstance(code, bool):
        return None
    try:
        return int(code)
    except (TypeError, ValueError):
        return None


def interpret(document: Optional[Mapping[str, Any]]) -> ReadinessVerdict:
    """
    Map a resource document onto a readiness verdict.

    FINISHED is ready, FAULTY and UNKNOWN are failed, and everything else
    (queued, in progress, missing status) is pending.
    """
    code = status_code(document)
    if code == StatusCode.FINISHED:
        return ReadinessVerdict.READY
    if code in _FAILED_CODES:
        return ReadinessVerdict.FAILED
    return ReadinessVerdict.PENDING


def is_finished(document: Optional[Mapping[str, Any]]) -> bool:
    """Whether the document reports the terminal FINISHED status."""
    return interpret(document) is ReadinessVerdict.READY


__all__ = ["status_code", "interpret", "is_finished"]
