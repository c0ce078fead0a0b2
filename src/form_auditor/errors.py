# src/form_auditor/errors.py
from typing import Any


class FormAuditError(Exception):
    """Base class for all errors raised by the form auditor."""


class MissingFileError(FormAuditError, FileNotFoundError):
    """
    Raised when the document to audit cannot be found.
    Fatal: no check can run without the document.
    """

    def __init__(self, path: Any):
        self.path = path
        super().__init__(f"Document not found: {path}")


class AssertionFailure(FormAuditError, AssertionError):
    """
    Raised by a single check when the document violates its expectation.
    Scoped to that check; the engine records it and moves on.
    """


def ensure(condition: Any, message: str) -> None:
    """Raises AssertionFailure with `message` if `condition` is falsy."""
    if not condition:
        raise AssertionFailure(message)
