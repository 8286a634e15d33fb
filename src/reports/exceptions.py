"""
Error taxonomy for the report lifecycle engine.

Every error is recoverable and reported to the caller; none of them is
allowed to terminate the host application.
"""

from typing import Iterable, List


class ReportError(Exception):
    """Base class for report engine errors."""


class ValidationError(ReportError):
    """Required input is missing or out of range."""

    def __init__(self, fields: Iterable[str], message: str = ""):
        self.fields: List[str] = list(fields)
        super().__init__(
            message or f"Missing or invalid field(s): {', '.join(self.fields)}"
        )


class PersistenceError(ReportError):
    """The store adapter failed to read or write."""


class NotFound(ReportError):
    """A report id is absent from the in-memory collection."""

    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Report not found: {report_id}")


class TransitionRejected(ReportError):
    """An illegal (backward) status move was requested."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Invalid status transition: {current} -> {target}")
