"""
Sanitary Map AI - Reports Module
Report data model, severity classification, lifecycle and repository.
"""

from src.reports.models import (
    Report,
    Location,
    Severity,
    Indicator,
    ReportStatus,
)
from src.reports.classifier import Classification, classify
from src.reports.lifecycle import ReportLifecycle
from src.reports.repository import ReportRepository, ReportInput
from src.reports.exceptions import (
    ReportError,
    ValidationError,
    PersistenceError,
    NotFound,
    TransitionRejected,
)

__all__ = [
    # Models
    "Report",
    "Location",
    "Severity",
    "Indicator",
    "ReportStatus",
    # Classifier
    "Classification",
    "classify",
    # Lifecycle
    "ReportLifecycle",
    # Repository
    "ReportRepository",
    "ReportInput",
    # Errors
    "ReportError",
    "ValidationError",
    "PersistenceError",
    "NotFound",
    "TransitionRejected",
]
