"""
Report status state machine.

    pending -> in-progress -> resolved

Moves are forward only; skipping a state (pending -> resolved) is allowed,
moving backward is not. Requesting the current status is a no-op.
Reopening a report is an administrative override with its own entry point,
``ReportLifecycle.reopen``, and is never reachable through ``transition``.
"""

import logging
from typing import Dict, List, Union

from src.reports.exceptions import TransitionRejected
from src.reports.models import ReportStatus

logger = logging.getLogger(__name__)

StatusLike = Union[ReportStatus, str]


def _coerce(status: StatusLike) -> ReportStatus:
    return status if isinstance(status, ReportStatus) else ReportStatus(status)


class ReportLifecycle:
    """Forward-only status transitions for reports."""

    ORDER: Dict[ReportStatus, int] = {
        ReportStatus.PENDING: 0,
        ReportStatus.IN_PROGRESS: 1,
        ReportStatus.RESOLVED: 2,
    }

    INITIAL: ReportStatus = ReportStatus.PENDING

    @classmethod
    def can_transition(cls, current: StatusLike, target: StatusLike) -> bool:
        """
        Check if a status transition is valid.

        Unknown status values are never valid.
        """
        try:
            current_enum = _coerce(current)
            target_enum = _coerce(target)
        except ValueError:
            return False

        return cls.ORDER[target_enum] >= cls.ORDER[current_enum]

    @classmethod
    def allowed_targets(cls, current: StatusLike) -> List[ReportStatus]:
        """Statuses an operator may move to from ``current``, excluding itself."""
        current_enum = _coerce(current)
        return [
            status for status, rank in cls.ORDER.items()
            if rank > cls.ORDER[current_enum]
        ]

    @classmethod
    def is_terminal(cls, status: StatusLike) -> bool:
        return not cls.allowed_targets(status)

    @classmethod
    def transition(cls, current: StatusLike, target: StatusLike) -> ReportStatus:
        """
        Validate a transition and return the resulting status.

        Raises:
            TransitionRejected: If the move is backward
            ValueError: If either status is unknown
        """
        current_enum = _coerce(current)
        target_enum = _coerce(target)

        if not cls.can_transition(current_enum, target_enum):
            raise TransitionRejected(current_enum.value, target_enum.value)

        return target_enum

    @classmethod
    def reopen(cls, current: StatusLike) -> ReportStatus:
        """
        Administrative override returning a report to the initial state.

        Raises:
            TransitionRejected: If the report is already pending
        """
        current_enum = _coerce(current)
        if current_enum == cls.INITIAL:
            raise TransitionRejected(current_enum.value, cls.INITIAL.value)

        logger.warning(f"Administrative reopen: {current_enum.value} -> {cls.INITIAL.value}")
        return cls.INITIAL
