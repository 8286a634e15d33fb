"""
Tests for the report status state machine
"""
import pytest

import sys
sys.path.insert(0, '.')

from src.reports.exceptions import TransitionRejected
from src.reports.lifecycle import ReportLifecycle
from src.reports.models import ReportStatus


class TestReportLifecycle:
    """Test suite for ReportLifecycle."""

    @pytest.mark.parametrize("current,target", [
        (ReportStatus.PENDING, ReportStatus.IN_PROGRESS),
        (ReportStatus.PENDING, ReportStatus.RESOLVED),
        (ReportStatus.IN_PROGRESS, ReportStatus.RESOLVED),
    ])
    def test_forward_transitions(self, current, target):
        assert ReportLifecycle.can_transition(current, target)
        assert ReportLifecycle.transition(current, target) == target

    @pytest.mark.parametrize("status", list(ReportStatus))
    def test_same_status_is_noop(self, status):
        assert ReportLifecycle.transition(status, status) == status

    @pytest.mark.parametrize("current,target", [
        (ReportStatus.RESOLVED, ReportStatus.PENDING),
        (ReportStatus.RESOLVED, ReportStatus.IN_PROGRESS),
        (ReportStatus.IN_PROGRESS, ReportStatus.PENDING),
    ])
    def test_backward_transitions_rejected(self, current, target):
        assert not ReportLifecycle.can_transition(current, target)

        with pytest.raises(TransitionRejected) as exc_info:
            ReportLifecycle.transition(current, target)

        assert exc_info.value.current == current.value
        assert exc_info.value.target == target.value

    def test_accepts_string_statuses(self):
        assert ReportLifecycle.transition("pending", "in-progress") == ReportStatus.IN_PROGRESS

    def test_unknown_status_is_invalid(self):
        assert not ReportLifecycle.can_transition("pending", "closed")

        with pytest.raises(ValueError):
            ReportLifecycle.transition("pending", "closed")

    def test_allowed_targets(self):
        assert ReportLifecycle.allowed_targets(ReportStatus.PENDING) == [
            ReportStatus.IN_PROGRESS,
            ReportStatus.RESOLVED,
        ]
        assert ReportLifecycle.allowed_targets(ReportStatus.IN_PROGRESS) == [ReportStatus.RESOLVED]
        assert ReportLifecycle.allowed_targets(ReportStatus.RESOLVED) == []

    def test_resolved_is_terminal(self):
        assert ReportLifecycle.is_terminal(ReportStatus.RESOLVED)
        assert not ReportLifecycle.is_terminal(ReportStatus.PENDING)

    def test_reopen_is_separate_override(self):
        assert ReportLifecycle.reopen(ReportStatus.RESOLVED) == ReportStatus.PENDING
        assert ReportLifecycle.reopen(ReportStatus.IN_PROGRESS) == ReportStatus.PENDING

    def test_reopen_pending_rejected(self):
        with pytest.raises(TransitionRejected):
            ReportLifecycle.reopen(ReportStatus.PENDING)
