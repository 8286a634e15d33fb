"""
Report repository.

Owns the in-memory, newest-first collection of reports and is the only
writer to the key-value store. Every mutation is written to the store
first and applied to memory only once the write has succeeded, so the two
never diverge.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Union

from src.core.constants import REPORT_ID_PREFIX, REPORT_KEY_PREFIX
from src.core.geo_utils import BoundingBox, haversine_distance, is_valid_coordinate
from src.reports.classifier import classify
from src.reports.exceptions import NotFound, PersistenceError, ValidationError
from src.reports.lifecycle import ReportLifecycle
from src.reports.models import (
    Location,
    Report,
    ReportStatus,
    Severity,
    utc_now,
)
from src.storage.base import KeyValueStore, StoreError

logger = logging.getLogger(__name__)


@dataclass
class ReportInput:
    """Fields a reporter supplies when submitting a report."""
    user_name: str
    description: str
    location: Optional[Location] = None
    image: Optional[str] = None


def generate_report_id() -> str:
    """Timestamp-derived id with a random suffix, unique per call."""
    return f"{REPORT_ID_PREFIX}{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


class ReportRepository:
    """
    Loads, creates and updates reports against a key-value store.

    Operations are meant to run one at a time for a single session.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: str = REPORT_KEY_PREFIX,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = generate_report_id,
    ):
        """
        Initialize the repository.

        Args:
            store: Key-value store adapter
            key_prefix: Namespace prefix for report keys
            clock: Returns the current aware datetime
            id_factory: Returns a fresh report id
        """
        self.store = store
        self.key_prefix = key_prefix
        self._clock = clock
        self._id_factory = id_factory
        self._reports: List[Report] = []

    def key_for(self, report_id: str) -> str:
        return f"{self.key_prefix}{report_id}"

    @property
    def reports(self) -> Tuple[Report, ...]:
        """Snapshot of the collection, newest first."""
        return tuple(self._reports)

    def __len__(self) -> int:
        return len(self._reports)

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    async def load_all(self) -> List[Report]:
        """
        Load every report from the store, newest first.

        Values that do not parse as a report are skipped. The store is
        never written to.

        Raises:
            PersistenceError: If the store cannot be listed or read
        """
        try:
            keys = await self.store.list(self.key_prefix)
        except (StoreError, OSError) as e:
            logger.error(f"Failed to list reports: {e}")
            raise PersistenceError(f"Could not list reports: {e}") from e

        loaded: Dict[str, Report] = {}
        skipped = 0

        for key in keys:
            try:
                raw = await self.store.get(key)
            except (StoreError, OSError) as e:
                logger.error(f"Failed to read {key}: {e}")
                raise PersistenceError(f"Could not read {key}: {e}") from e

            if raw is None:
                continue

            try:
                report = Report.from_json(raw)
            except (ValueError, TypeError) as e:
                skipped += 1
                logger.warning(f"Skipping malformed record {key}: {e}")
                continue

            if report.id in loaded:
                logger.warning(f"Duplicate report id {report.id} under {key}, keeping first")
                continue
            loaded[report.id] = report

        reports = sorted(loaded.values(), key=lambda r: r.date, reverse=True)
        self._reports = reports

        logger.info(f"Loaded {len(reports)} reports ({skipped} malformed skipped)")
        return list(reports)

    async def _persist(self, report: Report) -> None:
        key = self.key_for(report.id)
        try:
            ok = await self.store.set(key, report.to_json())
        except (StoreError, OSError) as e:
            logger.error(f"Failed to write {key}: {e}")
            raise PersistenceError(f"Could not save report {report.id}: {e}") from e

        if not ok:
            logger.error(f"Store refused write for {key}")
            raise PersistenceError(f"Store refused to save report {report.id}")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _validate(self, data: ReportInput) -> None:
        missing = []
        if not isinstance(data.user_name, str) or not data.user_name.strip():
            missing.append("userName")
        if not isinstance(data.description, str) or not data.description.strip():
            missing.append("description")
        if data.location is None or not is_valid_coordinate(data.location.lat, data.location.lng):
            missing.append("location")

        if missing:
            raise ValidationError(missing)

    def _new_id(self) -> str:
        report_id = self._id_factory()
        while any(r.id == report_id for r in self._reports):
            report_id = self._id_factory()
        return report_id

    async def create(self, data: ReportInput) -> Report:
        """
        Validate, classify and persist a new report.

        Args:
            data: Reporter-supplied fields

        Returns:
            The created report, also placed at the head of the collection

        Raises:
            ValidationError: If userName, description or location is missing
            PersistenceError: If the store write fails
        """
        self._validate(data)

        classification = classify(data.description)
        report = Report(
            id=self._new_id(),
            user_name=data.user_name,
            description=data.description,
            location=data.location,
            severity=classification.level,
            date=self._clock(),
            status=ReportLifecycle.INITIAL,
            image=data.image,
        )

        await self._persist(report)
        self._reports.insert(0, report)

        logger.info(
            f"New report created: {report.id} at ({report.location.lat}, {report.location.lng}) "
            f"severity={report.severity.value}"
        )
        return report

    def _index_of(self, report_id: str) -> int:
        for index, report in enumerate(self._reports):
            if report.id == report_id:
                return index
        raise NotFound(report_id)

    async def _replace(self, report_id: str, updated: Report) -> Report:
        await self._persist(updated)
        self._reports[self._index_of(report_id)] = updated
        return updated

    async def update_status(
        self,
        report_id: str,
        target: Union[ReportStatus, str]
    ) -> Report:
        """
        Move a report forward through its lifecycle.

        Requesting the current status succeeds without writing.

        Raises:
            ValidationError: If ``target`` is not a known status
            NotFound: If no report has this id
            TransitionRejected: If the move is backward
            PersistenceError: If the store write fails
        """
        try:
            target_status = ReportStatus(target)
        except ValueError:
            raise ValidationError(["status"], f"Invalid status: {target}")

        report = self._reports[self._index_of(report_id)]
        new_status = ReportLifecycle.transition(report.status, target_status)

        if new_status == report.status:
            return report

        updated = await self._replace(report_id, report.with_status(new_status))
        logger.info(f"Report {report_id} status: {report.status.value} -> {new_status.value}")
        return updated

    async def reopen(self, report_id: str) -> Report:
        """
        Administrative override: return a report to pending.

        Raises:
            NotFound: If no report has this id
            TransitionRejected: If the report is already pending
            PersistenceError: If the store write fails
        """
        report = self._reports[self._index_of(report_id)]
        new_status = ReportLifecycle.reopen(report.status)

        updated = await self._replace(report_id, report.with_status(new_status))
        logger.warning(f"Report {report_id} reopened from {report.status.value}")
        return updated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, report_id: str) -> Report:
        """Get report by ID, raising NotFound when absent."""
        return self._reports[self._index_of(report_id)]

    def filter(
        self,
        severity: Optional[Severity] = None,
        status: Optional[ReportStatus] = None,
        bbox: Optional[BoundingBox] = None,
        near: Optional[Tuple[float, float]] = None,
        radius_km: Optional[float] = None,
        limit: Optional[int] = None
    ) -> List[Report]:
        """
        Newest-first projection of the collection.

        Args:
            severity: Keep only this severity
            status: Keep only this status
            bbox: Keep only reports inside this area
            near: (lat, lng) center for a radius search
            radius_km: Keep only reports within this distance of ``near``
            limit: Maximum number of reports

        Returns:
            Matching reports
        """
        reports = [
            r for r in self._reports
            if (severity is None or r.severity == severity)
            and (status is None or r.status == status)
            and (bbox is None or bbox.contains(r.location.lat, r.location.lng))
            and (
                near is None or radius_km is None
                or haversine_distance(near[0], near[1], r.location.lat, r.location.lng) <= radius_km
            )
        ]
        return reports[:limit] if limit is not None else reports

    def statistics(self) -> Dict[str, object]:
        """Get report counts for the dashboard."""
        by_severity = {s.value: 0 for s in Severity}
        by_status = {s.value: 0 for s in ReportStatus}
        with_image = 0

        for report in self._reports:
            by_severity[report.severity.value] += 1
            by_status[report.status.value] += 1
            if report.image:
                with_image += 1

        return {
            "total_reports": len(self._reports),
            "by_severity": by_severity,
            "by_status": by_status,
            "with_image": with_image,
        }
