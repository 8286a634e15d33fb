"""
Report data model and its persisted JSON form.
"""

import json
from datetime import datetime, timezone
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any

from src.core.constants import INDICATOR_HEX
from src.core.geo_utils import is_valid_coordinate


class Severity(str, Enum):
    """Triage priority of a report."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Indicator(str, Enum):
    """Presentation color code, one per severity."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def hex(self) -> str:
        return INDICATOR_HEX[self.value]


SEVERITY_INDICATORS: Dict[Severity, Indicator] = {
    Severity.HIGH: Indicator.RED,
    Severity.MEDIUM: Indicator.YELLOW,
    Severity.LOW: Indicator.GREEN,
}


class ReportStatus(str, Enum):
    """Remediation status of a report."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class Location:
    """Coordinate pair of a report."""
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class Report:
    """
    A submitted sanitation-issue report.

    Instances are immutable; status changes produce a new instance
    (see ``with_status``) so a failed write never leaves a half-updated
    record behind.
    """
    id: str
    user_name: str
    description: str
    location: Location
    severity: Severity
    date: datetime
    status: ReportStatus = ReportStatus.PENDING
    image: Optional[str] = None

    @property
    def indicator(self) -> Indicator:
        return SEVERITY_INDICATORS[self.severity]

    def with_status(self, status: ReportStatus) -> "Report":
        return Report(
            id=self.id,
            user_name=self.user_name,
            description=self.description,
            location=self.location,
            severity=self.severity,
            date=self.date,
            status=status,
            image=self.image,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted dictionary form."""
        return {
            "id": self.id,
            "userName": self.user_name,
            "description": self.description,
            "image": self.image,
            "location": self.location.to_dict(),
            "severity": self.severity.value,
            "indicator": self.indicator.value,
            "date": self.date.isoformat(),
            "status": self.status.value,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Report":
        """
        Build a report from its persisted dictionary form.

        Unknown extra fields are ignored. The indicator is not read back;
        it is always derived from severity.

        Raises:
            ValueError: If the record is not a well-formed report
        """
        if not isinstance(data, dict):
            raise ValueError("report record must be an object")

        for key in ("id", "userName", "description", "location", "date", "severity"):
            if key not in data:
                raise ValueError(f"report record missing '{key}'")

        report_id = data["id"]
        user_name = data["userName"]
        description = data["description"]
        if not all(isinstance(v, str) and v for v in (report_id, user_name, description)):
            raise ValueError("id, userName and description must be non-empty strings")

        location = data["location"]
        if not isinstance(location, dict):
            raise ValueError("location must be an object")
        try:
            lat = float(location["lat"])
            lng = float(location["lng"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"invalid location: {e}") from e
        if not is_valid_coordinate(lat, lng):
            raise ValueError(f"location out of range: ({lat}, {lng})")

        image = data.get("image")
        if image is not None and not isinstance(image, str):
            raise ValueError("image must be a string")

        return cls(
            id=report_id,
            user_name=user_name,
            description=description,
            location=Location(lat=lat, lng=lng),
            severity=Severity(data["severity"]),
            date=parse_timestamp(data["date"]),
            status=ReportStatus(data.get("status", ReportStatus.PENDING.value)),
            image=image,
        )

    @classmethod
    def from_json(cls, raw: str) -> "Report":
        """
        Raises:
            ValueError: If ``raw`` is not valid JSON, is nested too deeply
                to decode, or is not a well-formed report
        """
        try:
            data = json.loads(raw)
        except RecursionError as e:
            raise ValueError("report record is nested too deeply") from e
        return cls.from_dict(data)


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts the ``Z`` suffix written by browser clients. Naive
    timestamps are taken to be UTC.
    """
    if not isinstance(value, str):
        raise ValueError("date must be an ISO-8601 string")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
