"""Domain entity describing a newly submitted incident report."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NewReportEvent:
    """Identifying fields of an incident report that triggers a fan-out."""

    report_id: str | None
    report_number: str | None
    school_id: str | None
    reporter_name: str | None = None
    incident_category: str | None = None

    def missing_fields(self) -> list[str]:
        """Return the wire names of the required fields that are empty."""

        required = (
            ("reportId", self.report_id),
            ("reportNumber", self.report_number),
            ("schoolId", self.school_id),
        )
        return [name for name, value in required if value is None or not str(value).strip()]


__all__ = ["NewReportEvent"]
