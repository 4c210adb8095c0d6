"""Assembles dashboard and report payloads from a directory view."""
from typing import Any, Dict, List, Optional

from careforme.core.config import Config, get_config
from careforme.core.logging import get_logger
from careforme.models.analytics import GroupCount
from careforme.services import aggregation
from careforme.services.csv_export import serialize_doctors
from careforme.services.directory_view import DoctorDirectoryView
from careforme.services.filters import DoctorFilter
from careforme.services.normalizer import display_normalize

logger = get_logger(__name__)


class ReportService:
    """Read-only analytics over the records a view currently holds.

    Callers refresh the view first; nothing here touches the store.
    """

    def __init__(self, view: DoctorDirectoryView, config: Optional[Config] = None):
        self.view = view
        self.config = config or get_config()

    def _with_share(self, groups: List[GroupCount], total: int) -> List[Dict[str, Any]]:
        """Chart entries plus each group's percentage of all doctors."""
        items = []
        for group in groups:
            item = group.to_dict()
            item["share"] = round(group.count * 100 / total, 1) if total else 0.0
            items.append(item)
        return items

    def dashboard(self) -> Dict[str, Any]:
        records = self.view.records
        summary = aggregation.summarize(records)
        limit = self.config.top_groups_limit

        specialties = aggregation.group_counts(records, "specialty")
        cities = aggregation.group_counts(records, "city")

        data = summary.to_dict()
        data["mostCommonSpecialty"] = specialties[0].name if specialties else None
        data["topSpecialties"] = self._with_share(specialties[:limit], summary.total)
        data["topCities"] = self._with_share(cities[:limit], summary.total)
        return data

    def report(self, criteria: Optional[DoctorFilter] = None, year: Optional[int] = None) -> Dict[str, Any]:
        """Charts over the full list plus the filtered table.

        Args:
            criteria: Filter applied to the table rows only
            year: Year for the monthly registrations chart
        """
        criteria = criteria or DoctorFilter()
        records = self.view.records
        rows = criteria.apply(records)

        return {
            "summary": aggregation.summarize(records).to_dict(),
            "specialtyDistribution": [g.to_dict() for g in aggregation.group_counts(records, "specialty")],
            "cityDistribution": [g.to_dict() for g in aggregation.group_counts(records, "city")],
            "statusBreakdown": [g.to_dict() for g in aggregation.status_breakdown(records)],
            "monthlyRegistrations": [
                m.to_dict() for m in aggregation.monthly_registrations(records, year, self.config.timezone)
            ],
            "locations": [
                {
                    "id": record.id,
                    "name": record.name,
                    "city": record.city,
                    "latitude": record.latitude,
                    "longitude": record.longitude,
                    "status": record.status,
                }
                for record in records
            ],
            "options": {
                "specialties": aggregation.distinct_values(records, "specialty"),
                "cities": aggregation.distinct_values(records, "city"),
            },
            "filters": criteria.to_dict(),
            "doctors": [display_normalize(record) for record in rows],
            "filteredCount": len(rows),
            "totalCount": len(records),
        }

    def export_csv(self, criteria: Optional[DoctorFilter] = None) -> str:
        """CSV text for the rows ``criteria`` selects."""
        rows = self.view.filtered(criteria)
        logger.info("Exporting doctors report", extra={"rows": len(rows)})
        return serialize_doctors(rows)
