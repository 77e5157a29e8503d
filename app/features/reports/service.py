# Health Reports Feature - Service

from datetime import datetime
from typing import Any, Dict, Optional, Union
from pydantic import ValidationError
from app.core.logging import logger
from app.core.policy import Action, can
from app.features.records.models import RecordStatus
from app.features.records.service import DiseaseRecordService
from app.features.reports.schemas import (
    HealthReportCreate,
    HealthReportResponse,
    VillageDetailResponse,
    VillageSummaryResponse,
)
from app.features.reports.summary import summarize
from app.features.roles.store import RoleStore
from app.shared.exceptions import ForbiddenException, ValidationException
from app.shared.identity import Identity, require_identity
from app.shared.store import RecordStore


class HealthReportService:
    """Service for filing health reports and viewing them per village."""

    def __init__(self, reports: RecordStore, records: RecordStore, roles: RoleStore):
        self.reports = reports
        self.records = records
        self.roles = roles

    @staticmethod
    def _report_to_response(doc: Dict[str, Any]) -> HealthReportResponse:
        return HealthReportResponse(
            id=doc["id"],
            author_identity=doc["author_identity"],
            author_role_at_creation=doc["author_role_at_creation"],
            disease=doc["disease"],
            symptoms=list(doc.get("symptoms") or []),
            village=doc["village"],
            date=doc["date"],
            created_at=doc["created_at"],
        )

    async def add_report(self, actor: Optional[Identity], fields: Dict[str, Any]) -> str:
        """
        File a health report. Only health workers and admins may file.

        Returns:
            The new report id
        """
        actor = require_identity(actor)
        role = await self.roles.get_role(actor.user_id)
        if not can(role, Action.CREATE_RECORD):
            logger.warning(f"Denied health report from user {actor.user_id} (role={role.value})")
            raise ForbiddenException("Only ASHA workers and admins can add reports")

        try:
            data = HealthReportCreate.model_validate(fields)
        except ValidationError as e:
            raise ValidationException.from_pydantic(e)

        doc = data.model_dump()
        doc.update(
            author_identity=actor.user_id,
            author_role_at_creation=role.value,
            created_at=datetime.utcnow(),
        )
        report_id = await self.reports.insert(doc)

        logger.info(f"Added health report {report_id} ({data.disease}) for village {data.village} by {actor.user_id}")

        return report_id

    async def view_village(
        self,
        actor: Optional[Identity],
        village: str,
    ) -> Union[VillageSummaryResponse, VillageDetailResponse]:
        """
        Reports for a village.

        Citizens only get per-disease counts. Health workers and admins get
        the raw reports plus the registered disease records at that location.
        """
        actor = require_identity(actor)
        role = await self.roles.get_role(actor.user_id)

        if not can(role, Action.VIEW_VILLAGE_DETAIL):
            reports = await self.reports.scan({"village": village})
            by_disease = summarize(reports)
            return VillageSummaryResponse(village=village, by_disease=by_disease, total=len(reports))

        reports = await self.reports.scan({"village": village})
        reports.sort(key=lambda doc: doc["created_at"], reverse=True)
        records = await self.records.scan({
            "status": RecordStatus.REGISTERED.value,
            "location": village,
        })
        records.sort(key=lambda doc: doc.get("updated_at") or doc["created_at"], reverse=True)

        return VillageDetailResponse(
            village=village,
            reports=[self._report_to_response(doc) for doc in reports],
            records=[DiseaseRecordService.to_response(doc) for doc in records],
        )
