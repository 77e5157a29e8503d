# Health Reports Feature - Router

from typing import Union
from fastapi import APIRouter, Depends, status
from app.dependencies import get_report_service
from app.features.auth.dependencies import get_current_identity
from app.features.reports.schemas import (
    HealthReportCreate,
    VillageDetailResponse,
    VillageSummaryResponse,
)
from app.features.reports.service import HealthReportService
from app.shared.identity import Identity
from app.shared.schemas import IdResponse


router = APIRouter(prefix="/reports", tags=["Health Reports"])

# Behind the asha-or-admin route prefix
asha_router = APIRouter(prefix="/asha/reports", tags=["Health Reports"])


@asha_router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def add_report(
    report_data: HealthReportCreate,
    current_identity: Identity = Depends(get_current_identity),
    service: HealthReportService = Depends(get_report_service),
):
    """
    File a health report for a village.

    - **disease**: Observed disease
    - **symptoms**: List of symptoms
    - **village**: Village name
    - **date**: Observation date
    """
    report_id = await service.add_report(current_identity, report_data.model_dump())
    return IdResponse(id=report_id, message="Health report added")


@router.get(
    "/villages/{village}",
    response_model=Union[VillageDetailResponse, VillageSummaryResponse],
)
async def get_village_reports(
    village: str,
    current_identity: Identity = Depends(get_current_identity),
    service: HealthReportService = Depends(get_report_service),
):
    """
    Get reports for a village.

    Citizens receive an anonymized count per disease (`type: summary`);
    ASHA workers and admins receive the reports themselves (`type: detailed`).
    """
    return await service.view_village(current_identity, village)
