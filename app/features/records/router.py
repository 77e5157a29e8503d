# Disease Records Feature - Router

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from app.dependencies import get_record_service
from app.features.auth.dependencies import get_current_identity
from app.features.records.schemas import (
    DiseaseRecordCreate,
    DiseaseRecordUpdate,
    DiseaseRecordResponse,
    DiseaseRecordListResponse,
)
from app.features.records.service import DiseaseRecordService
from app.shared.identity import Identity
from app.shared.schemas import IdResponse


# Behind the asha-or-admin route prefix
router = APIRouter(prefix="/asha/records", tags=["Disease Records"])

# Behind the admin-only route prefix
admin_router = APIRouter(prefix="/admin/records", tags=["Admin"])


# ==================== Health Worker Endpoints ====================

@router.post("", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    record_data: DiseaseRecordCreate,
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """
    Create a draft disease record.

    - **disease_name**: Disease name (required)
    - **description**: Case description (required)
    - **location**: Village or area (optional)
    - **image_reference**: Uploaded image URI (optional)
    - **medical_supplies**: List of {name, quantity > 0}
    """
    record_id = await service.create(current_identity, record_data.model_dump())
    return IdResponse(id=record_id, message="Disease record saved as draft")


@router.get("", response_model=DiseaseRecordListResponse)
async def list_my_records(
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """Get the current user's records (drafts and registered), newest first."""
    records = await service.list_own(current_identity)
    return DiseaseRecordListResponse(records=records, total=len(records))


# NOTE: static route before /{record_id}
@router.get("/registered", response_model=DiseaseRecordListResponse)
async def list_registered_records(
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """Get all registered records, most recently changed first."""
    records = await service.list_registered(current_identity)
    return DiseaseRecordListResponse(records=records, total=len(records))


@router.get("/{record_id}", response_model=DiseaseRecordResponse)
async def get_record(
    record_id: str,
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """Get one record (own drafts, or any registered record)."""
    return await service.get(current_identity, record_id)


@router.patch("/{record_id}", response_model=DiseaseRecordResponse)
async def update_record(
    record_id: str,
    update_data: DiseaseRecordUpdate,
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """
    Update a draft record. Only the owner or an admin may update.

    Registered records are read-only (409).
    """
    return await service.update(
        current_identity,
        record_id,
        update_data.model_dump(exclude_unset=True),
    )


@router.post("/{record_id}/register", response_model=DiseaseRecordResponse)
async def register_record(
    record_id: str,
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """
    Register a draft record. Only the owner or an admin may register.

    Registering an already registered record is a no-op.
    """
    return await service.register(current_identity, record_id)


# ==================== Admin Endpoints ====================

@admin_router.get("", response_model=DiseaseRecordListResponse)
async def admin_list_registered_records(
    location: Optional[str] = Query(None, description="Exact location to filter by"),
    current_identity: Identity = Depends(get_current_identity),
    service: DiseaseRecordService = Depends(get_record_service),
):
    """Get registered records across all health workers, optionally filtered by location."""
    records = await service.list_registered(current_identity, location=location)
    return DiseaseRecordListResponse(records=records, total=len(records))
