"""
Shared dependencies across the application.

Stores are provided here so that tests can swap them through
``app.dependency_overrides`` and every service gets them injected.
"""

from fastapi import Depends
from app.config import settings
from app.features.auth.dependencies import get_current_identity
from app.features.records.models import DiseaseRecord
from app.features.records.service import DiseaseRecordService
from app.features.reports.models import HealthReport
from app.features.reports.service import HealthReportService
from app.features.roles.service import RoleService
from app.features.roles.store import RoleStore, UserRoleStore
from app.shared.store import BeanieRecordStore, RecordStore


def get_role_store() -> RoleStore:
    return UserRoleStore()


def get_record_store() -> RecordStore:
    return BeanieRecordStore(DiseaseRecord)


def get_report_store() -> RecordStore:
    return BeanieRecordStore(HealthReport)


def get_record_service(
    records: RecordStore = Depends(get_record_store),
    roles: RoleStore = Depends(get_role_store),
) -> DiseaseRecordService:
    return DiseaseRecordService(records, roles, hide_foreign_records=settings.HIDE_FOREIGN_RECORDS)


def get_report_service(
    reports: RecordStore = Depends(get_report_store),
    records: RecordStore = Depends(get_record_store),
    roles: RoleStore = Depends(get_role_store),
) -> HealthReportService:
    return HealthReportService(reports, records, roles)


def get_role_service(roles: RoleStore = Depends(get_role_store)) -> RoleService:
    return RoleService(roles, settings)


__all__ = [
    "get_current_identity",
    "get_role_store",
    "get_record_store",
    "get_report_store",
    "get_record_service",
    "get_report_service",
    "get_role_service",
]
