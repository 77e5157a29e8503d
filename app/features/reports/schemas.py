# Health Reports Feature - Schemas

from typing import Dict, List, Literal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from app.features.records.schemas import DiseaseRecordResponse


class HealthReportCreate(BaseModel):
    """Schema for filing a health report."""
    disease: str = Field(..., description="Observed disease")
    symptoms: List[str] = Field(default_factory=list, description="Observed symptoms, in order")
    village: str = Field(..., description="Village the report is about")
    date: str = Field(..., description="Observation date as reported")

    @field_validator("disease", "village", "date")
    @classmethod
    def validate_required(cls, v: str, info) -> str:
        # Stored as sent; summaries count exact values
        if not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} must not be empty")
        return v

    @field_validator("symptoms")
    @classmethod
    def clean_symptoms(cls, v: List[str]) -> List[str]:
        return [symptom.strip() for symptom in v if symptom and symptom.strip()]

    class Config:
        json_schema_extra = {
            "example": {
                "disease": "Malaria",
                "symptoms": ["fever", "chills"],
                "village": "Rampur",
                "date": "2025-01-15",
            }
        }


class HealthReportResponse(BaseModel):
    id: str
    author_identity: str
    author_role_at_creation: str
    disease: str
    symptoms: List[str]
    village: str
    date: str
    created_at: datetime


class VillageSummaryResponse(BaseModel):
    """Anonymized counts per disease, for citizens."""
    type: Literal["summary"] = "summary"
    village: str
    by_disease: Dict[str, int]
    total: int


class VillageDetailResponse(BaseModel):
    """Raw reports and registered records for a village, for health workers and admins."""
    type: Literal["detailed"] = "detailed"
    village: str
    reports: List[HealthReportResponse]
    records: List[DiseaseRecordResponse]
