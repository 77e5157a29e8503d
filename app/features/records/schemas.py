# Disease Records Feature - Schemas

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.features.records.models import RecordStatus


class SupplyLineSchema(BaseModel):
    """One supply line; quantity must be positive."""
    name: str = Field(..., description="Supply name")
    quantity: int = Field(..., strict=True, description="Units needed (> 0)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Supply name must not be empty")
        return v

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than 0")
        return v


def _required_text(v: Optional[str], label: str) -> str:
    if v is None or not v.strip():
        raise ValueError(f"{label} must not be empty")
    return v.strip()


def _optional_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class DiseaseRecordCreate(BaseModel):
    """Schema for creating a disease record."""
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "disease_name": "Dengue",
                "description": "High fever and joint pain in three households",
                "location": "Rampur",
                "image_reference": "https://files.example.com/cases/123.jpg",
                "medical_supplies": [{"name": "ORS packets", "quantity": 20}],
            }
        },
    )

    disease_name: str
    description: str
    location: Optional[str] = None
    image_reference: Optional[str] = None
    medical_supplies: List[SupplyLineSchema] = Field(default_factory=list)

    @field_validator("disease_name")
    @classmethod
    def validate_disease_name(cls, v: str) -> str:
        return _required_text(v, "Disease name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _required_text(v, "Description")

    @field_validator("location", "image_reference")
    @classmethod
    def validate_optional_text(cls, v: Optional[str]) -> Optional[str]:
        return _optional_text(v)


class DiseaseRecordUpdate(BaseModel):
    """
    Schema for updating a draft. Only the fields sent are changed.
    ``status`` and ``owner_identity`` are not accepted.
    """
    model_config = ConfigDict(extra="forbid")

    disease_name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image_reference: Optional[str] = None
    medical_supplies: Optional[List[SupplyLineSchema]] = None

    # Validators only run for fields that were sent, so an explicit null is rejected here
    @field_validator("disease_name")
    @classmethod
    def validate_disease_name(cls, v: Optional[str]) -> str:
        return _required_text(v, "Disease name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> str:
        return _required_text(v, "Description")

    @field_validator("medical_supplies")
    @classmethod
    def validate_supplies(cls, v):
        if v is None:
            raise ValueError("Medical supplies must be a list")
        return v

    @field_validator("location", "image_reference")
    @classmethod
    def validate_optional_text(cls, v: Optional[str]) -> Optional[str]:
        return _optional_text(v)


class DiseaseRecordResponse(BaseModel):
    """Schema for disease record response."""
    id: str
    owner_identity: str
    owner_role_at_creation: str
    disease_name: str
    description: str
    location: Optional[str] = None
    image_reference: Optional[str] = None
    medical_supplies: List[SupplyLineSchema]
    status: RecordStatus
    created_at: datetime
    updated_at: Optional[datetime] = None


class DiseaseRecordListResponse(BaseModel):
    records: List[DiseaseRecordResponse]
    total: int
