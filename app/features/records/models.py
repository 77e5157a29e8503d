# Disease Records Feature - Models

from enum import Enum
from typing import List, Optional
from beanie import Document, Indexed
from pydantic import BaseModel, Field
from app.shared.models import TimestampMixin


class RecordStatus(str, Enum):
    DRAFT = "draft"
    REGISTERED = "registered"


class SupplyLine(BaseModel):
    """A medical supply needed for the case."""
    name: str
    quantity: int


class DiseaseRecord(Document, TimestampMixin):
    """
    Disease record document model.
    Created as a draft by a health worker, then registered once for
    administrative visibility. Registered records are read-only.
    """

    # Owner, fixed at creation
    owner_identity: Indexed(str)
    owner_role_at_creation: str

    disease_name: str
    description: str
    location: Optional[str] = None
    image_reference: Optional[str] = None  # Opaque URI, never interpreted
    medical_supplies: List[SupplyLine] = Field(default_factory=list)

    status: RecordStatus = RecordStatus.DRAFT

    class Settings:
        name = "disease_records"
        use_state_management = True
        indexes = [
            # Owner's own list, newest first
            [("owner_identity", 1), ("created_at", -1)],
            # Registered records by location
            [("status", 1), ("location", 1)],
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "owner_identity": "65a1f0c2e4b0a1b2c3d4e5f6",
                "owner_role_at_creation": "asha",
                "disease_name": "Dengue",
                "description": "High fever and joint pain in three households",
                "location": "Rampur",
                "medical_supplies": [{"name": "ORS packets", "quantity": 20}],
                "status": "draft",
            }
        }
