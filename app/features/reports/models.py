# Health Reports Feature - Models

from typing import List
from beanie import Document, Indexed
from pydantic import Field
from app.shared.models import TimestampMixin


class HealthReport(Document, TimestampMixin):
    """
    Health report document model.
    An append-only field observation filed by a health worker for a village.
    Never updated or deleted.
    """

    author_identity: str
    author_role_at_creation: str

    disease: str
    symptoms: List[str] = Field(default_factory=list)
    village: Indexed(str)
    date: str  # As reported, e.g. "2025-01-15"

    class Settings:
        name = "health_reports"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "author_identity": "65a1f0c2e4b0a1b2c3d4e5f6",
                "author_role_at_creation": "asha",
                "disease": "Malaria",
                "symptoms": ["fever", "chills"],
                "village": "Rampur",
                "date": "2025-01-15",
            }
        }
