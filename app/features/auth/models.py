from beanie import Document, Indexed
from pydantic import EmailStr
from app.core.policy import Role
from app.shared.models import TimestampMixin


class User(Document, TimestampMixin):
    """User document model. ``role`` is the profile metadata read by the role store."""

    email: Indexed(EmailStr, unique=True)
    password_hash: str
    name: str
    is_active: bool = True

    # Raw profile metadata, typed by the role store through parse_role
    role: str = Role.CITIZEN.value

    class Settings:
        name = "users"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "email": "asha.worker@example.com",
                "name": "Sunita Devi",
                "role": "asha",
            }
        }
