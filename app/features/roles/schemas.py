from pydantic import BaseModel, Field
from typing import List, Optional
from app.core.policy import Action, Role


class RoleRequest(BaseModel):
    """Self-service role request. Privileged roles need an invite code."""

    role: Role
    invite: Optional[str] = Field(None, description="Invite code for asha/admin")

    class Config:
        json_schema_extra = {
            "example": {
                "role": "asha",
                "invite": "ASHA2025",
            }
        }


class AssignRoleRequest(BaseModel):
    """Admin role assignment."""

    role: Role


class RoleResponse(BaseModel):
    """Role as resolved server-side, with what it allows."""

    user_id: str
    role: Role
    permissions: List[Action]
    can_create_records: bool
