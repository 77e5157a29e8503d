from fastapi import APIRouter, Depends
from app.dependencies import get_role_service
from app.features.auth.dependencies import get_current_identity
from app.features.roles.schemas import AssignRoleRequest, RoleRequest, RoleResponse
from app.features.roles.service import RoleService
from app.shared.identity import Identity


router = APIRouter(prefix="/roles", tags=["Roles"])

# Behind the admin-only route prefix
admin_router = APIRouter(prefix="/admin/users", tags=["Admin"])


@router.get("/me", response_model=RoleResponse)
async def get_my_role(
    current_identity: Identity = Depends(get_current_identity),
    service: RoleService = Depends(get_role_service),
):
    """
    Get the caller's role as the server sees it, with the actions it permits.

    Requires authentication.
    """
    return await service.describe(current_identity)


@router.post("/me", response_model=RoleResponse)
async def request_role(
    request: RoleRequest,
    current_identity: Identity = Depends(get_current_identity),
    service: RoleService = Depends(get_role_service),
):
    """
    Set the caller's own role.

    - **role**: citizen, asha or admin
    - **invite**: Invite code, required for asha and admin
    """
    return await service.request_role(current_identity, request.role, request.invite)


@admin_router.put("/{user_id}/role", response_model=RoleResponse)
async def assign_role(
    user_id: str,
    request: AssignRoleRequest,
    current_identity: Identity = Depends(get_current_identity),
    service: RoleService = Depends(get_role_service),
):
    """
    Assign a role to any user.

    Requires admin role.
    """
    return await service.assign_role(current_identity, user_id, request.role)
