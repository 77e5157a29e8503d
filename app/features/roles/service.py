from typing import Optional
from app.config import Settings
from app.core.invites import validate_invite
from app.core.logging import logger
from app.core.policy import Action, Role, can, permitted_actions
from app.features.roles.schemas import RoleResponse
from app.features.roles.store import RoleStore
from app.shared.exceptions import ForbiddenException
from app.shared.identity import Identity, require_identity


class RoleService:
    """Role lookup and role assignment."""

    def __init__(self, roles: RoleStore, config: Settings):
        self.roles = roles
        self.config = config

    async def describe(self, actor: Optional[Identity], user_id: Optional[str] = None) -> RoleResponse:
        """Resolve a role from the store and list what it permits."""
        actor = require_identity(actor)
        user_id = user_id or actor.user_id
        role = await self.roles.get_role(user_id)

        return RoleResponse(
            user_id=user_id,
            role=role,
            permissions=permitted_actions(role),
            can_create_records=can(role, Action.CREATE_RECORD),
        )

    async def request_role(
        self,
        actor: Optional[Identity],
        role: Role,
        invite: Optional[str] = None,
    ) -> RoleResponse:
        """
        Self-service role assignment for the caller.

        Citizen is always granted; asha and admin need the matching invite code.

        Raises:
            ForbiddenException: If the invite code is missing or wrong
        """
        actor = require_identity(actor)
        role = Role(role)

        if not validate_invite(role, invite, self.config):
            logger.warning(f"Rejected invite for role {role.value} from user {actor.user_id}")
            raise ForbiddenException(f"Invalid invite for {role.value.upper()}")

        await self.roles.set_role(actor.user_id, role)
        logger.info(f"User {actor.user_id} took role {role.value} via self-service")

        return await self.describe(actor)

    async def assign_role(self, actor: Optional[Identity], target_user_id: str, role: Role) -> RoleResponse:
        """
        Set another user's role. Admin only.

        Raises:
            ForbiddenException: If the caller is not an admin
            NotFoundException: If the target user does not exist
        """
        actor = require_identity(actor)
        actor_role = await self.roles.get_role(actor.user_id)
        if not can(actor_role, Action.ASSIGN_ROLE):
            logger.warning(f"Denied role assignment by user {actor.user_id} (role={actor_role.value})")
            raise ForbiddenException("Only admins can assign roles")

        role = Role(role)
        await self.roles.set_role(target_user_id, role)
        logger.info(f"Admin {actor.user_id} set role of {target_user_id} to {role.value}")

        return await self.describe(actor, target_user_id)
