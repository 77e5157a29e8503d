"""Role store port and the adapter reading roles off user profiles."""

from abc import ABC, abstractmethod
from datetime import datetime

from beanie import PydanticObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from app.core.logging import logger
from app.core.policy import Role, parse_role
from app.features.auth.models import User
from app.shared.exceptions import NotFoundException, StoreUnavailableException


class RoleStore(ABC):
    """One role per user identity. Unknown identities resolve to citizen."""

    @abstractmethod
    async def get_role(self, user_id: str) -> Role:
        ...

    @abstractmethod
    async def set_role(self, user_id: str, role: Role) -> None:
        ...


class UserRoleStore(RoleStore):
    """RoleStore backed by the ``users`` collection."""

    @staticmethod
    async def _find_user(user_id: str):
        try:
            object_id = PydanticObjectId(user_id)
        except (InvalidId, TypeError, ValueError):
            return None
        try:
            return await User.get(object_id)
        except PyMongoError as e:
            logger.error(f"Role lookup for {user_id} failed: {type(e).__name__}: {e}")
            raise StoreUnavailableException()

    async def get_role(self, user_id: str) -> Role:
        user = await self._find_user(user_id)
        if user is None or not user.is_active:
            return Role.CITIZEN
        return parse_role(user.role)

    async def set_role(self, user_id: str, role: Role) -> None:
        role = Role(role)
        user = await self._find_user(user_id)
        if user is None:
            raise NotFoundException("User not found")

        user.role = role.value
        user.updated_at = datetime.utcnow()
        try:
            await user.save()
        except PyMongoError as e:
            logger.error(f"Role update for {user_id} failed: {type(e).__name__}: {e}")
            raise StoreUnavailableException()
