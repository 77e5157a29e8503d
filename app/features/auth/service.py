from typing import Optional
from beanie import PydanticObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, PyMongoError
from app.config import settings
from app.core.invites import validate_invite
from app.core.policy import parse_role
from app.features.auth.models import User
from app.features.auth.schemas import SignupRequest, LoginRequest, UserResponse
from app.core.security import (
    verify_password,
    get_password_hash,
    create_access_token,
)
from app.shared.exceptions import (
    NotFoundException,
    CredentialsException,
    ConflictException,
    ForbiddenException,
    StoreUnavailableException,
)
from app.core.logging import logger


class AuthService:
    """Authentication service for handling auth business logic."""

    @staticmethod
    def issue_token(user: User) -> str:
        """Create an access token identifying the user (never their role)."""
        return create_access_token(data={"sub": str(user.id), "email": user.email})

    @staticmethod
    def user_to_response(user: User) -> UserResponse:
        return UserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=parse_role(user.role),
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @staticmethod
    async def _find_by_email(email: str) -> Optional[User]:
        try:
            return await User.find_one({"email": email})
        except PyMongoError as e:
            logger.error(f"User lookup for {email} failed: {type(e).__name__}: {e}")
            raise StoreUnavailableException()

    @staticmethod
    async def signup(signup_data: SignupRequest) -> tuple[User, str]:
        """
        Register a new user.

        A privileged role is only granted with the matching invite code.

        Returns:
            tuple: (user, access_token)
        """
        if not validate_invite(signup_data.role, signup_data.invite, settings):
            logger.warning(f"Signup for {signup_data.email} rejected: invalid invite for {signup_data.role.value}")
            raise ForbiddenException(f"Invalid invite for {signup_data.role.value.upper()}")

        # Check if user already exists
        existing_user = await AuthService._find_by_email(signup_data.email)
        if existing_user:
            raise ConflictException("Email already registered")

        user = User(
            email=signup_data.email,
            password_hash=get_password_hash(signup_data.password),
            name=signup_data.name,
            role=signup_data.role.value,
        )
        try:
            await user.insert()
        except DuplicateKeyError:
            # Lost a race with another signup for the same email
            raise ConflictException("Email already registered")
        except PyMongoError as e:
            logger.error(f"Signup insert for {signup_data.email} failed: {type(e).__name__}: {e}")
            raise StoreUnavailableException()

        logger.info(f"Registered user {user.id} with role {user.role}")

        return user, AuthService.issue_token(user)

    @staticmethod
    async def login(login_data: LoginRequest) -> tuple[User, str]:
        """
        Authenticate user and return access token.

        Returns:
            tuple: (user, access_token)
        """
        user = await AuthService._find_by_email(login_data.email)
        if not user:
            raise CredentialsException("Invalid email or password")

        if not verify_password(login_data.password, user.password_hash):
            raise CredentialsException("Invalid email or password")

        if not user.is_active:
            raise CredentialsException("Account is inactive")

        return user, AuthService.issue_token(user)

    @staticmethod
    async def get_user_by_id(user_id: str) -> Optional[User]:
        """Get user by ID."""
        try:
            object_id = PydanticObjectId(user_id)
        except (InvalidId, TypeError, ValueError):
            return None
        try:
            return await User.get(object_id)
        except PyMongoError as e:
            logger.error(f"User lookup for {user_id} failed: {type(e).__name__}: {e}")
            raise StoreUnavailableException()

    @staticmethod
    async def get_active_user(user_id: str) -> User:
        user = await AuthService.get_user_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")
        if not user.is_active:
            raise CredentialsException("Inactive user")
        return user
