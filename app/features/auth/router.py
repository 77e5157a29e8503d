from fastapi import APIRouter, Depends, status
from app.features.auth.schemas import (
    SignupRequest,
    SignupResponse,
    LoginRequest,
    LoginResponse,
    UserResponse,
)
from app.features.auth.service import AuthService
from app.features.auth.dependencies import get_current_identity
from app.shared.identity import Identity


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(signup_data: SignupRequest):
    """
    Register a new user.

    - **name**: User's full name
    - **email**: User's email address
    - **password**: Strong password (min 8 chars, 1 uppercase, 1 lowercase, 1 digit)
    - **role**: Requested role (default citizen)
    - **invite**: Invite code, required for asha and admin
    """
    user, access_token = await AuthService.signup(signup_data)

    return SignupResponse(
        access_token=access_token,
        token_type="bearer",
        user=AuthService.user_to_response(user),
    )


@router.post("/login", response_model=LoginResponse)
async def login(login_data: LoginRequest):
    """
    Authenticate user and return access token.

    - **email**: User's email address
    - **password**: User's password
    """
    user, access_token = await AuthService.login(login_data)

    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=AuthService.user_to_response(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_identity: Identity = Depends(get_current_identity)):
    """
    Get current authenticated user's information.

    Requires authentication.
    """
    user = await AuthService.get_active_user(current_identity.user_id)
    return AuthService.user_to_response(user)
