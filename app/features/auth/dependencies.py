from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
from app.core.security import decode_token
from app.core.logging import logger
from app.shared.exceptions import CredentialsException
from app.shared.identity import Identity


# HTTP Bearer security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


def _identity_from_token(token: str) -> Optional[Identity]:
    payload = decode_token(token)
    if payload is None:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return Identity(user_id=str(user_id), email=payload.get("email"))


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Identity:
    """
    Dependency to get the authenticated caller.

    Only the identity comes from the token; the role is resolved by the
    services from the role store on every call.

    Raises:
        CredentialsException: If credentials are missing or invalid
    """
    if credentials is None:
        raise CredentialsException("Not authenticated")

    identity = _identity_from_token(credentials.credentials)
    if identity is None:
        logger.warning("Rejected invalid bearer token")
        raise CredentialsException("Invalid authentication credentials")

    return identity
