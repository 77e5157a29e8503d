from typing import Optional
from pydantic import BaseModel

from app.shared.exceptions import CredentialsException


class Identity(BaseModel):
    """Authenticated caller, as established server-side from the bearer token."""

    user_id: str
    email: Optional[str] = None
    is_authenticated: bool = True


def require_identity(actor: Optional[Identity]) -> Identity:
    """Return the actor or raise Unauthenticated."""
    if actor is None or not actor.is_authenticated or not actor.user_id:
        raise CredentialsException()
    return actor
