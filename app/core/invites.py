"""Invite-code check for self-service elevation to a privileged role."""

import secrets
from typing import Optional

from app.config import Settings
from app.core.policy import Role, parse_role


def expected_invite(role: Role, config: Settings) -> Optional[str]:
    """Return the configured invite code for a privileged role."""
    if role is Role.ASHA:
        return config.ASHA_INVITE_CODE
    if role is Role.ADMIN:
        return config.ADMIN_INVITE_CODE
    return None


def validate_invite(requested_role, submitted_token: Optional[str], config: Settings) -> bool:
    """
    Check a submitted invite token against the code configured for a role.

    Citizen needs no token. For asha and admin an absent token, an empty
    configured code or any mismatch fails closed.
    """
    role = parse_role(requested_role)
    if role is Role.CITIZEN:
        return True

    expected = expected_invite(role, config)
    if not expected or not submitted_token:
        return False

    return secrets.compare_digest(submitted_token.encode("utf-8"), expected.encode("utf-8"))
