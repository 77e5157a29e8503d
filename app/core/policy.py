"""
Authorization policy.

``can()`` is the single place that decides who may do what. Services call it
before touching any store; the route gate and the ``/roles/me`` endpoint read
the same table.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from app.core.logging import logger


class Role(str, Enum):
    """Roles a user identity can hold."""
    CITIZEN = "citizen"
    ASHA = "asha"
    ADMIN = "admin"


class Action(str, Enum):
    CREATE_RECORD = "create_record"
    VIEW_OWN_RECORDS = "view_own_records"
    VIEW_REGISTERED_RECORDS = "view_registered_records"
    UPDATE_RECORD = "update_record"
    REGISTER_RECORD = "register_record"
    VIEW_VILLAGE_DETAIL = "view_village_detail"
    ASSIGN_ROLE = "assign_role"


class Ownership(str, Enum):
    """Relationship between the actor and the target record."""
    OWNED = "owned"
    NOT_OWNED = "not_owned"
    NOT_APPLICABLE = "not_applicable"


class Grant(str, Enum):
    ANY = "any"
    OWN_ONLY = "own_only"


# action -> role -> grant; a role missing from an action's entry is denied
POLICY: Dict[Action, Dict[Role, Grant]] = {
    Action.CREATE_RECORD: {Role.ASHA: Grant.ANY, Role.ADMIN: Grant.ANY},
    Action.VIEW_OWN_RECORDS: {Role.ASHA: Grant.OWN_ONLY, Role.ADMIN: Grant.OWN_ONLY},
    Action.VIEW_REGISTERED_RECORDS: {Role.ASHA: Grant.ANY, Role.ADMIN: Grant.ANY},
    Action.UPDATE_RECORD: {Role.ASHA: Grant.OWN_ONLY, Role.ADMIN: Grant.ANY},
    Action.REGISTER_RECORD: {Role.ASHA: Grant.OWN_ONLY, Role.ADMIN: Grant.ANY},
    Action.VIEW_VILLAGE_DETAIL: {Role.ASHA: Grant.ANY, Role.ADMIN: Grant.ANY},
    Action.ASSIGN_ROLE: {Role.ADMIN: Grant.ANY},
}


def parse_role(value: Any) -> Role:
    """
    Coerce a stored role value into a Role.

    Missing values fall back to citizen. Unknown strings also fall back to
    citizen so that no arbitrary string reaches a policy check.
    """
    if isinstance(value, Role):
        return value
    if not value:
        return Role.CITIZEN
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unrecognised role value {value!r}, treating as citizen")
        return Role.CITIZEN


def can(
    role: Optional[Role],
    action: Action,
    ownership: Ownership = Ownership.NOT_APPLICABLE,
) -> bool:
    """
    Decide whether ``role`` may perform ``action``.

    Args:
        role: Resolved role of the actor (None is treated as citizen)
        action: The action being attempted
        ownership: Whether the actor owns the target record. With
            NOT_APPLICABLE an owner-scoped grant answers whether the role
            may perform the action at all, which is what callers check
            before loading the record.

    Returns:
        True if the action is permitted
    """
    grant = POLICY.get(action, {}).get(parse_role(role))
    if grant is None:
        return False
    if grant is Grant.OWN_ONLY:
        return ownership is not Ownership.NOT_OWNED
    return True


def ownership_of(owner_identity: str, actor_identity: str) -> Ownership:
    return Ownership.OWNED if owner_identity == actor_identity else Ownership.NOT_OWNED


def permitted_actions(role: Optional[Role]) -> List[Action]:
    """List the actions a role may perform on at least its own records."""
    return [action for action in Action if can(role, action)]
