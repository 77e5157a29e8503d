"""
Tests for self-service and admin role assignment.
"""

import pytest

from app.config import Settings
from app.core.policy import Action, Role
from app.features.roles.service import RoleService
from app.shared.exceptions import ForbiddenException, NotFoundException

from conftest import actor


@pytest.fixture
def service(role_store):
    config = Settings(JWT_SECRET_KEY="x", ASHA_INVITE_CODE="ASHA-CODE", ADMIN_INVITE_CODE="ADMIN-CODE")
    return RoleService(role_store, config)


async def test_describe_resolves_role_server_side(service):
    response = await service.describe(actor("asha-1"))

    assert response.role == Role.ASHA
    assert response.can_create_records is True
    assert Action.ASSIGN_ROLE not in response.permissions


async def test_self_service_with_valid_invite(service, role_store):
    response = await service.request_role(actor("citizen-1"), Role.ASHA, "ASHA-CODE")

    assert response.role == Role.ASHA
    assert role_store.roles["citizen-1"] == Role.ASHA


async def test_self_service_with_wrong_invite_changes_nothing(service, role_store):
    with pytest.raises(ForbiddenException):
        await service.request_role(actor("citizen-1"), Role.ADMIN, "ASHA-CODE")

    assert role_store.roles["citizen-1"] == Role.CITIZEN


async def test_self_service_citizen_needs_no_invite(service, role_store):
    await service.request_role(actor("asha-1"), Role.CITIZEN)
    assert role_store.roles["asha-1"] == Role.CITIZEN


async def test_admin_assigns_role(service, role_store):
    response = await service.assign_role(actor("admin-1"), "citizen-1", Role.ASHA)

    assert response.user_id == "citizen-1"
    assert role_store.roles["citizen-1"] == Role.ASHA


@pytest.mark.parametrize("user_id", ["asha-1", "citizen-1"])
async def test_non_admin_cannot_assign(service, role_store, user_id):
    with pytest.raises(ForbiddenException):
        await service.assign_role(actor(user_id), "asha-2", Role.ADMIN)
    assert role_store.roles["asha-2"] == Role.ASHA


async def test_assign_to_unknown_user(service):
    with pytest.raises(NotFoundException):
        await service.assign_role(actor("admin-1"), "missing-user", Role.ASHA)


async def test_role_change_applies_on_next_lookup(service, role_store):
    await service.assign_role(actor("admin-1"), "citizen-1", Role.ADMIN)
    assert (await service.describe(actor("citizen-1"))).role == Role.ADMIN
