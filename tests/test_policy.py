"""
Unit tests for the authorization policy and invite validation.
"""

import pytest

from app.config import Settings
from app.core.invites import validate_invite
from app.core.policy import Action, Ownership, Role, can, parse_role, permitted_actions


OWNED, NOT_OWNED, NA = Ownership.OWNED, Ownership.NOT_OWNED, Ownership.NOT_APPLICABLE


# (action, role) -> (owned, not_owned)
EXPECTED = {
    (Action.CREATE_RECORD, Role.CITIZEN): (False, False),
    (Action.CREATE_RECORD, Role.ASHA): (True, True),
    (Action.CREATE_RECORD, Role.ADMIN): (True, True),
    (Action.VIEW_OWN_RECORDS, Role.CITIZEN): (False, False),
    (Action.VIEW_OWN_RECORDS, Role.ASHA): (True, False),
    (Action.VIEW_OWN_RECORDS, Role.ADMIN): (True, False),
    (Action.VIEW_REGISTERED_RECORDS, Role.CITIZEN): (False, False),
    (Action.VIEW_REGISTERED_RECORDS, Role.ASHA): (True, True),
    (Action.VIEW_REGISTERED_RECORDS, Role.ADMIN): (True, True),
    (Action.UPDATE_RECORD, Role.CITIZEN): (False, False),
    (Action.UPDATE_RECORD, Role.ASHA): (True, False),
    (Action.UPDATE_RECORD, Role.ADMIN): (True, True),
    (Action.REGISTER_RECORD, Role.CITIZEN): (False, False),
    (Action.REGISTER_RECORD, Role.ASHA): (True, False),
    (Action.REGISTER_RECORD, Role.ADMIN): (True, True),
    (Action.VIEW_VILLAGE_DETAIL, Role.CITIZEN): (False, False),
    (Action.VIEW_VILLAGE_DETAIL, Role.ASHA): (True, True),
    (Action.VIEW_VILLAGE_DETAIL, Role.ADMIN): (True, True),
    (Action.ASSIGN_ROLE, Role.CITIZEN): (False, False),
    (Action.ASSIGN_ROLE, Role.ASHA): (False, False),
    (Action.ASSIGN_ROLE, Role.ADMIN): (True, True),
}


# ── Tests: can ───────────────────────────────────────────────────────

def test_table_covers_every_action_and_role():
    assert {key for key in EXPECTED} == {(a, r) for a in Action for r in Role}


@pytest.mark.parametrize("action,role", sorted(EXPECTED, key=str))
def test_can_matches_table(action, role):
    owned, not_owned = EXPECTED[(action, role)]
    assert can(role, action, OWNED) is owned
    assert can(role, action, NOT_OWNED) is not_owned


def test_citizen_cannot_create_in_any_ownership():
    for ownership in Ownership:
        assert can(Role.CITIZEN, Action.CREATE_RECORD, ownership) is False


def test_admin_updates_records_it_does_not_own():
    assert can(Role.ADMIN, Action.UPDATE_RECORD, NOT_OWNED) is True


def test_owner_scoped_grant_answers_role_level_question():
    assert can(Role.ASHA, Action.UPDATE_RECORD, NA) is True
    assert can(Role.CITIZEN, Action.UPDATE_RECORD, NA) is False


def test_missing_role_is_citizen():
    assert can(None, Action.CREATE_RECORD) is False
    assert parse_role(None) is Role.CITIZEN
    assert parse_role("") is Role.CITIZEN


def test_parse_role_rejects_unknown_strings():
    assert parse_role("superuser") is Role.CITIZEN
    assert parse_role(" ASHA ") is Role.ASHA
    assert parse_role(Role.ADMIN) is Role.ADMIN


def test_permitted_actions_per_role():
    assert permitted_actions(Role.CITIZEN) == []
    assert Action.ASSIGN_ROLE not in permitted_actions(Role.ASHA)
    assert set(permitted_actions(Role.ADMIN)) == set(Action)


# ── Tests: validate_invite ──────────────────────────────────────────

@pytest.fixture
def config():
    return Settings(JWT_SECRET_KEY="x", ASHA_INVITE_CODE="ASHA-CODE", ADMIN_INVITE_CODE="ADMIN-CODE")


def test_invite_wrong_token_fails(config):
    assert validate_invite("asha", "WRONG", config) is False


def test_invite_correct_token_passes(config):
    assert validate_invite("asha", config.ASHA_INVITE_CODE, config) is True
    assert validate_invite(Role.ADMIN, config.ADMIN_INVITE_CODE, config) is True


def test_invite_not_needed_for_citizen(config):
    assert validate_invite("citizen", "", config) is True
    assert validate_invite(Role.CITIZEN, None, config) is True


def test_invite_absent_token_fails_closed(config):
    assert validate_invite("admin", None, config) is False
    assert validate_invite("asha", "", config) is False


def test_invite_tokens_are_not_interchangeable(config):
    assert validate_invite("admin", config.ASHA_INVITE_CODE, config) is False


def test_invite_empty_configured_code_disables_role():
    config = Settings(JWT_SECRET_KEY="x", ADMIN_INVITE_CODE="")
    assert validate_invite("admin", "", config) is False
    assert validate_invite("admin", "anything", config) is False
