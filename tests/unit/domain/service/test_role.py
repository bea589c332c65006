"""Unit tests for role resolution and membership transitions."""

import pytest

from bygd.domain.error import DataAccessError, InvariantViolation
from bygd.domain.service.role import can_moderate, resolve_role, transition
from bygd.domain.value import MembershipEvent, Role
from tests.factories import make_community, new_user


def _lookup(role):
    return lambda community_id, user_id: role


def _failing_lookup(community_id, user_id):
    raise DataAccessError("get_role", "connection reset")


class TestResolveRole:
    """Tests for resolve_role."""

    def test_creator_is_owner_without_membership(self):
        owner = new_user()
        community = make_community(owner)

        assert resolve_role(community, owner, False, _lookup(None)) == Role.OWNER

    def test_creator_is_owner_even_with_role_row(self):
        owner = new_user()
        community = make_community(owner)

        role = resolve_role(community, owner, True, _lookup(Role.MODERATOR))

        assert role == Role.OWNER

    def test_non_member_is_guest(self):
        community = make_community()

        role = resolve_role(community, new_user(), False, _lookup(Role.MODERATOR))

        assert role == Role.GUEST

    def test_anonymous_is_guest(self):
        assert resolve_role(make_community(), None, False, _lookup(None)) == Role.GUEST

    def test_member_with_moderator_row(self):
        role = resolve_role(make_community(), new_user(), True, _lookup(Role.MODERATOR))

        assert role == Role.MODERATOR

    def test_member_without_row(self):
        role = resolve_role(make_community(), new_user(), True, _lookup(None))

        assert role == Role.MEMBER

    def test_stored_owner_row_never_grants_owner(self):
        role = resolve_role(make_community(), new_user(), True, _lookup(Role.OWNER))

        assert role == Role.MEMBER

    def test_lookup_failure_degrades_to_member(self):
        role = resolve_role(make_community(), new_user(), True, _failing_lookup)

        assert role == Role.MEMBER

    @pytest.mark.parametrize(
        "role, expected",
        [
            (Role.OWNER, True),
            (Role.MODERATOR, True),
            (Role.MEMBER, False),
            (Role.GUEST, False),
        ],
    )
    def test_can_moderate(self, role, expected):
        assert can_moderate(role) is expected


class TestTransition:
    """Tests for the membership state machine."""

    @pytest.mark.parametrize(
        "current, event, expected",
        [
            (Role.GUEST, MembershipEvent.JOIN, Role.MEMBER),
            (Role.MEMBER, MembershipEvent.PROMOTE, Role.MODERATOR),
            (Role.MODERATOR, MembershipEvent.DEMOTE, Role.MEMBER),
            (Role.MEMBER, MembershipEvent.LEAVE, Role.GUEST),
            (Role.MODERATOR, MembershipEvent.REMOVE, Role.GUEST),
            (Role.OWNER, MembershipEvent.LEAVE, Role.OWNER),
        ],
    )
    def test_valid_transitions(self, current, event, expected):
        assert transition(current, event) == expected

    @pytest.mark.parametrize(
        "current, event",
        [
            (Role.MEMBER, MembershipEvent.JOIN),
            (Role.GUEST, MembershipEvent.LEAVE),
            (Role.GUEST, MembershipEvent.PROMOTE),
            (Role.MODERATOR, MembershipEvent.PROMOTE),
            (Role.MEMBER, MembershipEvent.DEMOTE),
            (Role.OWNER, MembershipEvent.DEMOTE),
            (Role.OWNER, MembershipEvent.REMOVE),
        ],
    )
    def test_invalid_transitions_raise(self, current, event):
        with pytest.raises(InvariantViolation):
            transition(current, event)
