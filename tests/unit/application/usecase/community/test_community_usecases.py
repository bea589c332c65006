"""Unit tests for the community use cases."""

from datetime import timedelta

import pytest

from bygd.application.action import ActionTracker
from bygd.application.usecase.community import (
    GetMemberRosterRequest,
    GetMemberRosterUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    MembershipRequest,
    ModerateMemberRequest,
    ModerateMemberUseCase,
    ResolveViewerRoleRequest,
    ResolveViewerRoleUseCase,
    member_action_key,
)
from bygd.domain.error import (
    AuthorizationDenied,
    DataAccessError,
    InvariantViolation,
    NotFoundError,
)
from bygd.domain.model.community import Membership, RoleAssignment
from bygd.domain.repository import (
    CommunityRepository,
    MembershipRepository,
    RoleRepository,
)
from bygd.domain.value import ActionStatus, ModerationAction, Role
from tests.factories import BASE_TIME, make_community, new_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _community(env, members=(), moderators=()):
    """Seed a community whose owner joined first."""
    owner = new_user()
    community = make_community(owner)
    await (await env.get(CommunityRepository)).save(community)
    membership_repo = await env.get(MembershipRepository)
    for i, user_id in enumerate([owner, *members]):
        await membership_repo.save(
            Membership(
                community_id=community.id,
                user_id=user_id,
                joined_at=BASE_TIME + timedelta(hours=i),
            )
        )
    role_repo = await env.get(RoleRepository)
    for user_id in moderators:
        await role_repo.save(RoleAssignment(community_id=community.id, user_id=user_id))
    return community, owner


def _moderate(community, actor, target, action):
    return ModerateMemberRequest(
        community_id=str(community.id),
        actor_id=str(actor),
        target_user_id=str(target),
        action=action,
    )


class TestResolveViewerRole:
    """Tests for ResolveViewerRoleUseCase."""

    @pytest.mark.asyncio
    async def test_roles(self, unit_env):
        member, moderator = new_user(), new_user()
        community, owner = await _community(
            unit_env, members=[member, moderator], moderators=[moderator]
        )
        use_case = await unit_env.get(ResolveViewerRoleUseCase)

        async def resolve(user_id):
            return await use_case.execute(
                ResolveViewerRoleRequest(
                    community_id=str(community.id),
                    user_id=str(user_id) if user_id else None,
                )
            )

        owner_view = await resolve(owner)
        assert owner_view.role == Role.OWNER
        assert owner_view.is_owner
        assert owner_view.can_moderate

        moderator_view = await resolve(moderator)
        assert moderator_view.role == Role.MODERATOR
        assert moderator_view.can_moderate
        assert not moderator_view.is_owner

        assert (await resolve(member)).role == Role.MEMBER
        assert (await resolve(new_user())).role == Role.GUEST
        anonymous = await resolve(None)
        assert anonymous.role == Role.GUEST
        assert not anonymous.can_moderate

    @pytest.mark.asyncio
    async def test_unknown_community(self, unit_env):
        use_case = await unit_env.get(ResolveViewerRoleUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                ResolveViewerRoleRequest(community_id=str(make_community().id))
            )


class TestGetMemberRoster:
    """Tests for GetMemberRosterUseCase."""

    @pytest.mark.asyncio
    async def test_owner_sees_allowed_actions(self, unit_env):
        member, moderator = new_user(), new_user()
        community, owner = await _community(
            unit_env, members=[member, moderator], moderators=[moderator]
        )
        use_case = await unit_env.get(GetMemberRosterUseCase)

        response = await use_case.execute(
            GetMemberRosterRequest(community_id=str(community.id), actor_id=str(owner))
        )

        assert response.actor_role == Role.OWNER
        assert response.total == 3
        assert response.moderators == 1
        assert response.owners == 1
        rows = {item.user_id: item for item in response.members}

        me = rows[str(owner)]
        assert me.is_me
        assert (me.can_promote, me.can_demote, me.can_remove) == (False, False, False)

        plain = rows[str(member)]
        assert (plain.can_promote, plain.can_demote, plain.can_remove) == (
            True,
            False,
            True,
        )

        mod = rows[str(moderator)]
        assert (mod.can_promote, mod.can_demote, mod.can_remove) == (False, True, True)

    @pytest.mark.asyncio
    async def test_moderator_may_only_remove_members(self, unit_env):
        member, moderator, other_mod = new_user(), new_user(), new_user()
        community, owner = await _community(
            unit_env,
            members=[member, moderator, other_mod],
            moderators=[moderator, other_mod],
        )
        use_case = await unit_env.get(GetMemberRosterUseCase)

        response = await use_case.execute(
            GetMemberRosterRequest(
                community_id=str(community.id), actor_id=str(moderator)
            )
        )

        rows = {item.user_id: item for item in response.members}
        assert rows[str(member)].can_remove
        assert not rows[str(member)].can_promote
        assert not rows[str(other_mod)].can_remove
        assert not rows[str(owner)].can_remove
        assert not rows[str(moderator)].can_remove

    @pytest.mark.asyncio
    async def test_member_denied(self, unit_env):
        member = new_user()
        community, _ = await _community(unit_env, members=[member])
        use_case = await unit_env.get(GetMemberRosterUseCase)

        with pytest.raises(AuthorizationDenied):
            await use_case.execute(
                GetMemberRosterRequest(
                    community_id=str(community.id), actor_id=str(member)
                )
            )


class TestModerateMember:
    """Tests for ModerateMemberUseCase."""

    @pytest.mark.asyncio
    async def test_promote_then_demote(self, unit_env):
        member = new_user()
        community, owner = await _community(unit_env, members=[member])
        use_case = await unit_env.get(ModerateMemberUseCase)
        tracker = await unit_env.get(ActionTracker)
        role_repo = await unit_env.get(RoleRepository)

        promoted = await use_case.execute(
            _moderate(community, owner, member, ModerationAction.PROMOTE)
        )

        assert promoted.previous_role == Role.MEMBER
        assert promoted.new_role == Role.MODERATOR
        assert promoted.status == ActionStatus.DONE
        assert await role_repo.get_explicit_role(community.id, member) == Role.MODERATOR
        key = member_action_key(ModerationAction.PROMOTE, community.id, member)
        assert tracker.get(key).status == ActionStatus.DONE

        demoted = await use_case.execute(
            _moderate(community, owner, member, ModerationAction.DEMOTE)
        )

        assert demoted.previous_role == Role.MODERATOR
        assert demoted.new_role == Role.MEMBER
        assert await role_repo.get_explicit_role(community.id, member) is None

    @pytest.mark.asyncio
    async def test_moderator_removes_member(self, unit_env):
        member, moderator = new_user(), new_user()
        community, _ = await _community(
            unit_env, members=[member, moderator], moderators=[moderator]
        )
        use_case = await unit_env.get(ModerateMemberUseCase)

        response = await use_case.execute(
            _moderate(community, moderator, member, ModerationAction.REMOVE_MEMBER)
        )

        assert response.new_role == Role.GUEST
        membership_repo = await unit_env.get(MembershipRepository)
        assert not await membership_repo.is_member(community.id, member)

    @pytest.mark.asyncio
    async def test_denied_action_marks_failed_without_store_call(
        self, unit_env, monkeypatch
    ):
        member, moderator = new_user(), new_user()
        community, _ = await _community(
            unit_env, members=[member, moderator], moderators=[moderator]
        )
        use_case = await unit_env.get(ModerateMemberUseCase)
        tracker = await unit_env.get(ActionTracker)
        role_repo = await unit_env.get(RoleRepository)
        calls = []

        async def record(*args, **kwargs):
            calls.append(args)

        monkeypatch.setattr(role_repo, "upsert_moderator_role", record)

        with pytest.raises(AuthorizationDenied):
            await use_case.execute(
                _moderate(community, moderator, member, ModerationAction.PROMOTE)
            )

        assert calls == []
        key = member_action_key(ModerationAction.PROMOTE, community.id, member)
        state = tracker.get(key)
        assert state.status == ActionStatus.FAILED
        assert state.message == "Only the owner can appoint moderators."

    @pytest.mark.asyncio
    async def test_owner_cannot_be_removed(self, unit_env):
        moderator = new_user()
        community, owner = await _community(
            unit_env, members=[moderator], moderators=[moderator]
        )
        use_case = await unit_env.get(ModerateMemberUseCase)

        with pytest.raises(AuthorizationDenied):
            await use_case.execute(
                _moderate(community, moderator, owner, ModerationAction.REMOVE_MEMBER)
            )

        membership_repo = await unit_env.get(MembershipRepository)
        assert await membership_repo.is_member(community.id, owner)

    @pytest.mark.asyncio
    async def test_non_member_target_denied(self, unit_env):
        community, owner = await _community(unit_env)
        use_case = await unit_env.get(ModerateMemberUseCase)

        with pytest.raises(AuthorizationDenied):
            await use_case.execute(
                _moderate(community, owner, new_user(), ModerationAction.PROMOTE)
            )

    @pytest.mark.asyncio
    async def test_store_failure_marks_failed(self, unit_env, monkeypatch):
        member = new_user()
        community, owner = await _community(unit_env, members=[member])
        use_case = await unit_env.get(ModerateMemberUseCase)
        tracker = await unit_env.get(ActionTracker)
        role_repo = await unit_env.get(RoleRepository)

        async def fail(*args, **kwargs):
            raise DataAccessError("upsert_moderator_role", "permission denied")

        monkeypatch.setattr(role_repo, "upsert_moderator_role", fail)

        with pytest.raises(DataAccessError):
            await use_case.execute(
                _moderate(community, owner, member, ModerationAction.PROMOTE)
            )

        key = member_action_key(ModerationAction.PROMOTE, community.id, member)
        assert tracker.get(key).status == ActionStatus.FAILED

        # A failed action may be retried
        monkeypatch.undo()
        response = await use_case.execute(
            _moderate(community, owner, member, ModerationAction.PROMOTE)
        )
        assert response.new_role == Role.MODERATOR
        assert tracker.get(key).status == ActionStatus.DONE

    @pytest.mark.asyncio
    async def test_malformed_id_does_not_leave_action_pending(self, unit_env):
        member = new_user()
        community, owner = await _community(unit_env, members=[member])
        use_case = await unit_env.get(ModerateMemberUseCase)
        tracker = await unit_env.get(ActionTracker)

        with pytest.raises(ValueError):
            await use_case.execute(
                ModerateMemberRequest(
                    community_id="not-a-uuid",
                    actor_id=str(owner),
                    target_user_id=str(member),
                    action=ModerationAction.PROMOTE,
                )
            )

        assert tracker.busy == frozenset()
        response = await use_case.execute(
            _moderate(community, owner, member, ModerationAction.PROMOTE)
        )
        assert response.new_role == Role.MODERATOR

    @pytest.mark.asyncio
    async def test_unexpected_error_marks_failed(self, unit_env, monkeypatch):
        member = new_user()
        community, owner = await _community(unit_env, members=[member])
        use_case = await unit_env.get(ModerateMemberUseCase)
        tracker = await unit_env.get(ActionTracker)
        role_repo = await unit_env.get(RoleRepository)

        async def broken(*args, **kwargs):
            raise RuntimeError("unexpected row")

        monkeypatch.setattr(role_repo, "upsert_moderator_role", broken)

        with pytest.raises(RuntimeError):
            await use_case.execute(
                _moderate(community, owner, member, ModerationAction.PROMOTE)
            )

        key = member_action_key(ModerationAction.PROMOTE, community.id, member)
        assert tracker.get(key).status == ActionStatus.FAILED
        assert tracker.get(key).message == "unexpected row"

    @pytest.mark.asyncio
    async def test_action_state_is_kept_per_community(self, unit_env):
        user = new_user()
        first, first_owner = await _community(unit_env, members=[user])
        second, _ = await _community(unit_env, members=[user])
        use_case = await unit_env.get(ModerateMemberUseCase)
        tracker = await unit_env.get(ActionTracker)

        await use_case.execute(
            _moderate(first, first_owner, user, ModerationAction.PROMOTE)
        )

        done = member_action_key(ModerationAction.PROMOTE, first.id, user)
        untouched = member_action_key(ModerationAction.PROMOTE, second.id, user)
        assert done != untouched
        assert tracker.get(done).status == ActionStatus.DONE
        assert tracker.get(untouched).status == ActionStatus.IDLE

    @pytest.mark.asyncio
    async def test_rejects_content_action(self, unit_env):
        community, owner = await _community(unit_env)
        use_case = await unit_env.get(ModerateMemberUseCase)

        with pytest.raises(ValueError):
            await use_case.execute(
                _moderate(community, owner, owner, ModerationAction.DELETE_CONTENT)
            )


class TestMembership:
    """Tests for joining and leaving."""

    @pytest.mark.asyncio
    async def test_join_and_leave(self, unit_env):
        community, _ = await _community(unit_env)
        user = new_user()
        request = MembershipRequest(community_id=str(community.id), user_id=str(user))

        joined = await (await unit_env.get(JoinCommunityUseCase)).execute(request)
        assert joined.role == Role.MEMBER
        assert joined.member_count == 2

        with pytest.raises(InvariantViolation):
            await (await unit_env.get(JoinCommunityUseCase)).execute(request)

        left = await (await unit_env.get(LeaveCommunityUseCase)).execute(request)
        assert left.role == Role.GUEST
        assert left.member_count == 1

    @pytest.mark.asyncio
    async def test_leaving_clears_moderator_role(self, unit_env):
        moderator = new_user()
        community, _ = await _community(
            unit_env, members=[moderator], moderators=[moderator]
        )

        await (await unit_env.get(LeaveCommunityUseCase)).execute(
            MembershipRequest(community_id=str(community.id), user_id=str(moderator))
        )

        role_repo = await unit_env.get(RoleRepository)
        assert await role_repo.get_explicit_role(community.id, moderator) is None
