"""Application layer DI providers."""

from dishka import Scope, provide

from bygd.application.action import ActionTracker
from bygd.application.discussion import DiscussionRegistry
from bygd.application.usecase.community import (
    GetMemberRosterUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    ModerateMemberUseCase,
    ResolveViewerRoleUseCase,
)
from bygd.application.usecase.discussion import (
    ChangeDiscussionViewUseCase,
    DeleteCommentUseCase,
    LoadDiscussionUseCase,
    SubmitCommentUseCase,
    ToggleCommentLikeUseCase,
)
from bygd.config import CommentSettings
from bygd.domain.service import CommentService, MembershipService, RoleService
from bygd.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed.

    Discussion stores and moderation action state outlive single requests
    and are APP-scoped; use cases are built per request.
    """

    @provide(scope=Scope.APP)
    def get_discussion_registry(self, settings: CommentSettings) -> DiscussionRegistry:
        """Provide the registry of open discussions."""
        return DiscussionRegistry(settings=settings)

    @provide(scope=Scope.APP)
    def get_action_tracker(self) -> ActionTracker:
        """Provide moderation action state."""
        return ActionTracker()

    # Discussion use cases
    @provide(scope=Scope.REQUEST)
    def get_load_discussion_use_case(
        self,
        comment_service: CommentService,
        role_service: RoleService,
        registry: DiscussionRegistry,
    ) -> LoadDiscussionUseCase:
        """Provide load discussion use case."""
        return LoadDiscussionUseCase(
            comment_service=comment_service,
            role_service=role_service,
            registry=registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self,
        comment_service: CommentService,
        role_service: RoleService,
        registry: DiscussionRegistry,
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            comment_service=comment_service,
            role_service=role_service,
            registry=registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self,
        comment_service: CommentService,
        role_service: RoleService,
        registry: DiscussionRegistry,
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service,
            role_service=role_service,
            registry=registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_toggle_comment_like_use_case(
        self,
        comment_service: CommentService,
        role_service: RoleService,
        registry: DiscussionRegistry,
    ) -> ToggleCommentLikeUseCase:
        """Provide toggle comment like use case."""
        return ToggleCommentLikeUseCase(
            comment_service=comment_service,
            role_service=role_service,
            registry=registry,
        )

    @provide(scope=Scope.REQUEST)
    def get_change_discussion_view_use_case(
        self,
        comment_service: CommentService,
        role_service: RoleService,
        registry: DiscussionRegistry,
    ) -> ChangeDiscussionViewUseCase:
        """Provide change discussion view use case."""
        return ChangeDiscussionViewUseCase(
            comment_service=comment_service,
            role_service=role_service,
            registry=registry,
        )

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_resolve_viewer_role_use_case(
        self, role_service: RoleService
    ) -> ResolveViewerRoleUseCase:
        """Provide resolve viewer role use case."""
        return ResolveViewerRoleUseCase(role_service=role_service)

    @provide(scope=Scope.REQUEST)
    def get_member_roster_use_case(
        self, role_service: RoleService
    ) -> GetMemberRosterUseCase:
        """Provide get member roster use case."""
        return GetMemberRosterUseCase(role_service=role_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_member_use_case(
        self,
        role_service: RoleService,
        membership_service: MembershipService,
        tracker: ActionTracker,
    ) -> ModerateMemberUseCase:
        """Provide moderate member use case."""
        return ModerateMemberUseCase(
            role_service=role_service,
            membership_service=membership_service,
            tracker=tracker,
        )

    @provide(scope=Scope.REQUEST)
    def get_join_community_use_case(
        self, role_service: RoleService, membership_service: MembershipService
    ) -> JoinCommunityUseCase:
        """Provide join community use case."""
        return JoinCommunityUseCase(
            role_service=role_service, membership_service=membership_service
        )

    @provide(scope=Scope.REQUEST)
    def get_leave_community_use_case(
        self, role_service: RoleService, membership_service: MembershipService
    ) -> LeaveCommunityUseCase:
        """Provide leave community use case."""
        return LeaveCommunityUseCase(
            role_service=role_service, membership_service=membership_service
        )
