"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide

from bygd.adapter.postgrest import PostgrestClient
from bygd.config import BackendSettings, Settings, TableSettings
from bygd.domain.repository import (
    CommentLikeRepository,
    CommentRepository,
    CommunityRepository,
    MembershipRepository,
    ProfileRepository,
    RoleRepository,
)
from bygd.persistence.repository import (
    PostgrestCommentLikeRepository,
    PostgrestCommentRepository,
    PostgrestCommunityRepository,
    PostgrestMembershipRepository,
    PostgrestProfileRepository,
    PostgrestRoleRepository,
)
from bygd.util.di.base import ProviderBase
from bygd.util.error import ConfigurationError
from bygd.util.observability import instrument_httpx

PLACEHOLDER_API_KEY = "CHANGE_ME_IN_PRODUCTION"


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using the hosted PostgREST backend."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_client(
        self, settings: Settings, backend: BackendSettings
    ) -> AsyncIterator[PostgrestClient]:
        """Provide the backend client, closed when the container closes.

        Raises:
            ConfigurationError: If production runs with the placeholder key
        """
        if settings.environment == "production" and backend.api_key == PLACEHOLDER_API_KEY:
            raise ConfigurationError("BACKEND__API_KEY", "must be set in production")

        instrument_httpx()
        client = PostgrestClient(
            base_url=backend.rest_url,
            api_key=backend.api_key,
            access_token=backend.access_token,
            timeout=backend.timeout_seconds,
        )
        logfire.info("Backend client created", url=backend.rest_url)
        try:
            yield client
        finally:
            await client.close()

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(
        self, client: PostgrestClient, tables: TableSettings
    ) -> CommentRepository:
        """Provide Comment repository."""
        return PostgrestCommentRepository(client, tables)

    @provide(scope=Scope.REQUEST)
    def get_comment_like_repository(
        self, client: PostgrestClient, tables: TableSettings
    ) -> CommentLikeRepository:
        """Provide CommentLike repository."""
        return PostgrestCommentLikeRepository(client, tables)

    @provide(scope=Scope.REQUEST)
    def get_community_repository(
        self, client: PostgrestClient, tables: TableSettings
    ) -> CommunityRepository:
        """Provide Community repository."""
        return PostgrestCommunityRepository(client, tables)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(
        self, client: PostgrestClient, tables: TableSettings
    ) -> MembershipRepository:
        """Provide Membership repository."""
        return PostgrestMembershipRepository(client, tables)

    @provide(scope=Scope.REQUEST)
    def get_role_repository(
        self, client: PostgrestClient, tables: TableSettings
    ) -> RoleRepository:
        """Provide Role repository."""
        return PostgrestRoleRepository(client, tables)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(
        self, client: PostgrestClient, tables: TableSettings
    ) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgrestProfileRepository(client, tables)
