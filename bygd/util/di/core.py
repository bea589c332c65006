"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from bygd.config import BackendSettings, CommentSettings, Settings, TableSettings
from bygd.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_backend_settings(self, settings: Settings) -> BackendSettings:
        return settings.backend

    @provide(scope=Scope.APP)
    def provide_table_settings(self, settings: Settings) -> TableSettings:
        return settings.tables

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        return settings.comments
