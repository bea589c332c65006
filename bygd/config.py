"""Application configuration."""

from typing import Literal

from pydantic import BaseModel, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseModel):
    """Hosted backend (PostgREST) configuration."""

    # Base URL of the REST endpoint, e.g. https://<project>.supabase.co
    url: str = "http://localhost:54321"
    rest_path: str = "/rest/v1"

    # Public API key sent with every request
    api_key: str = "CHANGE_ME_IN_PRODUCTION"

    # Optional user access token; the api key is used as bearer when unset
    access_token: str | None = None

    timeout_seconds: float = 10.0

    @computed_field
    @property
    def rest_url(self) -> str:
        """Full REST base URL."""
        return f"{self.url.rstrip('/')}{self.rest_path}"


class TableSettings(BaseModel):
    """Table names in the hosted backend."""

    comments: str = "comments"
    comment_likes: str = "comment_likes"
    communities: str = "bygder"
    members: str = "bygd_members"
    roles: str = "bygd_roles"
    profiles: str = "profiles"


class CommentSettings(BaseModel):
    """Comment thread display configuration."""

    # Number of thread roots shown before "show more"
    default_visible_roots: int = 2

    # Name used in the @mention prefill when the target has no display name
    mention_fallback_name: str = "bruker"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends when a token is present, otherwise console-only
    send_to_logfire: bool | None = None

    # Console output can be switched off entirely (e.g. in tests)
    console: bool = True


class Settings(BaseSettings):
    """Application settings.

    Loaded from environment variables and a ``.env`` file. Nested sections
    use ``__`` as delimiter:

        BACKEND__URL=https://abc.supabase.co
        BACKEND__API_KEY=...
        COMMENTS__DEFAULT_VISIBLE_ROOTS=3
        OBSERVABILITY__LOGFIRE_TOKEN=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    backend: BackendSettings = BackendSettings()
    tables: TableSettings = TableSettings()
    comments: CommentSettings = CommentSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
