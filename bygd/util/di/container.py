"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from bygd.config import Settings
from bygd.util.di import PROVIDERS, get_provider
from bygd.util.logging import setup_logging
from bygd.util.observability import configure_logfire


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Logging
    and logfire are configured before the container is built.

    Returns:
        Configured DI container with production providers
    """
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
