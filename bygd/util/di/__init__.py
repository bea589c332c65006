"""Dependency injection wiring."""

from typing import Type

from bygd.util.di.application import ProdApplicationProvider
from bygd.util.di.base import Component, ProviderBase
from bygd.util.di.core import ProdConfigProvider
from bygd.util.di.domain import ProdDomainProvider
from bygd.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider
from bygd.util.error import DependencyInjectionError

# Settings, services and use cases are always real; the store layer is
# chosen per container.
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for one PROVIDERS entry.

    A base without subclasses is used as-is. A base with subclasses is a
    swappable component, and the subclass whose ``__is_mock__`` matches
    ``use_mock`` is returned.

    Raises:
        DependencyInjectionError: If the component has no such implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise DependencyInjectionError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
