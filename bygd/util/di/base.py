"""Base class for dishka providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with an in-memory stand-in for tests
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Provider carrying the metadata used to pick real or mock wiring.

    Attributes:
        __mock_component__: Component a provider family implements, None
            for providers that are never swapped
        __is_mock__: True on the test implementation of a component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
