"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One user-facing operation: a request model in, a response model out."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
