"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable value compared field by field."""

    model_config = ConfigDict(frozen=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Validated wrapper around one primitive, read back through ``.root``."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
