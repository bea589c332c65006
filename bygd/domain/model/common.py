"""Shared base for bygd entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Frozen entity or snapshot.

    Records handed to the tree builder and the discussion store are never
    mutated in place; changes always produce a new instance.
    """

    model_config = ConfigDict(frozen=True)
