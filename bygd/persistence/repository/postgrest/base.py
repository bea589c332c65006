"""Shared base for PostgREST-backed repositories."""

from contextlib import contextmanager
from typing import Iterator

from bygd.adapter.error import PostgrestError
from bygd.adapter.postgrest import PostgrestClient
from bygd.config import TableSettings
from bygd.domain.error import DataAccessError


class PostgrestRepository:
    """Holds the client and table names; translates backend errors."""

    def __init__(self, client: PostgrestClient, tables: TableSettings) -> None:
        """Initialize repository.

        Args:
            client: PostgREST client
            tables: Backend table names
        """
        self.client = client
        self.tables = tables

    @contextmanager
    def translate(self, operation: str) -> Iterator[None]:
        """Re-raise backend failures as DataAccessError."""
        try:
            yield
        except PostgrestError as e:
            raise DataAccessError(operation, str(e)) from e
