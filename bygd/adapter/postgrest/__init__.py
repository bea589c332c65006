"""Hosted backend REST adapter."""

from .client import PostgrestClient, eq, in_

__all__ = ["PostgrestClient", "eq", "in_"]
