"""
Base repository class for table access.

Repositories wrap one Supabase table each and map rows to Pydantic models
internally, so callers never see raw dicts.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for single-table repositories.

    Example:
        class OTPRepository(BaseRepository[OTPChallenge]):
            def get(self, email: str) -> Optional[OTPChallenge]:
                result = self._query().select("*").eq("email", email).execute()
                return self._map(result.data[0]) if result.data else None
    """

    def __init__(self, db: Client, table: str) -> None:
        self._db = db
        self._table = table

    @property
    def table(self) -> str:
        return self._table

    def _query(self):
        """Start a query builder on the repository's table."""
        return self._db.table(self._table)
