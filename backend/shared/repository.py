"""
Base repository class for database access.

Provides a common abstraction layer for the Supabase-backed repositories,
encapsulating client access and shared helpers for row handling.
"""

from typing import Any, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class SupabaseTenantRepository(BaseRepository[Tenant]):
            async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
                result = self._db.table("tenants").select("*").eq("subdomain", subdomain).execute()
                if not result.data:
                    return None
                return self._map_to_tenant(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first(result: Any) -> dict[str, Any] | None:
        """Return the first row of a query result, or None if it is empty."""
        if not result.data:
            return None
        return result.data[0]
