"""
Shared plumbing for Supabase-backed repositories
"""
from typing import Any, Dict, List, Optional

from supabase import Client

from storefront.core.database import get_supabase


class SupabaseRepository:
    """
    Base class holding the query-builder client

    Repositories take an explicit client so services and tests can choose
    which one is used; by default the shared service client is used.
    """

    table_name: str = ""

    def __init__(self, client: Optional[Client] = None):
        self.client = client or get_supabase()

    def _table(self):
        return self.client.table(self.table_name)

    @staticmethod
    def _rows(response) -> List[Dict[str, Any]]:
        if response is None or response.data is None:
            return []
        return list(response.data)

    @staticmethod
    def _one(response) -> Optional[Dict[str, Any]]:
        """
        Row from a maybe_single() query.

        postgrest returns None instead of a response when no row matches.
        """
        if response is None:
            return None
        data = response.data
        if isinstance(data, list):
            return data[0] if data else None
        return data
