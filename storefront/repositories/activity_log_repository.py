"""
Activity Log Repository - append-only admin audit trail
"""
from typing import Any, Dict, List

from storefront.domain.audit import ActivityLog
from storefront.repositories.base import SupabaseRepository

LOG_WITH_ACTOR = """
    *,
    admin_staff (profile_id, position),
    profiles (email, full_name)
"""


class ActivityLogRepository(SupabaseRepository):

    table_name = "admin_activity_logs"

    def record(self, entry: ActivityLog) -> None:
        self._table().insert(entry.to_row()).execute()

    def recent(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Newest entries first, with the acting staff member embedded"""
        response = (
            self._table()
            .select(LOG_WITH_ACTOR)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return self._rows(response)
