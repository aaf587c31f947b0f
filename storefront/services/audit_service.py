"""
Audit Service - admin activity trail

Writes and reads admin_activity_logs rows. Writing an audit row never fails
the action that triggered it.

Author: JRadiance
Date: 2026-02-09
"""
import logging
from typing import Any, Dict, Optional

from supabase import Client

from storefront.core.auth import TokenUser
from storefront.domain.audit import ActivityLog
from storefront.domain.results import ActionResult
from storefront.domain.user import UserRole
from storefront.repositories.activity_log_repository import ActivityLogRepository
from storefront.services.base import AccessDenied, StorefrontService

logger = logging.getLogger(__name__)

MAX_LOG_LIMIT = 1000


class AuditService(StorefrontService):

    def __init__(self, client: Optional[Client] = None):
        super().__init__(client)
        self.logs = ActivityLogRepository(self.client)

    def log_action(
        self,
        admin_id: str,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        changes: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Append one audit row.

        Returns:
            True when written, False when the insert failed (already logged)
        """
        entry = ActivityLog(
            admin_id=admin_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            changes=changes,
        )
        try:
            self.logs.record(entry)
            return True
        except Exception as e:
            logger.error(f"Failed to write audit log '{action}' for {resource_type}/{resource_id}: {e}")
            return False

    def get_activity_logs(self, caller: Optional[TokenUser], limit: int = 100) -> ActionResult:
        """Newest audit entries, admins and above"""
        try:
            self.require_role(caller, UserRole.ADMIN, "Only admins can view the audit log")
            limit = max(1, min(limit, MAX_LOG_LIMIT))
            return ActionResult.ok(data=self.logs.recent(limit))
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching activity logs")
            return ActionResult.fail("Failed to fetch activity logs", status_code=500)
