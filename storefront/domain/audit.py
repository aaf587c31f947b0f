"""
Audit trail models (admin_activity_logs)
"""
from typing import Any, Dict, Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityAction:
    """Action names written to admin_activity_logs.action"""
    DASHBOARD_ACCESS = "dashboard_access"
    USER_PROMOTED = "user_promoted"
    USER_DEMOTED = "user_demoted"
    USER_DELETED = "user_deleted"
    USER_ACTIVATED = "user_activated"
    USER_DEACTIVATED = "user_deactivated"
    PRODUCT_CREATED = "product_created"
    PRODUCT_UPDATED = "product_updated"
    PRODUCT_DELETED = "product_deleted"
    PRODUCT_ACTIVATED = "product_activated"
    PRODUCT_DEACTIVATED = "product_deactivated"
    ORDER_STATUS_UPDATED = "order_status_updated"


class ResourceType:
    ADMIN_DASHBOARD = "admin_dashboard"
    USER = "user"
    PRODUCT = "product"
    ORDER = "order"


class ActivityLog(BaseModel):
    """One append-only audit row"""

    id: Optional[str] = None
    admin_id: str
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    changes: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")

    def to_row(self) -> dict:
        return {
            "admin_id": self.admin_id,
            "action": self.action,
            "resource_type": self.resource_type,
            "resource_id": self.resource_id,
            "changes": self.changes,
        }
