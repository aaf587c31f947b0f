"""
User Domain Models

Profiles, staff records and the admin permission flags derived from a role.

Author: JRadiance
Date: 2026-02-09
"""
from enum import Enum
from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    """Storefront roles, lowest to highest"""
    CUSTOMER = "customer"
    AGENT = "agent"
    ADMIN = "admin"
    CHIEF_ADMIN = "chief_admin"


class Profile(BaseModel):
    """
    Profile domain model - one row of the profiles table

    Fields:
        id: Supabase auth user id (uuid)
        email: Account email
        full_name: Display name
        role: Storefront role (customer, agent, admin, chief_admin)
        is_active: Whether the account is enabled
        created_at: Signup timestamp
    """

    id: str = Field(..., description="Auth user id")
    email: Optional[str] = Field(None, description="Account email")
    full_name: Optional[str] = Field(None, description="Display name")
    role: UserRole = Field(UserRole.CUSTOMER, description="Storefront role")
    is_active: bool = Field(True, description="Account enabled")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(from_attributes=True, extra="ignore")


class AdminStaff(BaseModel):
    """admin_staff row created when a profile is promoted to a staff role"""

    id: str
    profile_id: str
    staff_id: str
    department: str = "Team"
    position: str
    is_active: bool = True

    model_config = ConfigDict(extra="ignore")

    @staticmethod
    def position_for(role: UserRole) -> str:
        return "Support Agent" if role == UserRole.AGENT else "Administrator"


class AdminPermissions(BaseModel):
    """Capability flags shown to the admin dashboard for the current role"""

    can_manage_users: bool
    can_manage_products: bool
    can_manage_orders: bool
    can_view_audit_logs: bool
    can_view_sales_logs: bool
    can_manage_agents: bool
    role: Optional[UserRole] = None

    @classmethod
    def for_role(cls, role: UserRole) -> "AdminPermissions":
        is_chief_admin = role == UserRole.CHIEF_ADMIN
        is_admin = role == UserRole.ADMIN or is_chief_admin
        is_agent = role == UserRole.AGENT or is_admin

        return cls(
            can_manage_users=is_chief_admin,
            can_manage_products=is_agent,
            can_manage_orders=is_agent,
            # Agents are kept out of /admin/audit-log and /admin/sales-log
            can_view_audit_logs=is_admin,
            can_view_sales_logs=is_admin,
            can_manage_agents=is_chief_admin,
            role=role,
        )
