"""
Admin Service - permissions and user management

Purpose:
- Role checks for the current caller (check_permission, get_admin_permissions)
- Chief-admin-only user management: promote, demote, delete, toggle status
- Staff listings for the admin dashboard

Every mutation writes an admin_activity_logs row.

Author: JRadiance
Date: 2026-02-09
"""
import logging
import time
from typing import Optional

from supabase import Client

from storefront.core.auth import TokenUser, has_role, parse_role
from storefront.core.database import is_unique_violation
from storefront.domain.audit import ActivityAction, ResourceType
from storefront.domain.results import ActionResult
from storefront.domain.user import AdminPermissions, AdminStaff, UserRole
from storefront.repositories.profile_repository import StaffRepository
from storefront.services.audit_service import AuditService
from storefront.services.base import AccessDenied, StorefrontService

logger = logging.getLogger(__name__)


class AdminService(StorefrontService):
    """
    Permission and user management operations.

    All user management is restricted to chief_admin.
    """

    def __init__(self, client: Optional[Client] = None):
        super().__init__(client)
        self.staff = StaffRepository(self.client)
        self.audit = AuditService(self.client)

    # ------------------------------------------------------------------
    # Permission & access control
    # ------------------------------------------------------------------

    def check_permission(self, caller: Optional[TokenUser], required_role: UserRole) -> bool:
        """True when the caller's role is at least required_role"""
        if caller is None:
            return False
        try:
            return has_role(self.profiles.get_role(caller.id), required_role)
        except Exception as e:
            logger.error(f"Error checking permission for {caller.id}: {e}")
            return False

    def get_admin_permissions(self, caller: Optional[TokenUser]) -> Optional[AdminPermissions]:
        """Capability flags for the caller, None when unknown"""
        if caller is None:
            return None
        try:
            role = parse_role(self.profiles.get_role(caller.id))
        except Exception as e:
            logger.error(f"Error getting permissions for {caller.id}: {e}")
            return None
        if role is None:
            return None
        return AdminPermissions.for_role(role)

    # ------------------------------------------------------------------
    # User management (chief admin only)
    # ------------------------------------------------------------------

    def get_all_users(self, caller: Optional[TokenUser]) -> ActionResult:
        try:
            self.require_role(caller, UserRole.CHIEF_ADMIN, "Only chief admin can list users")
            users = self.profiles.find_all()
            return ActionResult.ok(data=[user.model_dump(mode="json") for user in users])
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching users")
            return ActionResult.fail("Failed to fetch users", status_code=500)

    def get_all_agents(self, caller: Optional[TokenUser]) -> ActionResult:
        try:
            self.require_role(caller, UserRole.CHIEF_ADMIN, "Only chief admin can list agents")
            agents = self.profiles.find_by_role(UserRole.AGENT)
            return ActionResult.ok(data=[agent.model_dump(mode="json") for agent in agents])
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching agents")
            return ActionResult.fail("Failed to fetch agents", status_code=500)

    def promote_user(self, caller: Optional[TokenUser], target_user_id: str, new_role: UserRole) -> ActionResult:
        """
        Set a user's role and make sure a staff record exists for staff roles.

        A duplicate admin_staff row (already staff) is not an error, so at
        most one staff row exists per user.
        """
        try:
            self.require_role(caller, UserRole.CHIEF_ADMIN, "Only chief admin can promote users")

            self.profiles.update_role(target_user_id, new_role)

            if new_role != UserRole.CUSTOMER:
                staff = AdminStaff(
                    id=target_user_id,
                    profile_id=target_user_id,
                    staff_id=f"STAFF-{int(time.time() * 1000)}",
                    department="Team",
                    position=AdminStaff.position_for(new_role),
                    is_active=True,
                )
                try:
                    self.staff.insert(staff)
                except Exception as e:
                    if not is_unique_violation(e):
                        raise
                    logger.info(f"Staff record already exists for {target_user_id}")

            self.audit.log_action(
                caller.id,
                ActivityAction.USER_PROMOTED,
                ResourceType.USER,
                target_user_id,
                {"new_role": new_role.value},
            )

            logger.info(f"User {target_user_id} promoted to {new_role.value} by {caller.id}")
            return ActionResult.ok(message=f"User promoted to {new_role.value}")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error promoting user")
            return ActionResult.unexpected(e, "Failed to promote user")

    def demote_user(self, caller: Optional[TokenUser], target_user_id: str) -> ActionResult:
        """Reset a user to customer and drop their staff record"""
        try:
            self.require_role(caller, UserRole.CHIEF_ADMIN, "Only chief admin can demote users")

            old_role = self.profiles.get_role(target_user_id)

            self.profiles.update_role(target_user_id, UserRole.CUSTOMER)
            self.staff.delete(target_user_id)

            self.audit.log_action(
                caller.id,
                ActivityAction.USER_DEMOTED,
                ResourceType.USER,
                target_user_id,
                {"old_role": old_role, "new_role": UserRole.CUSTOMER.value},
            )

            logger.info(f"User {target_user_id} demoted from {old_role} by {caller.id}")
            return ActionResult.ok(message="User demoted to customer")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error demoting user")
            return ActionResult.unexpected(e, "Failed to demote user")

    def delete_user(self, caller: Optional[TokenUser], target_user_id: str) -> ActionResult:
        try:
            self.require_role(caller, UserRole.CHIEF_ADMIN, "Only chief admin can delete users")

            # Staff row first, the profile delete cascades to the rest
            self.staff.delete(target_user_id)
            self.profiles.delete(target_user_id)

            self.audit.log_action(caller.id, ActivityAction.USER_DELETED, ResourceType.USER, target_user_id)

            logger.info(f"User {target_user_id} deleted by {caller.id}")
            return ActionResult.ok(message="User deleted successfully")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error deleting user")
            return ActionResult.unexpected(e, "Failed to delete user")

    def toggle_user_status(self, caller: Optional[TokenUser], target_user_id: str) -> ActionResult:
        try:
            self.require_role(caller, UserRole.CHIEF_ADMIN, "Only chief admin can toggle user status")

            profile = self.profiles.find_by_id(target_user_id)
            if profile is None:
                return ActionResult.not_found("User not found")

            was_active = profile.is_active
            self.profiles.set_active(target_user_id, not was_active)

            action = ActivityAction.USER_DEACTIVATED if was_active else ActivityAction.USER_ACTIVATED
            self.audit.log_action(caller.id, action, ResourceType.USER, target_user_id)

            return ActionResult.ok(message=f"User {'deactivated' if was_active else 'activated'}")
        except AccessDenied as denied:
            return denied.result
        except Exception as e:
            logger.exception("Error toggling user status")
            return ActionResult.unexpected(e, "Failed to toggle user status")

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    def get_system_issues(self, caller: Optional[TokenUser]) -> ActionResult:
        """Issue tracker for the dashboard; there is no issues table yet"""
        try:
            self.require_role(caller, UserRole.AGENT)
            return ActionResult.ok(data=[])
        except AccessDenied as denied:
            return denied.result
        except Exception:
            logger.exception("Error fetching issues")
            return ActionResult.fail("Failed to fetch issues", status_code=500)
