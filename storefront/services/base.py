"""
Common service plumbing: caller authorization against profiles.role
"""
import logging
from typing import Optional

from supabase import Client

from storefront.core.auth import TokenUser, has_role, parse_role
from storefront.core.database import get_supabase
from storefront.domain.results import ActionResult
from storefront.domain.user import UserRole
from storefront.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


class AccessDenied(Exception):
    """Raised inside a service operation; carries the result to return"""

    def __init__(self, result: ActionResult):
        super().__init__(result.error)
        self.result = result


class StorefrontService:
    """
    Base for services that act on behalf of a caller

    Every operation follows the same sequence: authenticate, authorize by
    role hierarchy, run the queries, write the audit row, return an
    ActionResult.
    """

    def __init__(self, client: Optional[Client] = None):
        self.client = client or get_supabase()
        self.profiles = ProfileRepository(self.client)

    def require_role(
        self,
        caller: Optional[TokenUser],
        required: UserRole,
        denied_message: str = "Insufficient permissions",
    ) -> UserRole:
        """
        Authenticate and authorize the caller, returning their role.

        Raises:
            AccessDenied: caller missing, profile missing, or role too low
        """
        if caller is None:
            raise AccessDenied(ActionResult.not_authenticated())

        role = self.profiles.get_role(caller.id)
        if not has_role(role, required):
            logger.warning(
                "Denied %s for user %s (role=%s, required=%s)",
                denied_message, caller.id, role, required.value
            )
            raise AccessDenied(ActionResult.forbidden(denied_message))

        return parse_role(role)
