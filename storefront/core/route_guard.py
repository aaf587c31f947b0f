"""
Route guard middleware for the JRadiance storefront backend
Redirects unauthenticated or under-privileged callers away from protected paths

Matched paths:
- /admin and everything under it (except /admin/login)
- exactly /shop/history, /shop/wishlist, /shop/checkout
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse

from storefront.core import database
from storefront.core.auth import STAFF_ROLES, TokenUser, parse_role, resolve_user
from storefront.domain.audit import ActivityAction, ResourceType
from storefront.domain.user import UserRole
from storefront.repositories.profile_repository import ProfileRepository
from storefront.services.audit_service import AuditService

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/admin"
ADMIN_LOGIN_PATH = "/admin/login"
ADMIN_HOME_PATH = "/admin/dashboard"
CUSTOMER_LOGIN_PATH = "/shop/auth"

CHIEF_ADMIN_ONLY_ROUTES = ["/admin/users", "/admin/roles", "/admin/agents"]
AGENT_RESTRICTED_ROUTES = ["/admin/audit-log", "/admin/sales-log"]
PROTECTED_CUSTOMER_ROUTES = ["/shop/history", "/shop/wishlist", "/shop/checkout"]


@dataclass
class RouteDecision:
    """Outcome of the guard for one path"""
    allowed: bool
    redirect_to: Optional[str] = None
    log_admin_access: bool = False

    @classmethod
    def allow(cls, log_admin_access: bool = False) -> "RouteDecision":
        return cls(allowed=True, log_admin_access=log_admin_access)

    @classmethod
    def redirect(cls, location: str) -> "RouteDecision":
        return cls(allowed=False, redirect_to=location)


def is_admin_path(path: str) -> bool:
    return path == ADMIN_PREFIX or path.startswith(ADMIN_PREFIX + "/")


def matches(path: str) -> bool:
    """Paths the guard runs on at all"""
    return is_admin_path(path) or path in PROTECTED_CUSTOMER_ROUTES


def evaluate_route(path: str, user: Optional[TokenUser], role=None) -> RouteDecision:
    """
    Decide what happens to a request for `path`.

    Args:
        path: Request path
        user: Authenticated user or None
        role: The user's profiles.role value (ignored for anonymous callers)
    """
    if is_admin_path(path) and path != ADMIN_LOGIN_PATH:
        if user is None:
            return RouteDecision.redirect(ADMIN_LOGIN_PATH)

        staff_role = parse_role(role)
        if staff_role not in STAFF_ROLES:
            return RouteDecision.redirect("/")

        if any(path.startswith(route) for route in CHIEF_ADMIN_ONLY_ROUTES):
            if staff_role != UserRole.CHIEF_ADMIN:
                return RouteDecision.redirect(ADMIN_HOME_PATH)

        if any(path.startswith(route) for route in AGENT_RESTRICTED_ROUTES):
            if staff_role == UserRole.AGENT:
                return RouteDecision.redirect(ADMIN_HOME_PATH)

        return RouteDecision.allow(log_admin_access=True)

    if any(path.startswith(route) for route in PROTECTED_CUSTOMER_ROUTES):
        if user is None:
            return RouteDecision.redirect(f"{CUSTOMER_LOGIN_PATH}?{urlencode({'redirect': path})}")

    return RouteDecision.allow()


class RouteGuardMiddleware(BaseHTTPMiddleware):
    """
    Applies evaluate_route to matched requests.

    The role lookup and the access log both go through the shared Supabase
    client. A failed access log never blocks the request.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not matches(path):
            return await call_next(request)

        user = resolve_user(request)
        role = None
        needs_role = user is not None and is_admin_path(path) and path != ADMIN_LOGIN_PATH
        if needs_role:
            try:
                role = ProfileRepository(database.get_supabase()).get_role(user.id)
            except Exception as e:
                logger.error(f"Failed to read role for {user.id}: {e}")

        decision = evaluate_route(path, user, role)

        if not decision.allowed:
            logger.info(f"Route guard redirect {path} -> {decision.redirect_to}")
            return RedirectResponse(url=decision.redirect_to, status_code=307)

        if decision.log_admin_access:
            try:
                AuditService(database.get_supabase()).log_action(
                    user.id,
                    ActivityAction.DASHBOARD_ACCESS,
                    ResourceType.ADMIN_DASHBOARD,
                    None,
                    {"path": path},
                )
            except Exception as e:
                logger.error(f"Failed to log admin access: {e}")

        return await call_next(request)
