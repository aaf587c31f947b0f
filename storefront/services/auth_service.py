"""
Auth Service - Supabase Auth password flows for the shop and the admin area
"""
import logging
from typing import Optional

from supabase import Client

from storefront.core.auth import is_staff
from storefront.core.database import create_auth_client
from storefront.domain.results import ActionResult
from storefront.repositories.profile_repository import ProfileRepository
from storefront.services.base import StorefrontService

logger = logging.getLogger(__name__)


class AuthService(StorefrontService):
    """
    Sign-in and sign-up through Supabase Auth.

    Each flow uses its own anon client (see create_auth_client); only the
    profile lookup goes through the shared service client.
    """

    def __init__(self, client: Optional[Client] = None, auth_client_factory=create_auth_client):
        super().__init__(client)
        self._auth_client_factory = auth_client_factory

    @staticmethod
    def _session_payload(response) -> dict:
        session = response.session
        return {
            "user_id": response.user.id if response.user else None,
            "email": response.user.email if response.user else None,
            "access_token": session.access_token if session else None,
            "refresh_token": session.refresh_token if session else None,
            "expires_in": session.expires_in if session else None,
        }

    def sign_in(self, email: str, password: str) -> ActionResult:
        try:
            auth = self._auth_client_factory().auth
            response = auth.sign_in_with_password({"email": email, "password": password})
            if response.session is None:
                return ActionResult.fail("Invalid login credentials", status_code=401)
            return ActionResult.ok(message="Signed in", data=self._session_payload(response))
        except Exception as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            return ActionResult.fail(str(e) or "Invalid login credentials", status_code=401)

    def sign_in_staff(self, email: str, password: str) -> ActionResult:
        """Sign in, then refuse accounts whose profile role is not a staff role"""
        result = self.sign_in(email, password)
        if not result.success:
            return result

        try:
            role = ProfileRepository(self.client).get_role(result.data["user_id"])
        except Exception:
            logger.exception("Error reading role at admin sign-in")
            return ActionResult.fail("Failed to verify account role", status_code=500)

        if not is_staff(role):
            logger.warning(f"Non-staff account {email} tried the admin login")
            return ActionResult.forbidden("This account does not have admin access")

        result.data["role"] = role
        return result

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> ActionResult:
        """
        Register a customer account.

        The profiles row is created by the database on auth signup. When email
        confirmation is enabled no session is returned yet.
        """
        try:
            auth = self._auth_client_factory().auth
            response = auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"full_name": full_name}},
            })
            message = "Account created" if response.session else "Check your email to confirm your account"
            return ActionResult.ok(message=message, data=self._session_payload(response), status_code=201)
        except Exception as e:
            logger.warning(f"Sign-up failed for {email}: {e}")
            return ActionResult.fail(str(e) or "Failed to create account")
