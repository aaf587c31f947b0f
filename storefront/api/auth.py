"""
Authentication API endpoints for the JRadiance storefront
- Customer sign-in / sign-up (/shop/auth)
- Staff sign-in (/admin/login)
- Logout and current-user lookup
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, EmailStr
from supabase import Client

from storefront.api.responses import respond
from storefront.core.auth import TokenUser, get_current_user
from storefront.core.config import settings
from storefront.core.database import get_supabase
from storefront.domain.results import ActionResult
from storefront.repositories.profile_repository import ProfileRepository
from storefront.services.auth_service import AuthService


router = APIRouter(tags=["Authentication"])


# =============================================================================
# Pydantic Models
# =============================================================================

class Credentials(BaseModel):
    email: EmailStr
    password: str


class SignUp(Credentials):
    full_name: Optional[str] = None


# =============================================================================
# Helpers
# =============================================================================

def get_auth_service(client: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(client)


def session_response(result: ActionResult) -> JSONResponse:
    """Respond and, on success, store the access token in the session cookie"""
    response = respond(result)
    token = (result.data or {}).get("access_token") if result.success else None
    if token:
        response.set_cookie(
            settings.AUTH_COOKIE_NAME,
            token,
            max_age=(result.data or {}).get("expires_in") or 3600,
            httponly=True,
            secure=not settings.API_DEBUG,
            samesite="lax",
        )
    return response


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/admin/login")
async def admin_login(body: Credentials, service: AuthService = Depends(get_auth_service)):
    """Staff sign-in; customers are refused"""
    return session_response(service.sign_in_staff(body.email, body.password))


@router.post("/shop/auth")
async def shop_login(body: Credentials, service: AuthService = Depends(get_auth_service)):
    """Customer sign-in"""
    return session_response(service.sign_in(body.email, body.password))


@router.post("/shop/auth/signup")
async def shop_signup(body: SignUp, service: AuthService = Depends(get_auth_service)):
    """Customer registration"""
    return session_response(service.sign_up(body.email, body.password, body.full_name))


@router.post("/auth/logout")
async def logout():
    response = respond(ActionResult.ok(message="Signed out"))
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return response


@router.get("/auth/me")
async def me(user: TokenUser = Depends(get_current_user), client: Client = Depends(get_supabase)):
    """Current user's profile"""
    profile = ProfileRepository(client).find_by_id(user.id)
    if profile is None:
        return respond(ActionResult.not_found("Profile not found"))
    return respond(ActionResult.ok(data=profile.model_dump(mode="json")))
