"""
Authentication helpers for the JRadiance storefront backend
Validates Supabase access tokens and holds the static role hierarchy
"""
from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel

from storefront.core.config import settings
from storefront.domain.user import UserRole


# Security scheme for bearer tokens
security = HTTPBearer(auto_error=False)

# Supabase signs user sessions with HS256 and audience "authenticated"
JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"

# Role hierarchy: chief_admin > admin > agent > customer
ROLE_HIERARCHY = {
    UserRole.CUSTOMER: 0,
    UserRole.AGENT: 1,
    UserRole.ADMIN: 2,
    UserRole.CHIEF_ADMIN: 3,
}

STAFF_ROLES = frozenset({UserRole.AGENT, UserRole.ADMIN, UserRole.CHIEF_ADMIN})


class TokenUser(BaseModel):
    """User data extracted from a Supabase access token"""
    id: str
    email: Optional[str] = None
    access_token: Optional[str] = None


def parse_role(value) -> Optional[UserRole]:
    """Coerce a stored role value into UserRole, None when unknown"""
    if isinstance(value, UserRole):
        return value
    try:
        return UserRole(value)
    except ValueError:
        return None


def has_role(actual, required) -> bool:
    """
    Check the caller's role against the required one.

    An action requiring role R succeeds only if the caller's level is greater
    than or equal to R's level. Unknown or missing roles never pass.
    """
    actual_role = parse_role(actual)
    required_role = parse_role(required)
    if actual_role is None or required_role is None:
        return False
    return ROLE_HIERARCHY[actual_role] >= ROLE_HIERARCHY[required_role]


def is_staff(role) -> bool:
    return parse_role(role) in STAFF_ROLES


def decode_access_token(token: str) -> dict:
    """
    Decode and validate a Supabase access token.

    Supabase JWT structure (relevant claims):
    {
        "sub": "<auth user uuid>",
        "email": "customer@example.com",
        "aud": "authenticated",
        "role": "authenticated",
        "exp": 1234567890
    }

    The "role" claim is the Postgres role, not the storefront role; the
    storefront role is always read from the profiles table.
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
        )
    except JWTError as e:
        error_msg = str(e).lower()
        if "expired" in error_msg:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has expired",
                headers={"WWW-Authenticate": "Bearer"}
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"}
        )


def extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the session cookie set at login"""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None


def user_from_token(token: str) -> TokenUser:
    payload = decode_access_token(token)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload: missing user id",
            headers={"WWW-Authenticate": "Bearer"}
        )

    return TokenUser(id=user_id, email=payload.get("email"), access_token=token)


def resolve_user(request: Request) -> Optional[TokenUser]:
    """
    Authenticated user for a raw request, or None.

    Used by the route guard, which runs before FastAPI dependencies.
    """
    token = extract_token(request)
    if not token:
        return None
    try:
        return user_from_token(token)
    except HTTPException:
        return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenUser:
    """
    Dependency that extracts and validates the current user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: TokenUser = Depends(get_current_user)):
            return {"message": f"Hello {user.email}"}
    """
    token = credentials.credentials if credentials else extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"}
        )
    return user_from_token(token)


async def get_current_user_optional(request: Request) -> Optional[TokenUser]:
    """
    Optional authentication - returns None if no valid token provided.

    Services receive this and answer "Not authenticated" themselves.
    """
    return resolve_user(request)
