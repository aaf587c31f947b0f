"""
Shared test identities and access-token helpers
"""
import os
import time

from jose import jwt

JWT_SECRET = os.environ.get("SUPABASE_JWT_SECRET", "test-jwt-secret-for-storefront")

CHIEF_ID = "00000000-0000-0000-0000-000000000001"
ADMIN_ID = "00000000-0000-0000-0000-000000000002"
AGENT_ID = "00000000-0000-0000-0000-000000000003"
CUSTOMER_ID = "00000000-0000-0000-0000-000000000004"

SHEA_BUTTER_ID = "10000000-0000-4000-8000-000000000001"
BLACK_SOAP_ID = "10000000-0000-4000-8000-000000000002"
OLD_SOAP_ID = "10000000-0000-4000-8000-000000000003"
RETIRED_SCRUB_ID = "10000000-0000-4000-8000-000000000004"
HIDDEN_OIL_ID = "10000000-0000-4000-8000-000000000005"
UNKNOWN_PRODUCT_ID = "10000000-0000-4000-8000-000000000099"


def make_token(user_id: str, email: str = None, expires_in: int = 3600, secret: str = JWT_SECRET) -> str:
    """Signed access token shaped like a Supabase session token"""
    now = int(time.time())
    return jwt.encode(
        {
            "sub": user_id,
            "email": email or f"{user_id[-4:]}@example.com",
            "aud": "authenticated",
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        },
        secret,
        algorithm="HS256",
    )


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}
