"""
Security headers middleware - Content-Security-Policy on every response
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from storefront.core.config import settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, content_security_policy: str = None):
        super().__init__(app)
        self.content_security_policy = content_security_policy or settings.CONTENT_SECURITY_POLICY

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = self.content_security_policy
        return response
