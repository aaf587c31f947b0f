"""
Configuración centralizada de la aplicación
"""
from pydantic_settings import BaseSettings
from typing import List, Optional


DEFAULT_CONTENT_SECURITY_POLICY = (
    "default-src 'self'; "
    "script-src 'self' 'unsafe-inline' 'unsafe-eval' https://js.paystack.co https://fp.paystack.co "
    "https://*.supabase.co https://*.fingerprintjs.com https://*.fpcdn.io https://*.datadoghq.com; "
    "style-src 'self' 'unsafe-inline'; "
    "img-src 'self' data: blob: https://jradianceco.com https://www.jradianceco.com; "
    "connect-src 'self' https://*.supabase.co https://*.datadoghq.com https://fp.paystack.co; "
    "frame-src 'self' https://js.paystack.co;"
)


class Settings(BaseSettings):
    """Storefront application settings"""

    # API Settings
    API_TITLE: str = "JRadiance Store API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Storefront and admin dashboard backend for JRadiance"
    API_DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Supabase
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str
    SUPABASE_SERVICE_ROLE_KEY: str
    SUPABASE_JWT_SECRET: str
    AUTH_COOKIE_NAME: str = "sb-access-token"

    # CORS - Can be string (comma-separated) or JSON array
    # Example: "http://localhost:3000,https://yourdomain.com" or '["http://localhost:3000"]'
    ALLOWED_ORIGINS: Optional[str] = "http://localhost:3000,http://localhost:3001"

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["http://localhost:3000"]

        # Try JSON parse first (for array format)
        import json
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Public site
    BASE_URL: str = "https://jradianceco.com"
    CONTENT_SECURITY_POLICY: str = DEFAULT_CONTENT_SECURITY_POLICY

    # Media uploads (Namecheap FTP hosting)
    NAMECHEAP_FTP_HOST: str = ""
    NAMECHEAP_FTP_PORT: int = 21
    NAMECHEAP_FTP_USER: str = ""
    NAMECHEAP_FTP_PASSWORD: str = ""
    NAMECHEAP_FTP_BASE_URL: str = ""
    UPLOAD_DEFAULT_FOLDER: str = "products"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
