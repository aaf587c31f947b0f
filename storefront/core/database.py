"""
Conexión a Supabase

Este módulo centraliza el acceso a la base de datos. Toda la persistencia
pasa por el query builder de Supabase (PostgREST):
- Cliente service-role compartido (lecturas y escrituras del backend)
- Cliente anon por llamada (flujos de login/registro de Supabase Auth)

Author: JRadiance
Updated: 2026-02-09
"""
import logging
import uuid
from typing import Optional

from postgrest.exceptions import APIError
from supabase import create_client, Client

from .config import settings

logger = logging.getLogger(__name__)

# Postgres error code for unique constraint violations
UNIQUE_VIOLATION = "23505"

_client: Optional[Client] = None


def get_supabase() -> Client:
    """
    FastAPI dependency para obtener cliente de Supabase

    The client is created on first use with the service role key so that
    authorization is enforced by the service layer, not by RLS policies.

    Usage:
        @app.get("/data")
        def get_data(sb: Client = Depends(get_supabase)):
            ...
    """
    global _client
    if _client is None:
        logger.debug("Creating Supabase service client for %s", settings.SUPABASE_URL)
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    return _client


def create_auth_client() -> Client:
    """
    Fresh anon-key client for password sign-in and sign-up.

    Supabase Auth stores the resulting session on the client, so these flows
    never run on the shared service client.
    """
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)


def is_unique_violation(error: Exception) -> bool:
    """True when a PostgREST error is a duplicate-key violation"""
    return isinstance(error, APIError) and error.code == UNIQUE_VIOLATION


def is_uuid(value: str) -> bool:
    """True when value parses as a uuid; Postgres rejects anything else on uuid columns (22P02)"""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True
