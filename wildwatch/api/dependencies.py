"""Route Dependencies — authenticated identity, list parameters, object storage.

Invariants:
    - get_current_user completes (or raises 401/500) before any session is opened
      when declared ahead of get_db in a handler signature
    - page and limit lower bounds are enforced here; limit is capped by make_list_params
"""

import logging

from fastapi import Header, Query

from wildwatch.config import get_settings
from wildwatch.core.auth_tokens import extract_bearer_token, verify_access_token
from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import ConfigurationError
from wildwatch.core.pagination import (
    DEFAULT_LIMIT, DEFAULT_PAGE, ListParams, make_list_params,
)
from wildwatch.core.repository_protocols import ObjectStore
from wildwatch.infrastructure.object_store import LocalObjectStore

logger = logging.getLogger(__name__)


async def get_current_user(
    authorization: str | None = Header(None),
) -> AuthenticatedUser:
    """Verify the bearer token and return the caller's identity."""
    settings = get_settings()
    token = extract_bearer_token(authorization)
    return verify_access_token(
        token,
        secret=settings.supabase_jwt_secret,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        algorithms=settings.jwt_algorithms,
        leeway=settings.jwt_leeway_seconds,
    )


def get_list_params(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None),
) -> ListParams:
    return make_list_params(page, limit, sort_by, order)


def get_object_store() -> ObjectStore:
    root = get_settings().object_store_root
    if not root:
        raise ConfigurationError("OBJECT_STORE_ROOT")
    return LocalObjectStore(root)
