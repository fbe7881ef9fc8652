"""
TimeTracker Backend - Authentication & Authorization Dependencies
==================================================================

What:  FastAPI dependencies that gate every resource route.
How:   Routers declare `dependencies=[Depends(get_current_identity)]` so every
       read needs a valid token; mutating routes add `Depends(require_admin)`.

Outcomes:
    no / non-bearer Authorization header   → MissingTokenError   → 401
    token fails verification               → AuthenticationError → 401
    valid token without admin role on a
    create / update / delete               → AuthorizationError  → 403
"""

from typing import Optional

from fastapi import Depends, Request

from timetracker.exceptions import AuthorizationError, MissingTokenError
from timetracker.services.token_service import ADMIN_ROLE, Identity, token_service

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the credential from an `Authorization: Bearer <token>` header value.

    The scheme is matched case-insensitively; anything that is not a
    non-empty bearer credential yields None.
    """
    if not authorization:
        return None
    value = authorization.strip()
    if value[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    token = value[len(BEARER_PREFIX):].strip()
    return token or None


async def get_current_identity(request: Request) -> Identity:
    """Decode the caller's bearer token; cached on request.state for the request."""
    cached = getattr(request.state, "identity", None)
    if cached is not None:
        return cached

    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise MissingTokenError()

    identity = token_service.decode(token)
    request.state.identity = identity
    return identity


async def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Allow only callers whose token carries the admin role claim."""
    if not identity.is_admin:
        raise AuthorizationError(
            required_role=ADMIN_ROLE,
            context={"subject": identity.subject},
        )
    return identity
