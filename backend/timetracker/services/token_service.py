"""
TimeTracker Backend - Bearer Token Service
===========================================

What:  Issues (demo only) and validates HS256 JSON Web Tokens.
How:   PyJWT. The configured issuer is used as both `iss` and `aud`.

Claims:
    sub   caller name
    jti   random token id (uuid4)
    role  "admin" for admin tokens; absent otherwise
    iss   settings.token_issuer
    aud   settings.token_issuer
    exp   now + settings.token_lifetime_days (365 by default)

WARNING - NOT FOR PRODUCTION:
    issue() signs a token for any name and any admin flag the caller asks
    for, with a one-year lifetime and no revocation. It stands in for a real
    identity provider during development and workshops. Disable the
    /get-token endpoint (DEMO_TOKEN_ENDPOINT_ENABLED=false) anywhere that
    matters.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from timetracker.config import settings
from timetracker.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Identity:
    """Decoded caller identity. No admin role claim means a regular caller."""

    subject: str
    token_id: str
    is_admin: bool


class TokenService:
    """
    Signs and verifies bearer tokens with a shared HMAC key.

    Verification checks signature, expiry, issuer and audience, and requires
    the sub and jti claims. Any failure surfaces as AuthenticationError so
    the caller sees a plain 401.
    """

    def __init__(
        self,
        issuer: Optional[str] = None,
        key: Optional[str] = None,
        algorithm: Optional[str] = None,
        lifetime: Optional[timedelta] = None,
    ):
        self._issuer = issuer
        self._key = key
        self._algorithm = algorithm
        self._lifetime = lifetime

    # Unset arguments fall back to live settings so tests can patch them
    @property
    def issuer(self) -> str:
        return self._issuer if self._issuer is not None else settings.token_issuer

    @property
    def key(self) -> str:
        return self._key if self._key is not None else settings.token_key

    @property
    def algorithm(self) -> str:
        return self._algorithm or settings.token_algorithm

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime or timedelta(days=settings.token_lifetime_days)

    def _require_config(self) -> None:
        if not self.issuer or not self.key:
            raise ConfigurationError(
                context={"issuer_set": bool(self.issuer), "key_set": bool(self.key)}
            )

    def issue(self, name: str, is_admin: bool, now: Optional[datetime] = None) -> str:
        """Sign a new token for `name`. Demo only, see module docstring."""
        self._require_config()
        now = now or datetime.now(timezone.utc)

        claims = {
            "sub": name,
            "jti": str(uuid.uuid4()),
            "iss": self.issuer,
            "aud": self.issuer,
            "iat": now,
            "exp": now + self.lifetime,
        }
        if is_admin:
            claims["role"] = ADMIN_ROLE

        return jwt.encode(claims, self.key, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        """
        Verify `token` and return the caller identity.

        Raises:
            AuthenticationError: bad signature, expired, malformed, wrong
                issuer or audience, or missing sub/jti
            ConfigurationError: issuer or key not configured
        """
        self._require_config()
        try:
            payload = jwt.decode(
                token,
                self.key,
                algorithms=[self.algorithm],
                audience=self.issuer,
                issuer=self.issuer,
                options={"require": ["exp", "sub", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError(message="Bearer token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected bearer token: %s", type(e).__name__)
            raise AuthenticationError(
                message="Bearer token is invalid",
                context={"reason": type(e).__name__},
            )

        role = payload.get("role")
        roles = role if isinstance(role, list) else [role]
        return Identity(
            subject=str(payload["sub"]),
            token_id=str(payload["jti"]),
            is_admin=ADMIN_ROLE in roles,
        )


token_service = TokenService()
