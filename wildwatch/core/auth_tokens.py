"""Bearer Token Verification — Authorization header parsing and JWT validation.

Invariants:
    - An AuthenticatedUser is returned only after signature, exp, iss and aud all pass
    - Missing secret/issuer is a ConfigurationError (500), checked before decoding
    - Expired tokens are reported as "Token has expired"; every other failure is
      reported as an invalid-token variant

Design Decisions:
    - PyJWT decode with explicit algorithms list: no algorithm taken from the token header
"""

from typing import Sequence

import jwt

from wildwatch.core.domain_types import AuthenticatedUser
from wildwatch.core.errors import ConfigurationError, UnauthorizedError

BEARER_SCHEME = "bearer"


def extract_bearer_token(header: str | None) -> str:
    """Return the token from an `Authorization: Bearer <token>` header."""
    if not header or not header.strip():
        raise UnauthorizedError("Missing Authorization header")
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        raise UnauthorizedError("Authorization header must use the Bearer scheme")
    token = token.strip()
    if not token:
        raise UnauthorizedError("Token not found")
    return token


def verify_access_token(
    token: str,
    *,
    secret: str | None,
    issuer: str | None,
    audience: str,
    algorithms: Sequence[str] = ("HS256",),
    leeway: int = 0,
) -> AuthenticatedUser:
    if not secret:
        raise ConfigurationError("SUPABASE_JWT_SECRET")
    if not issuer:
        raise ConfigurationError("JWT issuer (SUPABASE_PROJECT_REF)")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=list(algorithms),
            audience=audience,
            issuer=issuer,
            leeway=leeway,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise UnauthorizedError("Token has expired") from e
    except jwt.InvalidIssuerError as e:
        raise UnauthorizedError("Invalid token issuer") from e
    except jwt.InvalidAudienceError as e:
        raise UnauthorizedError("Invalid token audience") from e
    except jwt.MissingRequiredClaimError as e:
        raise UnauthorizedError(f"Invalid token: missing '{e.claim}' claim") from e
    except jwt.PyJWTError as e:
        raise UnauthorizedError("Invalid token") from e

    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        raise UnauthorizedError("Invalid token: empty subject")

    return AuthenticatedUser(
        sub=sub,
        email=claims.get("email"),
        role=claims.get("role"),
        claims=claims,
    )
