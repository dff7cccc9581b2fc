"""Bearer token verification — header parsing and JWT claim checks.

Tests:
    - Missing / malformed headers are UnauthorizedError with distinct messages
    - Expired tokens are reported separately from invalid ones
    - Issuer and audience are enforced
    - Missing secret or issuer is a ConfigurationError
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from wildwatch.core.auth_tokens import extract_bearer_token, verify_access_token
from wildwatch.core.errors import ConfigurationError, UnauthorizedError

SECRET = "unit-test-secret-0123456789abcdefghij"
ISSUER = "https://abc.supabase.co/auth/v1"


def _token(**overrides) -> str:
    claims = {
        "sub": "user-42",
        "email": "fox@example.org",
        "role": "authenticated",
        "iss": ISSUER,
        "aud": "authenticated",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, SECRET, algorithm="HS256")


def _verify(token: str, **kwargs):
    options = {"secret": SECRET, "issuer": ISSUER, "audience": "authenticated"}
    options.update(kwargs)
    return verify_access_token(token, **options)


@pytest.mark.parametrize("header, message", [
    (None, "Missing Authorization header"),
    ("", "Missing Authorization header"),
    ("Token abc", "Authorization header must use the Bearer scheme"),
    ("Bearer", "Token not found"),
    ("Bearer    ", "Token not found"),
])
def test_bad_headers(header, message):
    with pytest.raises(UnauthorizedError) as exc:
        extract_bearer_token(header)
    assert exc.value.message == message
    assert exc.value.http_status == 401


def test_bearer_scheme_is_case_insensitive():
    assert extract_bearer_token("bearer abc.def") == "abc.def"
    assert extract_bearer_token("Bearer abc.def") == "abc.def"


def test_valid_token_yields_user():
    user = _verify(_token())
    assert user.sub == "user-42"
    assert user.email == "fox@example.org"
    assert user.role == "authenticated"
    assert user.claims["iss"] == ISSUER


def test_expired_token():
    token = _token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))
    with pytest.raises(UnauthorizedError, match="Token has expired"):
        _verify(token)


def test_leeway_accepts_recently_expired_token():
    token = _token(exp=datetime.now(timezone.utc) - timedelta(seconds=5))
    assert _verify(token, leeway=60).sub == "user-42"


def test_wrong_issuer():
    with pytest.raises(UnauthorizedError, match="Invalid token issuer"):
        _verify(_token(iss="https://evil.example/auth/v1"))


def test_wrong_audience():
    with pytest.raises(UnauthorizedError, match="Invalid token audience"):
        _verify(_token(aud="anon"))


def test_missing_subject():
    with pytest.raises(UnauthorizedError, match="missing 'sub' claim"):
        _verify(_token(sub=None))


def test_bad_signature():
    token = jwt.encode(
        {"sub": "x", "iss": ISSUER, "aud": "authenticated",
         "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        "some-other-secret-0123456789abcdefghij",
        algorithm="HS256",
    )
    with pytest.raises(UnauthorizedError) as exc:
        _verify(token)
    assert exc.value.message == "Invalid token"


def test_garbage_token():
    with pytest.raises(UnauthorizedError) as exc:
        _verify("definitely-not-a-jwt")
    assert exc.value.message == "Invalid token"


def test_missing_secret_is_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        _verify(_token(), secret=None)
    assert exc.value.http_status == 500
    assert "SUPABASE_JWT_SECRET" in exc.value.message


def test_missing_issuer_is_configuration_error():
    with pytest.raises(ConfigurationError):
        _verify(_token(), issuer=None)
