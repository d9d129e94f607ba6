import base64
import time
from typing import Any

from authlib.jose import jwt


def oct_jwk(key: bytes, kid: str) -> dict[str, str]:
    return {
        "kty": "oct",
        "k": base64.urlsafe_b64encode(key).rstrip(b"=").decode("ascii"),
        "alg": "HS256",
        "kid": kid,
    }


def make_token(
    key: bytes,
    *,
    kid: str | None,
    issuer: str,
    audience: str | list[str],
    subject: str | None = "client-123",
    expires_in: int = 300,
    algorithm: str = "HS256",
    **extra_claims: Any,
) -> str:
    """Sign a JWT the way an external issuer would."""
    now = int(time.time())
    header: dict[str, Any] = {"alg": algorithm, "typ": "JWT"}
    if kid:
        header["kid"] = kid
    payload: dict[str, Any] = {
        "iss": issuer,
        "aud": audience,
        "iat": now,
        "nbf": now,
        "exp": now + expires_in,
        **extra_claims,
    }
    if subject is not None:
        payload["sub"] = subject
    token = jwt.encode(header, payload, key)
    return token.decode() if isinstance(token, bytes) else token
