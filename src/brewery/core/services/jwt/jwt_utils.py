"""Helpers for reading bearer tokens before and after signature verification."""

import base64
import binascii
import json
import re
import time
from dataclasses import dataclass
from typing import Any, Final

from fastapi import HTTPException

from src.brewery.core.models.claims import TokenClaims
from src.brewery.runtime.config.config_data import (
    JWTClaimsConfig,
    OIDCConfig,
    OIDCProviderConfig,
)

TOKEN_MAX_LENGTH: Final = 4096
HEADER_MAX_BYTES: Final = 8 * 1024
PAYLOAD_MAX_BYTES: Final = 64 * 1024

# three non-empty unpadded base64url segments
_COMPACT_JWS: Final = re.compile(r"^([A-Za-z0-9_-]+)\.([A-Za-z0-9_-]+)\.([A-Za-z0-9_-]+)$")

_ROLE_CLAIMS: Final = ("role", "roles", "groups", "authorities")

_MAPPED_CLAIMS: Final = frozenset(
    {"iss", "sub", "aud", "azp", "exp", "iat", "nbf", "jti", "email", "realm_access"}
    | {"scope", "scp", "scopes"}
    | set(_ROLE_CLAIMS)
)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


def _decode_segment(segment: str, name: str, limit: int) -> dict[str, Any]:
    padded = segment + "=" * (-len(segment) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise _unauthorized(f"Malformed {name}") from exc
    if len(raw) > limit:
        raise _unauthorized(f"{name} exceeds {limit} bytes")

    try:
        value = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise _unauthorized(f"{name} is not valid JSON") from exc
    if not isinstance(value, dict):
        raise _unauthorized(f"{name} is not a JSON object")
    return value


@dataclass(frozen=True)
class JwtPreview:
    """Unverified view of a token, used to pick the issuer and key."""

    header: dict[str, Any]
    claims: dict[str, Any]

    @property
    def alg(self) -> str | None:
        return self.header.get("alg")

    @property
    def kid(self) -> str | None:
        return self.header.get("kid")

    @property
    def iss(self) -> str | None:
        iss = self.claims.get("iss")
        return iss.rstrip("/") if isinstance(iss, str) and iss else None


def preview_jwt(token: str) -> JwtPreview:
    """Decode header and payload without checking the signature.

    Raises a 401 for anything that is not a compact JWS of sane size.
    """
    if not token or len(token) > TOKEN_MAX_LENGTH:
        raise _unauthorized("Invalid JWT size")
    match = _COMPACT_JWS.match(token)
    if match is None:
        raise _unauthorized("Invalid JWT format")

    header_segment, payload_segment, _ = match.groups()
    return JwtPreview(
        header=_decode_segment(header_segment, "JWT header", HEADER_MAX_BYTES),
        claims=_decode_segment(payload_segment, "JWT payload", PAYLOAD_MAX_BYTES),
    )


def lookup_provider_by_issuer(
    oidc: OIDCConfig, issuer: str
) -> OIDCProviderConfig | None:
    """Find the trusted issuer whose URL matches ``issuer``, ignoring trailing slashes."""
    wanted = issuer.rstrip("/")
    return next(
        (p for p in oidc.providers.values() if p.issuer.rstrip("/") == wanted), None
    )


def extract_uid(claims: dict[str, Any], claims_config: JWTClaimsConfig) -> str:
    if claims_config.user_id and claims_config.user_id in claims:
        return str(claims[claims_config.user_id])
    return f"{claims.get('iss')}|{claims.get('sub')}"


def _as_items(value: Any) -> list[str]:
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return []


def extract_scopes(claims: dict[str, Any]) -> list[str]:
    """Collect scopes from ``scope``, ``scp`` and ``scopes`` in that order, deduplicated."""
    found = (_as_items(claims.get(name)) for name in ("scope", "scp", "scopes"))
    return list(dict.fromkeys(item for items in found for item in items))


def extract_roles(claims: dict[str, Any]) -> list[str]:
    roles: list[str] = []
    for name in _ROLE_CLAIMS:
        value = claims.get(name)
        if value and not isinstance(value, (str, list, tuple)):
            roles.append(str(value))
        else:
            roles.extend(_as_items(value))

    # Keycloak nests realm roles
    realm_access = claims.get("realm_access")
    if isinstance(realm_access, dict):
        roles.extend(_as_items(realm_access.get("roles")))
    return roles


def create_token_claims(
    token: str,
    claims: dict[str, Any],
    claims_config: JWTClaimsConfig,
    token_type: str = "access_token",
) -> TokenClaims:
    """Build TokenClaims from verified claims.

    Claims without a dedicated field end up in ``custom_claims``.
    """
    now = int(time.time())
    scopes = extract_scopes(claims)

    return TokenClaims(
        raw_token=token,
        token_type=token_type,
        uid=extract_uid(claims, claims_config),
        issuer=claims.get("iss") or "",
        subject=claims.get("sub") or "",
        audience=claims.get("aud") or [],
        authorized_party=claims.get("azp"),
        expires_at=claims.get("exp", now + 3600),
        issued_at=claims.get("iat", now),
        not_before=claims.get("nbf"),
        jti=claims.get("jti"),
        email=claims.get(claims_config.email),
        scope=" ".join(scopes),
        scopes=scopes,
        roles=extract_roles(claims),
        custom_claims={k: v for k, v in claims.items() if k not in _MAPPED_CLAIMS},
        all_claims=dict(claims),
    )
