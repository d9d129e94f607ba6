"""Bearer token verification against the configured issuers' JWKS."""

import time
from typing import Any

from authlib.jose import JoseError, JsonWebKey, jwt
from fastapi import HTTPException
from loguru import logger

from src.brewery.core.models.claims import TokenClaims
from src.brewery.core.services.jwt.jwks import JwksService
from src.brewery.core.services.jwt.jwt_utils import (
    JwtPreview,
    create_token_claims,
    lookup_provider_by_issuer,
    preview_jwt,
)
from src.brewery.runtime.config.config_data import (
    JWTConfig,
    OIDCConfig,
    OIDCProviderConfig,
)


def _reject(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail)


class JwtVerificationService:
    """Verifies bearer tokens issued by one of the configured trusted issuers.

    Every rejection is an HTTPException with status 401. A JWKS endpoint that
    cannot be reached surfaces as the 503 raised by JwksService.
    """

    def __init__(
        self,
        jwks_service: JwksService,
        jwt_config: JWTConfig,
        oidc_config: OIDCConfig,
    ):
        self._jwks_service = jwks_service
        self._jwt_config = jwt_config
        self._oidc_config = oidc_config

    def _claims_options(self, provider: OIDCProviderConfig) -> dict[str, Any]:
        issuer = provider.issuer.rstrip("/")
        options: dict[str, Any] = {
            "iss": {"essential": True, "values": [issuer, issuer + "/"]},
            "sub": {"essential": True},
        }
        audiences = self._jwt_config.audiences or (
            [provider.client_id] if provider.client_id else []
        )
        if audiences:
            options["aud"] = {"essential": True, "values": audiences}
        return options

    async def _signing_keys(
        self, provider: OIDCProviderConfig, preview: JwtPreview
    ) -> dict[str, Any]:
        jwks = await self._jwks_service.fetch_jwks(provider)
        if not preview.kid:
            return jwks
        keys = [k for k in jwks.get("keys", []) if k.get("kid") == preview.kid]
        if not keys:
            raise _reject(f"No signing key with kid={preview.kid}")
        return {"keys": keys}

    def _check_time_claims(self, claims: dict[str, Any]) -> None:
        # authlib only checks time claims that are present; enforce the same skew
        skew = self._jwt_config.clock_skew
        now = int(time.time())
        if "exp" in claims and now > int(claims["exp"]) + skew:
            raise _reject("Token expired")
        if "nbf" in claims and now < int(claims["nbf"]) - skew:
            raise _reject("Token not yet valid")
        if "iat" in claims and int(claims["iat"]) > now + skew:
            raise _reject("Token issued in the future")

    async def verify_jwt(self, token: str) -> TokenClaims:
        preview = preview_jwt(token)

        if preview.alg not in self._jwt_config.allowed_algorithms:
            raise _reject("Disallowed JWT algorithm")
        if not preview.iss:
            raise _reject("Missing iss claim")

        provider = lookup_provider_by_issuer(self._oidc_config, preview.iss)
        if provider is None:
            raise _reject(f"Unknown issuer: {preview.iss}")

        keys = await self._signing_keys(provider, preview)
        try:
            claims = jwt.decode(
                token,
                JsonWebKey.import_key_set(keys),
                claims_options=self._claims_options(provider),
            )
            claims.validate(leeway=self._jwt_config.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected token from {}: {}", provider.issuer, exc)
            raise _reject(f"JWT error: {exc}") from exc

        self._check_time_claims(claims)
        if not claims.get("sub"):
            raise _reject("Missing sub claim")

        return create_token_claims(
            token=token, claims=dict(claims), claims_config=self._jwt_config.claims
        )
