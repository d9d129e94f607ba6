"""Tests for the JWKS cache and fetcher."""

import pytest
from fastapi import HTTPException

from src.brewery.core.services import JWKSCache, JwksService
from src.brewery.runtime.config.config_data import OIDCProviderConfig


class TestJwksService:
    async def test_cached_jwks_served_without_fetch(
        self, jwks_cache: JWKSCache, oidc_provider_config: OIDCProviderConfig, jwks_data
    ):
        jwks_cache.set_jwks(oidc_provider_config.jwks_uri, jwks_data)
        service = JwksService(jwks_cache)

        assert await service.fetch_jwks(oidc_provider_config) == jwks_data

    async def test_unreachable_issuer_is_503(self, jwks_cache: JWKSCache):
        provider = OIDCProviderConfig(
            issuer="http://127.0.0.1:9", jwks_uri="http://127.0.0.1:9/jwks"
        )
        service = JwksService(jwks_cache, timeout_seconds=1.0)

        with pytest.raises(HTTPException) as exc_info:
            await service.fetch_jwks(provider)

        assert exc_info.value.status_code == 503
        assert jwks_cache.get_jwks(provider.jwks_uri) == {}

    def test_clear_cache(self, jwks_cache: JWKSCache, jwks_data):
        jwks_cache.set_jwks("https://issuer.test/jwks", jwks_data)

        jwks_cache.clear_jwks_cache()

        assert jwks_cache.get_jwks("https://issuer.test/jwks") == {}
