"""Retrieval and caching of issuers' published signing keys."""

from abc import ABC, abstractmethod
from typing import Any

import httpx
from cachetools import TTLCache
from fastapi import HTTPException
from loguru import logger

from src.brewery.runtime.config.config_data import OIDCProviderConfig


class JWKSCache(ABC):
    """Storage for JWKS documents keyed by their URI."""

    @abstractmethod
    def get_jwks(self, jwks_uri: str) -> dict[str, Any]:
        """Return the cached document, or an empty dict on a miss."""

    @abstractmethod
    def set_jwks(self, jwks_uri: str, jwks: dict[str, Any]) -> None: ...

    @abstractmethod
    def clear_jwks_cache(self) -> None: ...


class JWKSCacheInMemory(JWKSCache):
    """Per-process cache; entries expire after ``ttl_seconds`` so key rotation is picked up."""

    def __init__(self, ttl_seconds: int = 3600, maxsize: int = 10) -> None:
        self._entries: TTLCache[str, dict[str, Any]] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds
        )

    def get_jwks(self, jwks_uri: str) -> dict[str, Any]:
        return self._entries.get(jwks_uri) or {}

    def set_jwks(self, jwks_uri: str, jwks: dict[str, Any]) -> None:
        self._entries[jwks_uri] = jwks

    def clear_jwks_cache(self) -> None:
        self._entries.clear()


class JwksService:
    def __init__(self, cache: JWKSCache, timeout_seconds: float = 5.0) -> None:
        self._cache = cache
        self._timeout = timeout_seconds

    async def fetch_jwks(self, issuer: OIDCProviderConfig) -> dict[str, Any]:
        """Return the issuer's JWKS, from cache when possible.

        Raises HTTPException 503 when the endpoint cannot be read.
        """
        uri = issuer.jwks_uri
        if not uri:
            raise HTTPException(status_code=401, detail="Issuer has no JWKS URI configured")

        cached = self._cache.get_jwks(uri)
        if cached:
            return cached

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(uri)
                response.raise_for_status()
                jwks = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("JWKS fetch from {} failed: {}", uri, exc)
            raise HTTPException(
                status_code=503, detail=f"Failed to fetch JWKS: {exc}"
            ) from exc

        self._cache.set_jwks(uri, jwks)
        logger.debug("Cached JWKS from {}", uri)
        return jwks
