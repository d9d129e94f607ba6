"""Brewery API application: middleware, routers and lifecycle."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.brewery.api.http.app_data import ApplicationDependencies
from src.brewery.api.http.deps import require_bearer_token
from src.brewery.api.http.middleware import SecurityHeadersMiddleware, log_requests
from src.brewery.api.http.routers import health
from src.brewery.api.http.routers.service import beer, customer
from src.brewery.api.utils.app_startup import configure_logging
from src.brewery.core.services import (
    DbSessionService,
    JWKSCacheInMemory,
    JwksService,
    JwtVerificationService,
)
from src.brewery.runtime.config.config_data import ConfigData
from src.brewery.runtime.context import get_config

__all__ = ["app", "startup", "shutdown"]

main_config = get_config()
configure_logging(main_config)

_is_production = main_config.app.environment == "production"
_cors = main_config.app.cors

if _is_production and "*" in _cors.origins and _cors.allow_credentials:
    raise RuntimeError("CORS wildcard origin cannot be combined with credentials")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Brewery API",
    version="0.1.0",
    lifespan=lifespan,
    # only health routes may answer without a token, so no schema or docs UI
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# innermost, so its 500 responses still get security and CORS headers
app.middleware("http")(log_requests)
app.add_middleware(SecurityHeadersMiddleware, enable_hsts=_is_production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors.origins,
    allow_credentials=_cors.allow_credentials,
    allow_methods=_cors.allow_methods,
    allow_headers=_cors.allow_headers,
)

# Health routes stay open; catalog routes require a bearer token
app.include_router(health.router)
for catalog_router in (beer.router, customer.router):
    app.include_router(
        catalog_router,
        prefix=main_config.app.api_prefix,
        dependencies=[Depends(require_bearer_token)],
    )


def build_dependencies(config: ConfigData) -> ApplicationDependencies:
    jwks_cache = JWKSCacheInMemory(ttl_seconds=config.oidc.jwks_cache_ttl_seconds)
    jwks_service = JwksService(
        jwks_cache, timeout_seconds=config.oidc.jwks_fetch_timeout_seconds
    )
    return ApplicationDependencies(
        config=config,
        jwks_cache=jwks_cache,
        jwks_service=jwks_service,
        jwt_verify_service=JwtVerificationService(
            jwks_service, config.jwt, config.oidc
        ),
        database_service=DbSessionService(config.database, config.app.environment),
    )


async def _prefetch_jwks(deps: ApplicationDependencies) -> list[str]:
    """Warm the JWKS cache; returns the issuers whose keys could not be fetched."""
    providers = list(deps.config.oidc.providers.values())
    outcomes = await asyncio.gather(
        *(deps.jwks_service.fetch_jwks(p) for p in providers), return_exceptions=True
    )
    failed = []
    for provider, outcome in zip(providers, outcomes, strict=True):
        if isinstance(outcome, Exception):
            logger.error("Could not fetch JWKS for {}: {}", provider.issuer, outcome)
            failed.append(provider.issuer)
    return failed


async def startup() -> None:
    config = get_config()
    logger.info("Starting Brewery API ({})", config.app.environment)

    deps = build_dependencies(config)
    if config.database.create_tables:
        await deps.database_service.init_db()
    app.state.app_dependencies = deps

    if not config.oidc.providers:
        logger.warning("No token issuers configured; every API request will be rejected")
        return

    failed = await _prefetch_jwks(deps)
    if failed and config.app.environment == "production":
        raise RuntimeError(f"Token issuers unreachable at startup: {failed}")


async def shutdown() -> None:
    logger.info("Stopping Brewery API")
    deps: ApplicationDependencies = app.state.app_dependencies
    await deps.database_service.dispose()


if __name__ == "__main__":
    import uvicorn

    # request logging middleware covers access logs
    uvicorn.run(
        app, host=main_config.app.host, port=main_config.app.port, access_log=False
    )
