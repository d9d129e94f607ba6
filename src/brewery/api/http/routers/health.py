"""Health check endpoints router for monitoring service availability.

These routes are registered without the bearer token dependency.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from starlette.responses import JSONResponse

from src.brewery.api.http.app_data import ApplicationDependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 while the process is running, no dependency checks."""
    return {"status": "healthy", "service": "brewery-api"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness probe: checks the database and the token issuers' JWKS endpoints.

    Returns 503 when the database is down, or when an issuer is unreachable
    in production.
    """
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    config = app_deps.config

    checks: dict[str, Any] = {}
    all_healthy = True

    db_healthy = await app_deps.database_service.health_check()
    checks["database"] = {
        "status": "healthy" if db_healthy else "unhealthy",
        "type": "sqlite" if config.database.is_sqlite else "postgresql",
    }
    if not db_healthy:
        all_healthy = False

    issuer_checks = {}
    for provider_name, provider_config in config.oidc.providers.items():
        try:
            await app_deps.jwks_service.fetch_jwks(provider_config)
            issuer_checks[provider_name] = {
                "status": "healthy",
                "issuer": provider_config.issuer,
            }
        except HTTPException as e:
            issuer_checks[provider_name] = {
                "status": "unhealthy",
                "issuer": provider_config.issuer,
                "error": e.detail,
            }
            if config.app.environment == "production":
                all_healthy = False

    if issuer_checks:
        checks["token_issuers"] = issuer_checks

    response = {
        "status": "ready" if all_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": checks,
    }

    if not all_healthy:
        return JSONResponse(status_code=503, content=response)

    return response


@router.get("/database", response_model=None)
async def health_database(request: Request) -> dict[str, Any] | JSONResponse:
    """Database-specific health check with connection pool status."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies

    healthy = await app_deps.database_service.health_check()
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "type": "sqlite" if app_deps.config.database.is_sqlite else "postgresql",
        "pool": app_deps.database_service.get_pool_status(),
    }
    if not healthy:
        return JSONResponse(status_code=503, content=body)
    return body
