"""
CampusHub: FastAPI application entry-point.

Run with:
    uvicorn campushub.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campushub.config import settings
from campushub.database import create_tables

# ── Import routers ──
from campushub.routers import trust, users
from campushub.services.errors import ServiceError

# ── Logging: configured before anything else logs ──
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan: create tables on startup ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    if not settings.SUPER_ADMIN_ID:
        logger.warning("SUPER_ADMIN_ID is not set; no account can become admin")
    logger.info("%s v%s starting up", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("%s shutting down", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    description="Campus startup network: profiles, role upgrades and peer trust.",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════
#  Error handlers: every failure leaves as {"message": ...}
# ═══════════════════════════════════════════════════════════════

@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        issues.append(f"{field}: {error['msg']}" if field else error["msg"])
    return JSONResponse(status_code=400, content={"message": "; ".join(issues) or "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=True)
    message = f"{type(exc).__name__}: {exc}" if settings.DEBUG else "An unexpected error occurred"
    return JSONResponse(status_code=500, content={"message": message})


# ── Register API routers ──
app.include_router(users.router)
app.include_router(trust.router)


@app.get("/api/health", tags=["system"])
async def health_check() -> dict:
    return {"status": "ok", "version": settings.APP_VERSION}


if settings.ENVIRONMENT != "production":
    from campushub.routers.auth import create_access_token

    @app.get("/dev/token/{actor_id}", tags=["dev"])
    async def dev_token(actor_id: str, email: str = ""):
        """Mint a local access token so the API can be exercised without the identity provider."""
        return {
            "access_token": create_access_token(actor_id, email or f"{actor_id}@example.com"),
            "token_type": "bearer",
        }
