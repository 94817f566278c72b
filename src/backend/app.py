import logging

from contextlib import asynccontextmanager

from src.backend.common.config.app_config import config

# FastAPI imports
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Local imports
from src.backend.api.router import api_router, root_router
from src.backend.integrations.errors import MissingCredentialsError, UpstreamAPIError


# Configure logging levels from environment variables
logging.basicConfig(level=getattr(logging, config.BASIC_LOGGING_LEVEL.upper(), logging.INFO))

# Quiet the HTTP/Google client packages
package_level = getattr(logging, config.PACKAGE_LOGGING_LEVEL.upper(), logging.WARNING)
for logger_name in config.logging_packages:
    logging.getLogger(logger_name).setLevel(package_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup/shutdown and which vendor integrations have credentials."""
    configured = [name for name, ok in config.integration_status().items() if ok]
    logger.info(f"🚀 Starting {config.APP_TITLE} (configured: {', '.join(configured) or 'none'})")
    yield
    logger.info(f"👋 {config.APP_TITLE} shutdown complete")


# Initialize the FastAPI app
app = FastAPI(title=config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=config.CORS_ALLOW_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(root_router)


# ---------------------------------------------------------------------------
# Error envelopes: every failure answers {"error": ...}
# ---------------------------------------------------------------------------


@app.exception_handler(MissingCredentialsError)
async def missing_credentials_handler(request: Request, exc: MissingCredentialsError) -> JSONResponse:
    logger.error(f"{exc.vendor}: {exc}")
    return JSONResponse(status_code=401, content={"error": str(exc)})


@app.exception_handler(UpstreamAPIError)
async def upstream_error_handler(request: Request, exc: UpstreamAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content={"error": exc.detail})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/health")
async def health():
    """Liveness plus a per-vendor "credentials present" map (no upstream calls)."""
    return {"status": "healthy", "integrations": config.integration_status()}


# Run the app
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.backend.app:app",
        host=config.HOST,
        port=config.PORT,
        log_level=config.BASIC_LOGGING_LEVEL.lower(),
        access_log=False,
    )
