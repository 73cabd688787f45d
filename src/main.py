"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from src import __version__
from src.api import api_router, oauth_router
from src.auth.flow import OAuthFlowController
from src.auth.session import create_session_store
from src.config import get_settings
from src.errors import AppError
from src.models.schemas import ErrorResponse
from src.services.generator import ReadmeGenerator, create_generative_backend
from src.services.github import GitHubClient, RepositoryAggregator
from src.utils.http_client import create_http_client
from src.utils.logging import get_logger, setup_logging
from src.utils.sanitizer import SanitizedJSONResponse

settings = get_settings()
setup_logging()
logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Referrer policy; keeps the OAuth code out of third-party referrers
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        # HSTS (only in production)
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler: build and tear down the service graph."""
    http_client = create_http_client()
    github = GitHubClient(
        http_client,
        client_id=settings.github_client_id,
        client_secret=settings.github_client_secret,
    )
    session_store = create_session_store(settings)

    app.state.session_store = session_store
    app.state.oauth_controller = OAuthFlowController(settings, github, session_store)
    app.state.aggregator = RepositoryAggregator(github)
    app.state.generator = ReadmeGenerator(
        create_generative_backend(settings),
        timeout=settings.generation_timeout,
    )

    logger.info(f"OAuth configured: {'yes' if settings.oauth_configured else 'no'}")
    logger.info(f"Gemini configured: {'yes' if settings.gemini_api_key else 'no'}")
    logger.info(f"Session mode: {session_store.name}")
    if not settings.github_redirect_uri:
        logger.warning("GITHUB_REDIRECT_URI is not set - GitHub login is disabled")

    yield

    await session_store.close()
    await http_client.aclose()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
    default_response_class=SanitizedJSONResponse,
)

# Middleware (order matters - first added = last executed)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.client_url],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> SanitizedJSONResponse:
    """Render application errors as ``{error, requiresAuth}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind.name}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind.name}")
    body = ErrorResponse(error=exc.message, requires_auth=exc.requires_auth)
    return SanitizedJSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> SanitizedJSONResponse:
    """Report malformed requests with the same body shape as other errors."""
    message = "Invalid request."
    if errors := exc.errors():
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {errors[0].get('msg', '')}".strip()
    body = ErrorResponse(error=message)
    return SanitizedJSONResponse(status_code=400, content=body.model_dump(by_alias=True))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> SanitizedJSONResponse:
    """Never leak internals for unexpected failures."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    body = ErrorResponse(error="Internal server error")
    return SanitizedJSONResponse(status_code=500, content=body.model_dump(by_alias=True))


app.include_router(oauth_router)
app.include_router(api_router)


@app.get("/health")
async def health_check(request: Request) -> dict:
    """Liveness probe with the configured session backend."""
    store = getattr(request.app.state, "session_store", None)
    return {
        "status": "healthy",
        "version": __version__,
        "session_backend": store.name if store else None,
    }
