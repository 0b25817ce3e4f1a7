"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error translation (every failure becomes an ErrorResponse)
- Security middleware (headers, rate limiting)
- Logging configuration

No business logic belongs here.
"""

from fastapi import FastAPI

from app.core.config import settings
from app.interfaces.health import router as health_router
from app.interfaces.tickets.router import router as tickets_router
from app.shared.errors.handlers import register_error_handlers
from app.shared.logging import configure_logging
from app.shared.security.headers import SecurityHeadersMiddleware
from app.shared.security.rate_limiting import limiter


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error translation, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # --- Rate Limiting ---
    # RateLimitExceeded is an HTTPException, translated like any other.
    app.state.limiter = limiter

    # --- Error Translation ---
    # Installs ErrorTranslationMiddleware; must precede the headers
    # middleware so error responses are wrapped by it.
    register_error_handlers(app)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)

    # --- Routers ---
    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(tickets_router, prefix=settings.api_prefix)

    return app


app = create_app()
