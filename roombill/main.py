"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from roombill.api.routes import electric, health
from roombill.clients.remote_api import RemoteApiClient
from roombill.core.config import settings
from roombill.core.logging import configure_logging
from roombill.web.routes import web_router

# Static files directory
BASE_DIR = Path(__file__).resolve().parent


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    # Startup: open the remote API connection pool
    configure_logging(settings.LOG_LEVEL)
    app.state.api_client = RemoteApiClient.create(
        settings.API_BASE_URL,
        settings.API_TIMEOUT_SECONDS,
    )
    yield
    # Shutdown
    await app.state.api_client.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Room electricity and laundry billing front-end",
    lifespan=lifespan,
)

# Session middleware for flash messages and reading drafts
app.add_middleware(
    SessionMiddleware,  # type: ignore[arg-type]
    secret_key=settings.SECRET_KEY,
    session_cookie="roombill_session",
    max_age=86400 * 7,  # 7 days
    same_site="lax",
    https_only=not settings.DEBUG,
)

# Mount static files
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

# Include API routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(electric.router, prefix="/api")

# Include web routes (Jinja2 frontend)
app.include_router(web_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "roombill.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
