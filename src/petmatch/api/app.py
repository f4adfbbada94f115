"""FastAPI application factory."""

from fastapi import FastAPI

from petmatch.api.auth import router as auth_router
from petmatch.api.feed import router as feed_router
from petmatch.api.pages import router as pages_router
from petmatch.api.profile import router as profile_router
from petmatch.app_logging import configure_logging
from petmatch.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI(title="PetMatch")
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(feed_router)
    app.include_router(profile_router)
    app.include_router(pages_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
