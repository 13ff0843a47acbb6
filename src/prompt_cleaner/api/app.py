"""
FastAPI application serving the cleaning pipeline to the browser extension.

The extension posts pasted text to /api/v1/clean and reads option tables from
/api/v1/options/* to populate its settings panel.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from ..version import API_VERSION, get_current_cleaner_version
from ..config import Settings, settings
from ..logging_config import setup_logging
from .routes import clean, health, options, version
from .middleware import setup_error_handling_middleware, setup_logging_middleware

setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log service start and stop with the effective cleaning configuration."""
    logger.info(
        "api_starting",
        version=API_VERSION,
        cleaner_version=get_current_cleaner_version().to_repr(),
        default_preset=settings.default_preset,
        max_request_chars=settings.max_request_chars,
    )
    yield
    logger.info("api_stopping")


def create_app(config: Settings = settings) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Settings providing CORS origins (module settings by default)

    Returns:
        App with middleware and the health, version, clean and options routers
    """
    app = FastAPI(
        title="Prompt Cleaner",
        description="Deterministic cleaning of pasted chat, email and markdown text into reusable prompts",
        version=API_VERSION,
        lifespan=lifespan,
    )

    # The extension calls from its own chrome-extension:// origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Cleaner-Version"],
    )

    # Added last runs first: logging wraps error handling
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(clean.router, prefix="/api/v1", tags=["Cleaning"])
    app.include_router(options.router, prefix="/api/v1/options", tags=["Options"])

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn (prompt-cleaner-api)."""
    import uvicorn

    uvicorn.run(
        "prompt_cleaner.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
