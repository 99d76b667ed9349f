"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coeditor import __version__
from coeditor.api.ai import router as ai_router
from coeditor.api.schemas import ErrorResponse
from coeditor.api.search import router as search_router
from coeditor.core.config import Settings, get_settings
from coeditor.core.errors import AssistantError
from coeditor.core.factory import ComponentFactory
from coeditor.core.logging_config import setup_logging
from coeditor.core.providers import resolve_credentials
from coeditor.core.service import AssistantService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Handles startup and shutdown events for proper resource management.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting Coeditor Assistant API...")

    configured = [p.value for p in resolve_credentials(settings)]
    if configured:
        logger.info(f"Configured AI providers: {', '.join(configured)}")
    else:
        logger.warning("No AI provider configured; set GROQ_API_KEY or OPENAI_API_KEY")

    yield

    # Shutdown
    logger.info("Shutting down Coeditor Assistant API...")

    try:
        await app.state.factory.aclose()
        logger.info("Network clients closed")
    except Exception as e:
        logger.error(f"Error closing network clients: {e}", exc_info=True)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.
    """
    try:
        settings = settings or get_settings()

        app = FastAPI(
            title="Coeditor Assistant",
            description="AI text transforms, chat and web search for the document editor",
            version=__version__,
            lifespan=lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        # Store shared components in app state
        app.state.settings = settings
        app.state.factory = ComponentFactory(settings)
        app.state.assistant = AssistantService(settings, app.state.factory)

        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Include routers
        try:
            app.include_router(ai_router)
            app.include_router(search_router)
            logger.info("Registered ai and agent routers")
        except Exception as e:
            logger.error(f"Failed to include router: {e}", exc_info=True)
            raise

        # Health check endpoint
        @app.get("/health", tags=["health"])
        async def health_check():
            """Health check endpoint for load balancers and monitoring."""
            return {
                "status": "healthy",
                "service": "coeditor-assistant-api",
                "version": __version__,
            }

        # Exception handlers
        @app.exception_handler(AssistantError)
        async def assistant_exception_handler(request: Request, exc: AssistantError):
            """Map assistant errors to their status code."""
            return JSONResponse(
                status_code=exc.status_code,
                content=ErrorResponse(
                    error=exc.message,
                    error_code=exc.error_code,
                ).model_dump(exclude_none=True),
            )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            """Handle Pydantic validation errors."""
            logger.warning(f"Validation error: {exc.errors()}")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=ErrorResponse(
                    error="Invalid request body",
                    error_code="INVALID_REQUEST",
                    extra={"errors": jsonable_errors(exc)},
                ).model_dump(exclude_none=True),
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle uncaught exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(
                    error="Internal server error",
                    error_code="INTERNAL_ERROR",
                ).model_dump(exclude_none=True),
            )

        logger.info("FastAPI application created successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create FastAPI app: {e}", exc_info=True)
        raise


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Strip non-serializable context from validation errors."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


# Initialize logging before creating the app
setup_logging()

# Create the app instance
try:
    app = create_app()
except Exception as e:
    logger.error(f"Fatal error creating app: {e}", exc_info=True)
    raise


if __name__ == "__main__":
    import uvicorn

    try:
        settings = get_settings()
        logger.info("Starting uvicorn server on port 8000...")
        uvicorn.run(
            "coeditor.main:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    except Exception as e:
        logger.error(f"Failed to start uvicorn: {e}", exc_info=True)
        raise
