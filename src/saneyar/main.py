"""
SANEYAR FastAPI Application Entry Point

Operational service wrapper around the crisis detection engine:
- Lifespan management (corpus load at startup)
- Health endpoints
- Prometheus metrics endpoint

Crisis analysis itself is consumed in-process by the messaging
subsystem; there is no analysis endpoint.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from saneyar import __version__
from saneyar.config import Settings, get_settings
from saneyar.config.logging_config import configure_logging, get_logger
from saneyar.api.routes.health import router as health_router
from saneyar.infrastructure.metrics import (
    metrics_router,
    track_corpus_loaded,
    update_system_info,
)
from saneyar.services.detection import CorpusConfigurationError, CrisisAnalyzer, load_corpus
from saneyar.services.safety.crisis_pipeline import CrisisAlertPipeline

logger = get_logger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings override (cached settings if None)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        SAFETY-CRITICAL: A corpus that fails to load aborts
        startup. The service never becomes ready without it.
        """
        logger.info(
            "Starting SANEYAR application",
            env=settings.env,
            version=__version__,
        )

        try:
            corpus = load_corpus(settings.detection)
        except CorpusConfigurationError:
            logger.critical("Startup aborted: phrase corpus unavailable")
            raise

        analyzer = CrisisAnalyzer(corpus, settings.detection)
        app.state.corpus = corpus
        app.state.corpus_loaded_at = datetime.now(timezone.utc)
        app.state.analyzer = analyzer
        app.state.pipeline = CrisisAlertPipeline(analyzer)

        track_corpus_loaded(corpus.phrase_count)
        update_system_info(settings.env, __version__, corpus.version)

        try:
            yield
        finally:
            logger.info("Shutting down SANEYAR application")
            app.state.corpus = None
            app.state.analyzer = None
            app.state.pipeline = None

    app = FastAPI(
        title="SANEYAR Crisis Detection",
        description="Crisis detection and escalation scoring engine - operational API",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )
    app.state.corpus = None

    app.include_router(health_router)
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "SANEYAR Crisis Detection",
            "version": __version__,
            "status": "operational",
        }

    return app


# Initialize settings and logging
configure_logging(get_settings())

# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "saneyar.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
