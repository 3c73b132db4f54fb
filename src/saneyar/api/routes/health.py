"""
Health Check Endpoints

Kubernetes-style health probes for production deployments.

ARCHITECTURE: Health checks must never fail the application.
They report status for orchestration decisions. Readiness
depends only on the phrase corpus: the engine cannot score
anything until it has loaded.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

from saneyar import __version__
from saneyar.config.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


class HealthStatus(BaseModel):
    """Health check response."""

    status: str  # healthy, starting
    timestamp: str
    version: str = __version__
    checks: dict[str, dict] = {}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/live", response_model=HealthStatus)
async def liveness() -> HealthStatus:
    """
    Liveness probe.

    This should ALWAYS return 200 unless the process is deadlocked.
    """
    return HealthStatus(
        status="healthy",
        timestamp=_now(),
        checks={
            "process": {"status": "alive"},
        },
    )


@router.get("/ready", response_model=HealthStatus)
async def readiness(request: Request, response: Response) -> HealthStatus:
    """
    Readiness probe.

    Returns 503 until the phrase corpus has loaded.
    """
    corpus = getattr(request.app.state, "corpus", None)

    if corpus is None:
        response.status_code = 503
        return HealthStatus(
            status="starting",
            timestamp=_now(),
            checks={
                "corpus": {
                    "status": "not_loaded",
                    "message": "Phrase corpus has not been loaded",
                },
            },
        )

    loaded_at: Optional[datetime] = getattr(request.app.state, "corpus_loaded_at", None)
    return HealthStatus(
        status="healthy",
        timestamp=_now(),
        checks={
            "corpus": {
                "status": "loaded",
                "version": corpus.version,
                "phrase_count": corpus.phrase_count,
                "loaded_at": loaded_at.isoformat() if loaded_at else None,
            },
        },
    )
