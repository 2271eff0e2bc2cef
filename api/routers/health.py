"""Health check endpoint."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends

from api.deps import get_app_state
from api.state import AppState
from bet_tracker import __version__

router = APIRouter()


@router.get("/health")
def health_check(app_state: AppState = Depends(get_app_state)) -> dict[str, Any]:
    """
    Liveness plus a database round trip.

    ``degraded`` means the process is up but the database did not answer.
    """
    components = app_state.get_health_status()
    ready = components["initialized"] and components["database"]

    return {
        "status": "healthy" if ready else "degraded",
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
        "components": components,
    }
