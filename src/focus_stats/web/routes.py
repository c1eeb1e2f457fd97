"""
FastAPI routes for the Focus Stats dashboard.

PURPOSE: Thin route handlers that delegate to Stats and presenters.
AI CONTEXT: Routes should be simple - business logic in statistics.py.

ROUTE STRUCTURE:
- /api/stats : Aggregated statistics for a window (JSON)
- /api/sessions : Sessions in a window (JSON)
- /charts/history.png : Work history bar chart

Every route accepts the CLI window options as query parameters:
period, start and end.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from ..errors import FocusStatsError, ValidationError
from ..presenters import ChartPresenter
from ..stats_service import Stats
from ..storage import SessionStore

__all__ = [
    "router",
    "get_store",
    "get_chart_presenter",
]

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Dependency Factory Functions
# =============================================================================


def get_store() -> Iterator[SessionStore]:
    """
    Provide a SessionStore for one request.

    A new store is opened per request so every response reflects the
    file on disk, and it is closed once the response is produced.

    Yields:
        SessionStore using the configured storage directory.
    """
    with SessionStore() as store:
        yield store


def get_chart_presenter() -> ChartPresenter:
    """Provide the matplotlib chart presenter."""
    return ChartPresenter()


StoreDep = Annotated[SessionStore, Depends(get_store)]


def _load_stats(store: SessionStore, period: str, start: str, end: str) -> Stats:
    """
    Resolve the window and fetch its sessions.

    Raises:
        HTTPException: 400 for invalid options, 500 for storage failures.
    """
    try:
        stats = Stats.from_options(store, period, start, end)
        stats.fetch_sessions()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except FocusStatsError as e:
        logger.error("Failed to load sessions: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return stats


# ============================================================================
# API Routes (JSON)
# ============================================================================


@router.get("/api/stats")
def api_stats(
    store: StoreDep,
    period: str = "",
    start: str = "",
    end: str = "",
) -> dict[str, Any]:
    """
    Get aggregated statistics for a window as JSON.

    Returns:
        Dict with the anchored window ('start', 'end', 'hours_diff') and
        the StatsData fields: totals, averages, weekday, hour_of_day and
        an ordered history list.

    Example:
        >>> # GET /api/stats?period=7days
        >>> {"start": "2026-03-04T00:00:00", "totals": {"minutes": 420, ...}, ...}
    """
    stats = _load_stats(store, period, start, end)
    data = stats.compute()
    return {
        "start": stats.start_time.isoformat() if stats.start_time else None,
        "end": stats.end_time.isoformat() if stats.end_time else None,
        "hours_diff": stats.hours_diff,
        "session_count": len(stats.sessions),
        **data.to_dict(),
    }


@router.get("/api/sessions")
def api_sessions(
    store: StoreDep,
    period: str = "",
    start: str = "",
    end: str = "",
) -> dict[str, Any]:
    """
    List sessions in a window as JSON.

    Returns:
        Dict with 'sessions': list of index, name, start_time, end_time
        (None while in progress) and status.
    """
    stats = _load_stats(store, period, start, end)
    return {
        "sessions": [
            {
                "index": index,
                "name": session.name,
                "start_time": session.start_time.isoformat(),
                "end_time": session.end_time.isoformat() if session.end_time else None,
                "status": session.status,
            }
            for index, session in enumerate(stats.sessions, start=1)
        ]
    }


# ============================================================================
# Chart Routes
# ============================================================================


@router.get("/charts/history.png")
def history_chart(
    store: StoreDep,
    presenter: Annotated[ChartPresenter, Depends(get_chart_presenter)],
    period: str = "",
    start: str = "",
    end: str = "",
) -> Response:
    """
    Serve the work history chart for a window as a PNG image.

    Returns:
        Response with PNG bytes (media_type="image/png").
    """
    stats = _load_stats(store, period, start, end)
    png_bytes = presenter.render_history_chart(stats.compute())
    return Response(content=png_bytes, media_type="image/png")
