"""Statistics API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Header

from api.routes.trainer import get_trainer, save_trainer, stats_to_response
from api.schemas import StatsResponse

router = APIRouter()


@router.get("")
async def get_stats(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> StatsResponse:
    """Get decision statistics for the session."""
    trainer = await get_trainer(session_id)
    return stats_to_response(trainer)


@router.delete("")
async def reset_stats(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> StatsResponse:
    """Reset session counters. The best streak is kept."""
    trainer = await get_trainer(session_id)
    trainer.tracker.reset_session()
    await save_trainer(session_id, trainer)
    return stats_to_response(trainer)
