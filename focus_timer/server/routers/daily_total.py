import logging

from fastapi import APIRouter, Depends

from focus_timer.data.store import JsonFileStore
from focus_timer.server.dependencies import get_store, valid_day
from focus_timer.server.models import DailyTotalPayload, DailyTotalResponse, SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/daily-total", tags=["daily-total"])


@router.get("/{date}", response_model=DailyTotalResponse)
async def get_daily_total(day: str = Depends(valid_day), store: JsonFileStore = Depends(get_store)):
    """Accumulated focus seconds for one calendar date"""
    return DailyTotalResponse(total=store.get_daily_total(day))


@router.post("/{date}", response_model=SuccessResponse)
async def save_daily_total(
    payload: DailyTotalPayload,
    day: str = Depends(valid_day),
    store: JsonFileStore = Depends(get_store),
):
    """Overwrite the total for a date; clients add their delta before posting"""
    store.set_daily_total(day, payload.total)
    logger.info("Daily total for %s set to %ss", day, payload.total)
    return SuccessResponse()
