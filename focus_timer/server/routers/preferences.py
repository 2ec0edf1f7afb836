from fastapi import APIRouter, Depends

from focus_timer.data.store import JsonFileStore
from focus_timer.server.dependencies import get_store
from focus_timer.server.models import PreferencesPayload, SuccessResponse

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("")
async def get_preferences(store: JsonFileStore = Depends(get_store)):
    """Last-used timer duration, 25:00 when never saved"""
    return store.get_preferences().to_payload()


@router.post("", response_model=SuccessResponse)
async def save_preferences(payload: PreferencesPayload, store: JsonFileStore = Depends(get_store)):
    store.set_preferences(payload.to_preferences())
    return SuccessResponse()
