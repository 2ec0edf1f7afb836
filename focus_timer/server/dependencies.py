from fastapi import HTTPException, Request

from focus_timer.data.store import JsonFileStore, ValidationError, validate_day


def get_store(request: Request) -> JsonFileStore:
    return request.app.state.store


def valid_day(date: str) -> str:
    """Path parameter check for `YYYY-MM-DD` dates."""
    try:
        return validate_day(date)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
