from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from focus_timer.data.store import Preferences, validate_total


class DailyTotalPayload(BaseModel):
    total: int

    @field_validator("total", mode="before")
    @classmethod
    def check_total(cls, value: Any) -> int:
        return validate_total(value)


class DailyTotalResponse(BaseModel):
    total: int


class PreferencesPayload(BaseModel):
    lastMinutes: int
    lastSeconds: int

    @model_validator(mode="before")
    @classmethod
    def check_bounds(cls, data: Any) -> Any:
        return Preferences.from_payload(data).to_payload()

    def to_preferences(self) -> Preferences:
        return Preferences(minutes=self.lastMinutes, seconds=self.lastSeconds)


class SuccessResponse(BaseModel):
    success: bool = True
