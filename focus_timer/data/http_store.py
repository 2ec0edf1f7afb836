"""HTTP client for the focus timer server."""

from __future__ import annotations

import logging

import httpx

from focus_timer.data.store import FocusStore, Preferences, StoreError, ValidationError, validate_day, validate_total


logger = logging.getLogger(__name__)


class HttpStore(FocusStore):
    """Implements the store contract against `/api/daily-total` and `/api/preferences`."""

    def __init__(self, base_url: str, timeout: float = 5.0, client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, json: dict | None = None) -> dict:
        try:
            response = self._client.request(method, path, json=json)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {path} failed: {exc}") from exc
        except ValueError as exc:
            raise StoreError(f"{method} {path} returned invalid JSON") from exc
        if not isinstance(data, dict):
            raise StoreError(f"{method} {path} returned {type(data).__name__}, expected an object")
        return data

    def get_daily_total(self, day: str) -> int:
        validate_day(day)
        data = self._request("GET", f"/api/daily-total/{day}")
        try:
            return validate_total(data.get("total", 0))
        except ValidationError as exc:
            raise StoreError(f"Server sent a malformed total for {day}") from exc

    def set_daily_total(self, day: str, total: int) -> None:
        validate_day(day)
        self._request("POST", f"/api/daily-total/{day}", json={"total": validate_total(total)})

    def get_preferences(self) -> Preferences:
        data = self._request("GET", "/api/preferences")
        try:
            return Preferences.from_payload(data)
        except ValidationError as exc:
            raise StoreError("Server sent malformed preferences") from exc

    def set_preferences(self, preferences: Preferences) -> None:
        self._request("POST", "/api/preferences", json=preferences.to_payload())
