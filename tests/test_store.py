import json

import pytest

from focus_timer.data.store import JsonFileStore, Preferences, ValidationError, validate_day, validate_total


def test_init_creates_data_file(tmp_path) -> None:
    path = tmp_path / "data" / "data.json"
    store = JsonFileStore(path)
    store.init()
    assert path.exists()
    assert json.loads(path.read_text()) == {}


def test_init_keeps_existing_data(tmp_path) -> None:
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"2026-01-01": 60}))
    store = JsonFileStore(path)
    store.init()
    assert store.get_daily_total("2026-01-01") == 60


def test_set_get_daily_total(tmp_path) -> None:
    store = JsonFileStore(tmp_path / "data.json")
    store.init()
    store.set_daily_total("2026-01-01", 1500)
    assert store.get_daily_total("2026-01-01") == 1500
    assert store.get_daily_total("2026-01-02") == 0


def test_preferences_default_and_persist(tmp_path) -> None:
    store = JsonFileStore(tmp_path / "data.json")
    store.init()
    assert store.get_preferences() == Preferences(25, 0)

    store.set_preferences(Preferences(45, 30))
    store.set_daily_total("2026-01-01", 10)

    data = json.loads((tmp_path / "data.json").read_text())
    assert data == {"preferences": {"lastMinutes": 45, "lastSeconds": 30}, "2026-01-01": 10}


def test_corrupt_file_reads_as_empty(tmp_path) -> None:
    path = tmp_path / "data.json"
    path.write_text("{not json")
    store = JsonFileStore(path)

    assert store.get_daily_total("2026-01-01") == 0
    assert store.get_preferences() == Preferences()

    store.set_daily_total("2026-01-01", 5)
    assert store.get_daily_total("2026-01-01") == 5


@pytest.mark.parametrize("value", ["2026-1-01", "20260101", "2026-13-01", "2026-02-30", "today", ""])
def test_validate_day_rejects_malformed(value) -> None:
    with pytest.raises(ValidationError):
        validate_day(value)


def test_validate_day_accepts_calendar_dates() -> None:
    assert validate_day("2024-02-29") == "2024-02-29"


@pytest.mark.parametrize("value", [-1, "10", None, True, float("inf"), float("nan")])
def test_validate_total_rejects_invalid(value) -> None:
    with pytest.raises(ValidationError):
        validate_total(value)


def test_store_rejects_bad_day_and_total(tmp_path) -> None:
    store = JsonFileStore(tmp_path / "data.json")
    with pytest.raises(ValidationError):
        store.set_daily_total("2026/01/01", 10)
    with pytest.raises(ValidationError):
        store.set_daily_total("2026-01-01", -10)


def test_non_finite_stored_total_reads_as_zero(tmp_path) -> None:
    path = tmp_path / "data.json"
    path.write_text('{"2026-01-01": Infinity}')
    assert JsonFileStore(path).get_daily_total("2026-01-01") == 0
