import pytest
from fastapi.testclient import TestClient

from focus_timer.core.daily_total import DailyTotalCache
from focus_timer.core.preferences import PreferencesStore
from focus_timer.data.http_store import HttpStore
from focus_timer.data.store import JsonFileStore, Preferences
from focus_timer.server.main import create_app, find_certificates


@pytest.fixture
def client(tmp_path) -> TestClient:
    return TestClient(create_app(JsonFileStore(tmp_path / "data.json")))


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}


def test_unknown_date_has_zero_total(client) -> None:
    resp = client.get("/api/daily-total/2026-03-14")
    assert resp.status_code == 200
    assert resp.json() == {"total": 0}


def test_save_and_read_total(client) -> None:
    resp = client.post("/api/daily-total/2026-03-14", json={"total": 1500})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get("/api/daily-total/2026-03-14").json() == {"total": 1500}


@pytest.mark.parametrize("day", ["2026-3-14", "2026-02-30", "yesterday"])
def test_malformed_date_is_rejected(client, day) -> None:
    assert client.get(f"/api/daily-total/{day}").status_code == 400
    resp = client.post(f"/api/daily-total/{day}", json={"total": 10})
    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.parametrize("body", [{"total": -5}, {"total": "10"}, {}, {"total": True}])
def test_invalid_total_is_rejected(client, body) -> None:
    resp = client.post("/api/daily-total/2026-03-14", json=body)
    assert resp.status_code == 400
    assert "error" in resp.json()


@pytest.mark.parametrize("raw", [b'{"total": Infinity}', b'{"total": NaN}'])
def test_non_finite_total_is_rejected(client, raw) -> None:
    resp = client.post(
        "/api/daily-total/2026-03-14", content=raw, headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert client.get("/api/daily-total/2026-03-14").json() == {"total": 0}


def test_preferences_default(client) -> None:
    assert client.get("/api/preferences").json() == {"lastMinutes": 25, "lastSeconds": 0}


def test_preferences_save(client) -> None:
    resp = client.post("/api/preferences", json={"lastMinutes": 50, "lastSeconds": 10})
    assert resp.status_code == 200
    assert client.get("/api/preferences").json() == {"lastMinutes": 50, "lastSeconds": 10}


@pytest.mark.parametrize(
    "body",
    [
        {"lastMinutes": -1, "lastSeconds": 0},
        {"lastMinutes": 5, "lastSeconds": 60},
        {"lastMinutes": "5", "lastSeconds": 0},
        {"lastMinutes": 5},
    ],
)
def test_invalid_preferences_are_rejected(client, body) -> None:
    resp = client.post("/api/preferences", json=body)
    assert resp.status_code == 400
    assert client.get("/api/preferences").json() == {"lastMinutes": 25, "lastSeconds": 0}


def test_client_caches_against_live_app(client, clock) -> None:
    store = HttpStore("http://testserver", client=client)
    cache = DailyTotalCache(store, clock)
    client.post("/api/daily-total/2026-03-14", json={"total": 300})

    assert cache.load() == 300
    assert cache.add_delta("2026-03-14", 60).ok is True
    assert client.get("/api/daily-total/2026-03-14").json() == {"total": 360}

    preferences = PreferencesStore(store)
    assert preferences.save(15, 30).ok is True
    assert preferences.load() == Preferences(15, 30)


def test_find_certificates(tmp_path) -> None:
    assert find_certificates(tmp_path / "missing") is None
    (tmp_path / "server.crt").write_text("crt")
    assert find_certificates(tmp_path) is None
    (tmp_path / "server.key").write_text("key")
    assert find_certificates(tmp_path) == (tmp_path / "server.crt", tmp_path / "server.key")
