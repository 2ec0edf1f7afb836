import pytest

from focus_timer.core.app_state import AppState
from focus_timer.core.timer import InvalidDurationError, TimerState, TimerStateError
from focus_timer.data.store import JsonFileStore, Preferences


@pytest.fixture
def app_state(store, clock, ticker, runner) -> AppState:
    return AppState(store=store, clock=clock, ticker=ticker, runner=runner, goal_seconds=600)


def test_load_emits_preferences_and_total(store, app_state) -> None:
    store.totals["2026-03-14"] = 120
    store.preferences = Preferences(40, 0)
    loaded = []
    totals = []
    app_state.preferences_loaded.connect(loaded.append)
    app_state.daily_total_changed.connect(totals.append)

    app_state.load()

    assert loaded == [Preferences(40, 0)]
    assert totals == [120]
    assert app_state.goal.percent == 20


def test_load_falls_back_to_defaults_offline(store, app_state) -> None:
    store.fail = True
    loaded = []
    app_state.preferences_loaded.connect(loaded.append)

    app_state.load()

    assert loaded == [Preferences(25, 0)]
    assert app_state.daily_totals.total == 0


def test_start_session_saves_preferences(store, app_state) -> None:
    states = []
    app_state.state_changed.connect(states.append)

    snapshot = app_state.start_session(1, 30)

    assert snapshot.remaining_seconds == 90
    assert snapshot.progress_percent == 100
    assert store.preferences == Preferences(1, 30)
    assert states == [TimerState.RUNNING]


def test_invalid_duration_leaves_state_untouched(store, app_state) -> None:
    with pytest.raises(InvalidDurationError):
        app_state.start_session(0, 0)

    assert app_state.state == TimerState.IDLE
    assert store.preferences is None


def test_completion_updates_total_and_goal(store, app_state, run) -> None:
    finished = []
    totals = []
    app_state.session_finished.connect(finished.append)
    app_state.daily_total_changed.connect(totals.append)

    app_state.start_session(10, 0)
    run(600)

    assert app_state.state == TimerState.COMPLETED
    assert [summary.completed for summary in finished] == [True]
    assert totals == [600]
    assert app_state.goal.goal_met is True


def test_stop_and_pause_round_trip(store, app_state, clock, run) -> None:
    app_state.start_session(5, 0)
    run(60)
    assert app_state.toggle_pause().state == TimerState.PAUSED
    clock.advance(120)
    assert app_state.toggle_pause().state == TimerState.RUNNING
    run(30)

    summary = app_state.stop_session()

    assert summary.elapsed_seconds == 90
    assert store.totals["2026-03-14"] == 90
    assert app_state.state == TimerState.IDLE


def test_day_change_reloads_total(store, app_state, clock) -> None:
    store.totals["2026-03-15"] = 33
    app_state.load()
    assert app_state.refresh_day() is False

    clock.advance(24 * 60 * 60)

    assert app_state.refresh_day() is True
    assert app_state.daily_totals.total == 33


def test_offline_json_store_backs_the_timer(tmp_path, clock, ticker, runner, run) -> None:
    store = JsonFileStore(tmp_path / "data.json")
    store.init()
    app_state = AppState(store=store, clock=clock, ticker=ticker, runner=runner)

    app_state.start_session(0, 20)
    run(20)

    assert store.get_daily_total("2026-03-14") == 20
    assert store.get_preferences() == Preferences(0, 20)


def test_reset_after_completion_returns_to_idle(app_state, run) -> None:
    app_state.start_session(0, 3)
    run(3)
    states = []
    app_state.state_changed.connect(states.append)

    app_state.reset()

    assert states == [TimerState.IDLE]
    assert app_state.timer.session is None
    assert app_state.timer.snapshot().remaining_seconds == 0


def test_reset_while_running_is_rejected(app_state) -> None:
    app_state.start_session(1, 0)
    with pytest.raises(TimerStateError):
        app_state.reset()
    assert app_state.state == TimerState.RUNNING
