import logging

import pytest

from ChefAcademy_V1.core.events import EventBus, GameEvent
from ChefAcademy_V1.core.game import GameSession
from ChefAcademy_V1.core.store import MemoryStorage, ProgressionStore
from ChefAcademy_V1.domain.errors import PersistenceWriteError
from ChefAcademy_V1.domain.types import EventKind, PlotState
from ChefAcademy_V1.ui.display import format_stars, print_session
from tests.conftest import T0, at


@pytest.fixture
def session(catalog, settings):
    return GameSession(ProgressionStore(MemoryStorage(), catalog, settings), clock=lambda: T0)


def test_unsubscribe_stops_notifications():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(seen.append)
    bus.emit(EventKind.PLANTED, plot_id=0)
    unsubscribe()
    bus.emit(EventKind.PLANTED, plot_id=1)
    assert [e.payload["plot_id"] for e in seen] == [0]
    assert len(bus) == 0


def test_failing_listener_does_not_break_emit(caplog):
    bus = EventBus()
    seen = []

    def broken(event: GameEvent) -> None:
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(seen.append)
    with caplog.at_level(logging.ERROR):
        bus.emit(EventKind.COOKED, recipe_id="garden-salad")
    assert len(seen) == 1
    assert "failed" in caplog.text


def test_event_payload_is_read_only():
    event = GameEvent(EventKind.SOLD, {"item_id": "carrot"})
    with pytest.raises(TypeError):
        event.payload["item_id"] = "lettuce"


def test_full_loop(session):
    """Grow, buy, cook: the whole loop through the facade."""
    session.plant(0, "lettuce", now=at(0))
    session.plant(1, "lettuce", now=at(0))
    assert session.plot_state(0, now=at(15)) == PlotState.GROWING
    assert session.growth_progress(0, now=at(15)) == pytest.approx(0.5)
    session.harvest(0, now=at(30))
    session.harvest(1, now=at(30))

    assert session.buy_pantry_item("dressing")
    assert session.pantry_quantity("dressing") == 1
    assert [r.id for r in session.cookable_recipes()] == ["garden-salad"]

    result = session.cook("garden-salad", score=70)
    assert result.stars == 2
    assert session.progress.recipe_stars == {"garden-salad": 2}


def test_daily_quests_pay_once(session):
    progress = session.progress
    session.plant(0, "lettuce", now=at(0))
    coins = progress.coins
    session.plant(1, "lettuce", now=at(0))

    green_thumb = session.quests.quests[0]
    assert green_thumb.is_completed and green_thumb.rewarded
    assert progress.coins == coins + 20
    assert progress.xp == 15

    session.plant(2, "carrot", now=at(0))
    assert progress.coins == coins + 20
    assert [q.id for q in session.quests.completed()] == ["green-thumb"]


def test_save_and_reload(session, catalog, settings):
    session.buy_seeds("pumpkin")
    session.save(now=at(3))
    again = GameSession(session.store, catalog, settings)
    assert again.progress.seeds.quantity("pumpkin") == 2
    assert again.progress.coins == 75


def test_save_failure_is_reraised(catalog, settings, caplog):
    class Broken(MemoryStorage):
        def write(self, data: bytes) -> None:
            raise OSError("read-only filesystem")

    session = GameSession(ProgressionStore(Broken(), catalog, settings))
    with pytest.raises(PersistenceWriteError):
        session.save(now=at(0))
    assert "not saved" in caplog.text


def test_reset_starts_over(session):
    session.buy_pantry_item("cheese")
    seen = []
    session.subscribe(seen.append)
    session.reset(now=at(1))
    assert session.progress.coins == 100
    assert session.pantry_quantity("cheese") == 0
    assert seen[-1].kind == EventKind.PROGRESS_RESET


def test_text_display(session, capsys):
    session.plant(0, "carrot", now=at(0))
    print_session(session, now=at(30))
    out = capsys.readouterr().out
    assert "Carrot" in out
    assert "Garden Salad" in out
    assert format_stars(2) == "★★☆"


def test_failed_reset_keeps_the_session_playing(catalog, settings):
    """A reset whose save fails leaves progress and daily quests as they were."""

    class ReadOnly(MemoryStorage):
        def write(self, data: bytes) -> None:
            raise OSError("read-only filesystem")

    session = GameSession(ProgressionStore(ReadOnly(), catalog, settings), clock=lambda: T0)
    session.buy_pantry_item("cheese")
    progress = session.progress
    with pytest.raises(PersistenceWriteError):
        session.reset(now=at(1))
    assert session.progress is progress
    assert session.pantry_quantity("cheese") == 1

    coins = progress.coins
    session.plant(0, "lettuce", now=at(2))
    session.plant(1, "lettuce", now=at(2))
    assert progress.coins == coins + 20
    assert session.quests.quests[0].rewarded
