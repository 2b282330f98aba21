import pytest

from ChefAcademy_V1.domain.errors import InsufficientSeeds, InsufficientStock
from ChefAcademy_V1.domain.inventory import StockLedger
from ChefAcademy_V1.domain.progress import HealthStats, PlayerProgress
from ChefAcademy_V1.domain.types import HealthStat


def test_quantities_never_go_negative():
    ledger = StockLedger.from_mapping({"salt": 2})
    with pytest.raises(InsufficientStock):
        ledger.remove("salt", 3)
    assert ledger.quantity("salt") == 2


def test_empty_entries_are_pruned():
    ledger = StockLedger.from_mapping({"salt": 1, "pepper": 0})
    assert len(ledger) == 1
    ledger.remove("salt")
    assert ledger.snapshot() == []


def test_custom_shortfall_error():
    ledger = StockLedger()
    with pytest.raises(InsufficientSeeds) as exc:
        ledger.remove("carrot", 1, shortfall_error=InsufficientSeeds)
    assert exc.value.item_id == "carrot"


def test_remove_all_is_atomic():
    ledger = StockLedger.from_mapping({"lettuce": 2, "tomato": 0})
    with pytest.raises(InsufficientStock):
        ledger.remove_all({"lettuce": 1, "tomato": 1})
    assert ledger.quantity("lettuce") == 2

    ledger.add("tomato", 1)
    ledger.remove_all({"lettuce": 1, "tomato": 1})
    assert ledger.snapshot() == [("lettuce", 1)]


def test_shortfall():
    ledger = StockLedger.from_mapping({"lettuce": 1})
    assert ledger.shortfall({"lettuce": 2, "tomato": 1}) == {"lettuce": 1, "tomato": 1}
    assert ledger.shortfall({"lettuce": 1}) == {}


def test_iteration_is_sorted():
    ledger = StockLedger.from_mapping({"tomato": 1, "carrot": 3, "lettuce": 2})
    assert [item for item, _ in ledger] == ["carrot", "lettuce", "tomato"]
    assert ledger.total() == 6


def test_health_stats_are_clamped():
    health = HealthStats(brain=150, bone=-4)
    assert health.brain == 100
    assert health.bone == 0
    applied = health.apply({HealthStat.MUSCLE: 70, HealthStat.HEART: -60})
    assert applied == {HealthStat.MUSCLE: 50, HealthStat.HEART: -50}


def test_new_player_defaults():
    progress = PlayerProgress.new_player()
    assert progress.coins == 100
    assert progress.level == 1
    assert progress.unlocked_recipes == {"veggie-wrap", "garden-salad"}
    assert set(progress.health.as_dict().values()) == {50}
    assert progress.plot(3) is not None
    assert progress.plot(4) is None
