import pytest

from ChefAcademy_V1.core.economy import EconomyEngine
from ChefAcademy_V1.domain.errors import InsufficientFunds, InsufficientStock, UnknownCatalogItem
from ChefAcademy_V1.domain.types import EventKind


@pytest.fixture
def economy(progress, catalog, events):
    return EconomyEngine(progress, catalog, events)


def test_buy_debits_price_and_stocks_item(economy, progress):
    assert economy.buy_pantry_item("dressing") is True
    assert progress.coins == 95
    assert economy.pantry_quantity("dressing") == 1


def test_buy_too_expensive_changes_nothing(economy, progress):
    """coins=10, item costing 15: refused, coins stay at 10."""
    progress.coins = 10
    with pytest.raises(InsufficientFunds) as exc:
        economy.buy_pantry_item("cheese")
    assert exc.value.price == 15
    assert progress.coins == 10
    assert economy.pantry_quantity("cheese") == 0


def test_try_buy_reports_failure_as_false(economy, progress):
    progress.coins = 10
    assert economy.try_buy_pantry_item("cheese") is False
    assert progress.coins == 10
    assert economy.try_buy_pantry_item("dressing") is True
    assert progress.coins == 5


def test_buy_several_units(economy, progress):
    economy.buy_pantry_item("dressing", quantity=3)
    assert progress.coins == 85
    assert economy.pantry_quantity("dressing") == 3


def test_buy_exact_balance(economy, progress):
    progress.coins = 15
    economy.buy_pantry_item("cheese")
    assert progress.coins == 0


def test_pantry_quantity_of_unknown_item_is_zero(economy):
    assert economy.pantry_quantity("truffle") == 0


def test_buy_unknown_item(economy, progress):
    with pytest.raises(UnknownCatalogItem):
        economy.buy_pantry_item("truffle")
    assert progress.coins == 100


def test_sell_pantry_item_is_symmetric(economy, progress):
    economy.buy_pantry_item("dressing", quantity=2)
    result = economy.sell_pantry_item("dressing")
    assert result.coins_delta == 5
    assert progress.coins == 95
    assert economy.pantry_quantity("dressing") == 1


def test_sell_more_than_stock_fails(economy, progress):
    economy.buy_pantry_item("dressing")
    with pytest.raises(InsufficientStock) as exc:
        economy.sell_pantry_item("dressing", quantity=2)
    assert (exc.value.required, exc.value.available) == (2, 1)
    assert economy.pantry_quantity("dressing") == 1
    assert progress.coins == 95


def test_buy_seeds(economy, progress):
    result = economy.buy_seeds("pumpkin", quantity=2)
    assert progress.coins == 50
    assert progress.seeds.quantity("pumpkin") == 3
    assert result.stock == 3


def test_sell_harvest(economy, progress):
    progress.harvested.add("carrot", 2)
    economy.sell_harvest("carrot", 2)
    assert progress.coins == 110
    assert progress.harvested.quantity("carrot") == 0
    with pytest.raises(InsufficientStock):
        economy.sell_harvest("carrot")


def test_coin_amounts_must_be_positive(economy, progress):
    with pytest.raises(ValueError):
        economy.add_coins(-5)
    with pytest.raises(ValueError):
        economy.spend_coins(-5)
    with pytest.raises(ValueError):
        economy.buy_pantry_item("dressing", quantity=0)
    assert progress.coins == 100


def test_spend_and_add_coins(economy, progress, recorded):
    economy.spend_coins(40)
    economy.add_coins(15)
    assert progress.coins == 75
    with pytest.raises(InsufficientFunds):
        economy.spend_coins(76)
    assert recorded.count(EventKind.COINS_CHANGED) == 2


def test_coins_never_negative(economy, progress):
    for _ in range(50):
        economy.try_buy_pantry_item("cheese")
        assert progress.coins >= 0
    assert progress.coins == 10
    assert economy.pantry_quantity("cheese") == 6
