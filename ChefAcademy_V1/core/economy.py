"""
Coins and shop: pantry purchases, seed purchases, selling back.

Every intent validates completely before touching the progress, so a failed
purchase leaves coins and stock exactly as they were.
"""

import logging
from typing import Optional

from ChefAcademy_V1.core.events import EventBus
from ChefAcademy_V1.core.results import PurchaseResult
from ChefAcademy_V1.core.rewards import credit_coins
from ChefAcademy_V1.domain.catalog import Catalog
from ChefAcademy_V1.domain.errors import InsufficientFunds
from ChefAcademy_V1.domain.inventory import StockLedger
from ChefAcademy_V1.domain.progress import PlayerProgress
from ChefAcademy_V1.domain.types import EventKind

logger = logging.getLogger(__name__)


def _check_quantity(quantity: int) -> int:
    quantity = int(quantity)
    if quantity < 1:
        raise ValueError(f"Quantity must be at least 1, got {quantity}")
    return quantity


class EconomyEngine:
    def __init__(
        self,
        progress: PlayerProgress,
        catalog: Catalog,
        events: Optional[EventBus] = None,
    ):
        self.progress = progress
        self.catalog = catalog
        self.events = events if events is not None else EventBus()

    # -------- Coins --------

    def can_afford(self, amount: int) -> bool:
        return self.progress.coins >= amount

    def add_coins(self, amount: int) -> int:
        credit_coins(self.progress, amount, self.events)
        return self.progress.coins

    def spend_coins(self, amount: int) -> int:
        amount = int(amount)
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if not self.can_afford(amount):
            raise InsufficientFunds(amount, self.progress.coins)
        if amount:
            self.progress.coins -= amount
            self.events.emit(EventKind.COINS_CHANGED, delta=-amount, coins=self.progress.coins)
        return self.progress.coins

    # -------- Pantry --------

    def pantry_quantity(self, item_id: str) -> int:
        return self.progress.pantry.quantity(item_id)

    def buy_pantry_item(self, item_id: str, quantity: int = 1) -> bool:
        """Debit price x quantity and stock the item. Raises InsufficientFunds."""
        self._buy(self.progress.pantry, item_id, self.catalog.pantry_item(item_id).price, quantity)
        return True

    def try_buy_pantry_item(self, item_id: str, quantity: int = 1) -> bool:
        """Same as buy_pantry_item, but reports a failed payment as False."""
        try:
            return self.buy_pantry_item(item_id, quantity)
        except InsufficientFunds as e:
            logger.info("Purchase of %s refused: %s", item_id, e)
            return False

    def sell_pantry_item(self, item_id: str, quantity: int = 1) -> PurchaseResult:
        """Refund path: credit price x quantity. Raises InsufficientStock."""
        price = self.catalog.pantry_item(item_id).price
        return self._sell(self.progress.pantry, item_id, price, quantity)

    # -------- Seeds & harvest --------

    def buy_seeds(self, vegetable_id: str, quantity: int = 1) -> PurchaseResult:
        cost = self.catalog.vegetable(vegetable_id).seed_cost
        return self._buy(self.progress.seeds, vegetable_id, cost, quantity)

    def sell_harvest(self, vegetable_id: str, quantity: int = 1) -> PurchaseResult:
        price = self.catalog.vegetable(vegetable_id).sell_price
        return self._sell(self.progress.harvested, vegetable_id, price, quantity)

    # -------- Internals --------

    def _buy(self, ledger: StockLedger, item_id: str, unit_price: int, quantity: int) -> PurchaseResult:
        quantity = _check_quantity(quantity)
        total = unit_price * quantity
        self.spend_coins(total)
        ledger.add(item_id, quantity)
        logger.debug("Bought %d x %s for %d coins", quantity, item_id, total)
        self.events.emit(EventKind.PURCHASED, item_id=item_id, quantity=quantity, coins=-total)
        return PurchaseResult(
            item_id=item_id,
            quantity=quantity,
            coins_delta=-total,
            coins=self.progress.coins,
            stock=ledger.quantity(item_id),
        )

    def _sell(self, ledger: StockLedger, item_id: str, unit_price: int, quantity: int) -> PurchaseResult:
        quantity = _check_quantity(quantity)
        ledger.remove(item_id, quantity)
        total = unit_price * quantity
        credit_coins(self.progress, total, self.events)
        logger.debug("Sold %d x %s for %d coins", quantity, item_id, total)
        self.events.emit(EventKind.SOLD, item_id=item_id, quantity=quantity, coins=total)
        return PurchaseResult(
            item_id=item_id,
            quantity=quantity,
            coins_delta=total,
            coins=self.progress.coins,
            stock=ledger.quantity(item_id),
        )
