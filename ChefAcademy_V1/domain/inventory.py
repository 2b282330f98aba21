from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from ChefAcademy_V1.domain.errors import GameError, InsufficientStock

ShortfallFactory = Callable[[str, int, int], GameError]


@dataclass
class StockLedger:
    """
    Quantity ledger keyed by catalog id (seeds, harvested vegetables, pantry).
      - quantities_by_id[id] -> count > 0 (zero entries are pruned)
    Quantities never go negative: a removal that cannot be covered raises
    and leaves the ledger untouched.
    """

    quantities_by_id: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, quantities: Optional[Mapping[str, int]] = None) -> "StockLedger":
        ledger = cls()
        for item_id, qty in (quantities or {}).items():
            ledger.add(item_id, qty)
        return ledger

    # -------- Lookups --------

    def quantity(self, item_id: str) -> int:
        """Quantity held for an id, 0 when absent."""
        return self.quantities_by_id.get(item_id, 0)

    def has(self, item_id: str, qty: int = 1) -> bool:
        return self.quantity(item_id) >= qty

    def shortfall(self, requirements: Mapping[str, int]) -> Dict[str, int]:
        """
        Missing quantity per id for a set of requirements ({} when covered).

        Example: ledger {"lettuce": 1}, requirements {"lettuce": 2, "tomato": 1}
        -> {"lettuce": 1, "tomato": 1}
        """
        missing = {}
        for item_id, qty in requirements.items():
            gap = qty - self.quantity(item_id)
            if gap > 0:
                missing[item_id] = gap
        return missing

    # -------- Mutations --------

    def add(self, item_id: str, qty: int = 1) -> None:
        qty = int(qty)
        if qty < 0:
            raise ValueError(f"Cannot add a negative quantity of {item_id}: {qty}")
        if qty == 0:
            return
        self.quantities_by_id[item_id] = self.quantity(item_id) + qty

    def remove(
        self,
        item_id: str,
        qty: int = 1,
        shortfall_error: ShortfallFactory = InsufficientStock,
    ) -> None:
        """
        Remove qty units. Raises `shortfall_error(item_id, qty, available)`
        when the stock cannot cover it.
        """
        qty = int(qty)
        if qty < 0:
            raise ValueError(f"Cannot remove a negative quantity of {item_id}: {qty}")
        available = self.quantity(item_id)
        if available < qty:
            raise shortfall_error(item_id, qty, available)
        remaining = available - qty
        if remaining == 0:
            self.quantities_by_id.pop(item_id, None)
        else:
            self.quantities_by_id[item_id] = remaining

    def remove_all(self, requirements: Mapping[str, int]) -> None:
        """All-or-nothing removal of several ids."""
        missing = self.shortfall(requirements)
        if missing:
            item_id, gap = next(iter(sorted(missing.items())))
            raise InsufficientStock(item_id, requirements[item_id], requirements[item_id] - gap)
        for item_id, qty in requirements.items():
            self.remove(item_id, qty)

    # -------- Views --------

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(sorted(self.quantities_by_id.items()))

    def __len__(self) -> int:
        return len(self.quantities_by_id)

    def snapshot(self) -> List[Tuple[str, int]]:
        """Sorted (id, quantity) pairs, the order used at the persistence boundary."""
        return list(self)

    def total(self) -> int:
        return sum(self.quantities_by_id.values())
