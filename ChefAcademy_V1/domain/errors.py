"""
Typed failures raised by the engines.

Every engine error is recoverable: the operation that raised it left the
player's progress untouched, and the view layer decides how to tell the
player (toast, alert, shop dialog...).
"""

from typing import Optional


class GameError(Exception):
    """Base class of every failure the progression engine reports."""


class InvalidState(GameError):
    """Operation attempted from the wrong plot or recipe state."""

    def __init__(self, message: str, plot_id: Optional[int] = None, state=None):
        super().__init__(message)
        self.plot_id = plot_id
        self.state = state


class _Shortfall(GameError):
    def __init__(self, message: str, item_id: str, required: int, available: int):
        super().__init__(message)
        self.item_id = item_id
        self.required = required
        self.available = available


class InsufficientFunds(GameError):
    def __init__(self, price: int, coins: int):
        super().__init__(f"Not enough coins: {price} needed, {coins} available")
        self.price = price
        self.coins = coins


class InsufficientSeeds(_Shortfall):
    def __init__(self, item_id: str, required: int = 1, available: int = 0):
        super().__init__(
            f"No {item_id} seeds left ({available}/{required})",
            item_id,
            required,
            available,
        )


class InsufficientStock(_Shortfall):
    def __init__(self, item_id: str, required: int, available: int):
        super().__init__(
            f"Not enough {item_id} in stock ({available}/{required})",
            item_id,
            required,
            available,
        )


class RecipeNotCookable(GameError):
    def __init__(self, recipe_id: str, missing: Optional[dict] = None):
        self.recipe_id = recipe_id
        self.missing = dict(missing or {})
        detail = ", ".join(f"{k} x{v}" for k, v in sorted(self.missing.items()))
        super().__init__(f"Cannot cook {recipe_id}: missing {detail or 'ingredients'}")


class RecipeLocked(GameError):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe {recipe_id} is still locked")
        self.recipe_id = recipe_id


class UnknownCatalogItem(GameError, KeyError):
    def __init__(self, kind: str, item_id: str):
        super().__init__(f"Unknown {kind}: {item_id}")
        self.kind = kind
        self.item_id = item_id

    def __str__(self) -> str:
        return self.args[0]


class PersistenceCorrupt(GameError):
    """The persisted snapshot cannot be decoded; load falls back to defaults."""


class PersistenceWriteError(GameError):
    """Writing the snapshot failed; in-memory progress is kept."""
