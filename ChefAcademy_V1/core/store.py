"""
Progression store: the persisted form of PlayerProgress.

The record is one JSON document per player.  Inventories and plots are
stored as lists of small id-keyed entries, so adding a vegetable or a recipe
to the catalog never needs a migration: entries are looked up by id when
loading and unknown ids are dropped.

Loading is tolerant: a missing field takes its new-player default, and an
undecodable document falls back to a fresh player (the problem is logged,
not raised).  Saving is deterministic: two saves without a mutation in
between only differ by ``last_saved``.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError

from ChefAcademy_V1.core.rewards import unlock_level_recipes
from ChefAcademy_V1.data import get_CATALOG, get_SETTINGS
from ChefAcademy_V1.data import game_params as params
from ChefAcademy_V1.domain.catalog import Catalog
from ChefAcademy_V1.domain.errors import PersistenceCorrupt, PersistenceWriteError
from ChefAcademy_V1.domain.garden import GardenPlot, create_starter_plots
from ChefAcademy_V1.domain.inventory import StockLedger
from ChefAcademy_V1.domain.progress import GameSettings, PlayerProgress
from ChefAcademy_V1.domain.types import HealthStat, PlotState
from ChefAcademy_V1.rules.leveling import level_for_xp
from ChefAcademy_V1.utils import clamp

logger = logging.getLogger(__name__)


# ==========================
# Persisted record
# ==========================


class SeedData(BaseModel):
    vegetable: str
    quantity: int = 0


class HarvestedData(BaseModel):
    vegetable: str
    quantity: int = 0


class PantryData(BaseModel):
    item: str
    quantity: int = 0


class PlotData(BaseModel):
    id: int
    state: PlotState = PlotState.EMPTY
    vegetable: Optional[str] = None
    planted_at: Optional[datetime] = None
    last_watered_at: Optional[datetime] = None
    grown_seconds: float = 0.0


class PlayerRecord(BaseModel):
    """
    Versioned snapshot of a player. None means "absent from the snapshot":
    the new-player default is used for that field when loading.
    """

    model_config = ConfigDict(extra="ignore")

    schema_version: int = params.SCHEMA_VERSION
    coins: Optional[int] = None
    xp: Optional[int] = None
    level: Optional[int] = None
    seeds: Optional[List[SeedData]] = None
    harvested: Optional[List[HarvestedData]] = None
    plots: Optional[List[PlotData]] = None
    pantry: Optional[List[PantryData]] = None
    unlocked_recipes: Optional[List[str]] = None
    recipe_stars: Optional[Dict[str, int]] = None
    health: Optional[Dict[HealthStat, int]] = None
    completed_badges: Optional[List[str]] = None
    last_saved: Optional[datetime] = None


# ==========================
# Storage backends
# ==========================


class Storage(Protocol):
    def read(self) -> Optional[bytes]: ...

    def write(self, data: bytes) -> None: ...


class MemoryStorage:
    """In-memory backend (tests, previews)."""

    def __init__(self, data: Optional[bytes] = None):
        self.data = data
        self.writes = 0

    def read(self) -> Optional[bytes]:
        return self.data

    def write(self, data: bytes) -> None:
        self.data = bytes(data)
        self.writes += 1


class JsonFileStorage:
    """One JSON file per player, replaced atomically on every write."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def read(self) -> Optional[bytes]:
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def write(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


# ==========================
# Conversions
# ==========================


def progress_to_record(progress: PlayerProgress, last_saved: Optional[datetime] = None) -> PlayerRecord:
    """Snapshot with every collection sorted, so the output is deterministic."""
    return PlayerRecord(
        coins=progress.coins,
        xp=progress.xp,
        level=progress.level,
        seeds=[SeedData(vegetable=k, quantity=q) for k, q in progress.seeds.snapshot()],
        harvested=[
            HarvestedData(vegetable=k, quantity=q) for k, q in progress.harvested.snapshot()
        ],
        plots=[
            PlotData(
                id=p.id,
                state=p.state,
                vegetable=p.vegetable,
                planted_at=p.planted_at,
                last_watered_at=p.last_watered_at,
                grown_seconds=p.grown_seconds,
            )
            for p in sorted(progress.plots, key=lambda p: p.id)
        ],
        pantry=[PantryData(item=k, quantity=q) for k, q in progress.pantry.snapshot()],
        unlocked_recipes=sorted(progress.unlocked_recipes),
        recipe_stars=dict(sorted(progress.recipe_stars.items())),
        health={stat: progress.health.get(stat) for stat in HealthStat},
        completed_badges=sorted(progress.completed_badges),
        last_saved=last_saved if last_saved is not None else progress.last_saved,
    )


def encode_record(record: PlayerRecord) -> bytes:
    payload = record.model_dump(mode="json")
    return json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False).encode("utf-8")


def _known_ledger(
    entries: Iterable[tuple], known: Iterable[str], label: str
) -> StockLedger:
    known = set(known)
    ledger = StockLedger()
    for item_id, qty in entries:
        if item_id not in known:
            logger.warning("Dropping unknown %s from saved data: %s", label, item_id)
            continue
        ledger.add(item_id, max(0, qty))
    return ledger


def _restore_plots(records: List[PlotData], count: int, catalog: Catalog) -> List[GardenPlot]:
    plots = create_starter_plots(count)
    for data in records:
        if not 0 <= data.id < count:
            logger.warning("Dropping plot %d beyond the garden size (%d)", data.id, count)
            continue
        plot = plots[data.id]
        if data.vegetable is None or data.state == PlotState.EMPTY:
            continue
        if data.vegetable not in catalog.vegetables:
            logger.warning("Clearing plot %d: unknown vegetable %s", data.id, data.vegetable)
            continue
        if data.planted_at is None:
            logger.warning("Clearing plot %d: no planting date", data.id)
            continue
        plot.vegetable = data.vegetable
        plot.state = data.state
        plot.planted_at = data.planted_at
        plot.last_watered_at = data.last_watered_at or data.planted_at
        plot.grown_seconds = max(0.0, data.grown_seconds)
    return plots


def record_to_progress(
    record: PlayerRecord, catalog: Catalog, settings: Optional[GameSettings] = None
) -> PlayerProgress:
    """Rebuild the progress, defaulting absent fields and enforcing invariants."""
    settings = settings or GameSettings()
    progress = PlayerProgress.new_player(settings)

    if record.coins is not None:
        progress.coins = max(0, record.coins)
    if record.xp is not None:
        progress.xp = max(0, record.xp)
    stored_level = record.level if record.level is not None else params.STARTING_LEVEL
    progress.level = clamp(max(stored_level, level_for_xp(progress.xp)), 1, params.MAX_LEVEL)

    if record.seeds is not None:
        progress.seeds = _known_ledger(
            ((s.vegetable, s.quantity) for s in record.seeds), catalog.vegetables, "seed"
        )
    if record.harvested is not None:
        progress.harvested = _known_ledger(
            ((h.vegetable, h.quantity) for h in record.harvested), catalog.vegetables, "vegetable"
        )
    if record.pantry is not None:
        progress.pantry = _known_ledger(
            ((p.item, p.quantity) for p in record.pantry), catalog.pantry_items, "pantry item"
        )
    if record.plots is not None:
        progress.plots = _restore_plots(record.plots, settings.plot_count, catalog)

    if record.unlocked_recipes is not None:
        unlocked = set()
        for recipe_id in record.unlocked_recipes:
            if recipe_id in catalog.recipes:
                unlocked.add(recipe_id)
            else:
                logger.warning("Dropping unknown recipe from saved data: %s", recipe_id)
        progress.unlocked_recipes = unlocked | set(settings.starter_recipes)

    # recipes of every level already reached
    unlock_level_recipes(progress, catalog)

    if record.recipe_stars is not None:
        progress.recipe_stars = {
            recipe_id: clamp(stars, 0, params.MAX_STARS)
            for recipe_id, stars in record.recipe_stars.items()
            if recipe_id in progress.unlocked_recipes
        }

    for stat, value in (record.health or {}).items():
        progress.health.set(stat, value)

    if record.completed_badges is not None:
        progress.completed_badges = {b for b in record.completed_badges if b in catalog.badges}

    progress.last_saved = record.last_saved
    return progress


# ==========================
# Store
# ==========================


class ProgressionStore:
    """
    Sole writer of the persisted snapshot.

    Load and save run under a lock so the progress is never serialised while
    another save of the same store is in flight.
    """

    def __init__(
        self,
        storage: Storage,
        catalog: Optional[Catalog] = None,
        settings: Optional[GameSettings] = None,
    ):
        self.storage = storage
        self.catalog = catalog if catalog is not None else get_CATALOG()
        self.settings = settings if settings is not None else get_SETTINGS()
        self.last_load_error: Optional[PersistenceCorrupt] = None
        self._lock = threading.Lock()

    def new_player(self) -> PlayerProgress:
        return PlayerProgress.new_player(self.settings)

    def load(self) -> PlayerProgress:
        """Saved progress, or a new player when nothing usable is stored."""
        with self._lock:
            self.last_load_error = None
            try:
                raw = self.storage.read()
            except OSError as e:
                return self._fallback(PersistenceCorrupt(f"Cannot read saved progress: {e}"))

            if raw is None or not raw.strip():
                logger.info("No saved progress, starting a new player")
                return self.new_player()

            try:
                record = PlayerRecord.model_validate_json(raw)
            except ValidationError as e:
                return self._fallback(PersistenceCorrupt(f"Saved progress is unreadable: {e}"))

            if record.schema_version > params.SCHEMA_VERSION:
                logger.warning(
                    "Saved progress uses schema %d (newer than %d), reading known fields only",
                    record.schema_version,
                    params.SCHEMA_VERSION,
                )
            progress = record_to_progress(record, self.catalog, self.settings)
            logger.info("Loaded progress: level %d, %d coins", progress.level, progress.coins)
            return progress

    def _fallback(self, error: PersistenceCorrupt) -> PlayerProgress:
        logger.error("%s; falling back to a new player", error)
        self.last_load_error = error
        return self.new_player()

    def save(self, progress: PlayerProgress, now: Optional[datetime] = None) -> bytes:
        """
        Write the full snapshot and stamp ``last_saved``.

        Raises PersistenceWriteError; the in-memory progress is unchanged then
        and the save can simply be retried.
        """
        now = now if now is not None else datetime.now(timezone.utc)
        with self._lock:
            data = encode_record(progress_to_record(progress, last_saved=now))
            try:
                self.storage.write(data)
            except OSError as e:
                logger.error("Saving progress failed: %s", e)
                raise PersistenceWriteError(f"Cannot write saved progress: {e}") from e
            progress.last_saved = now
        logger.info("Progress saved (%d bytes)", len(data))
        return data

    def reset(self, now: Optional[datetime] = None) -> PlayerProgress:
        """Overwrite the saved progress with a new player and return it."""
        progress = self.new_player()
        self.save(progress, now)
        logger.info("Progress reset")
        return progress
