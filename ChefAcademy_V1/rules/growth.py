"""
Lazy growth evaluation of garden plots.

Growth is never driven by a timer: the live state of a plot is recomputed
from its timestamps each time it is read.  These functions are pure and
idempotent, so they can be called as often as the view layer wants.

Rules
-----
- effective growth = banked growth + seconds since the last watering
- for a vegetable with a water interval, the seconds since the last watering
  stop counting at the interval (growth pauses while the plot needs water)
- progress = clamp(effective growth / growth duration, 0, 1)
- progress 1 -> READY, interval exceeded -> NEEDS_WATER, otherwise GROWING
"""

from datetime import datetime

from ChefAcademy_V1.domain.catalog import VegetableType
from ChefAcademy_V1.domain.garden import GardenPlot
from ChefAcademy_V1.domain.types import PlotState


def seconds_between(start: datetime, end: datetime) -> float:
    """Elapsed seconds, never negative (a clock going backwards counts as 0)."""
    return max(0.0, (end - start).total_seconds())


def seconds_since_watering(plot: GardenPlot, now: datetime) -> float:
    reference = plot.last_watered_at or plot.planted_at
    if reference is None:
        return 0.0
    return seconds_between(reference, now)


def effective_growth_seconds(
    plot: GardenPlot, vegetable: VegetableType, now: datetime
) -> float:
    if plot.vegetable is None:
        return 0.0
    since = seconds_since_watering(plot, now)
    if vegetable.water_interval_seconds is not None:
        since = min(since, vegetable.water_interval_seconds)
    return plot.grown_seconds + since


def growth_progress(plot: GardenPlot, vegetable: VegetableType, now: datetime) -> float:
    """Progress from 0.0 (just planted) to 1.0 (ready to harvest)."""
    if plot.vegetable is None:
        return 0.0
    if plot.state == PlotState.READY:
        return 1.0
    grown = effective_growth_seconds(plot, vegetable, now)
    return max(0.0, min(1.0, grown / vegetable.growth_seconds))


def needs_water(plot: GardenPlot, vegetable: VegetableType, now: datetime) -> bool:
    interval = vegetable.water_interval_seconds
    if plot.vegetable is None or interval is None:
        return False
    return seconds_since_watering(plot, now) > interval


def evaluate_state(plot: GardenPlot, vegetable: VegetableType, now: datetime) -> PlotState:
    """Live state of a plot at `now`. A READY plot stays READY until harvested."""
    if plot.vegetable is None:
        return PlotState.EMPTY
    if plot.state == PlotState.READY:
        return PlotState.READY
    if growth_progress(plot, vegetable, now) >= 1.0:
        return PlotState.READY
    if needs_water(plot, vegetable, now):
        return PlotState.NEEDS_WATER
    return PlotState.GROWING


def seconds_until_ready(plot: GardenPlot, vegetable: VegetableType, now: datetime) -> float:
    """Remaining growing time, assuming the plot gets watered on time."""
    if plot.vegetable is None:
        return 0.0
    if evaluate_state(plot, vegetable, now) == PlotState.READY:
        return 0.0
    return max(0.0, vegetable.growth_seconds - effective_growth_seconds(plot, vegetable, now))
