from ChefAcademy_V1.domain.catalog import VegetableType
from ChefAcademy_V1.domain.garden import GardenPlot
from ChefAcademy_V1.domain.types import PlotState
from ChefAcademy_V1.rules import growth
from ChefAcademy_V1.rules.leveling import level_for_xp, xp_for_level
from ChefAcademy_V1.rules.scoring import stars_for_score
from tests.conftest import at

TOMATO = VegetableType(id="tomato", name="Tomato", growth_seconds=90)
PEPPER = VegetableType(id="pepper", name="Pepper", growth_seconds=120, water_interval_seconds=80)


def _planted(vegetable: VegetableType) -> GardenPlot:
    plot = GardenPlot(id=0)
    plot.plant(vegetable.id, at(0))
    return plot


def test_level_curve_is_monotonic():
    levels = [level_for_xp(xp) for xp in range(0, 5000, 7)]
    assert levels == sorted(levels)
    assert levels[0] == 1


def test_level_thresholds_round_trip():
    for level in range(1, 20):
        assert level_for_xp(xp_for_level(level)) == level
        assert level_for_xp(xp_for_level(level + 1) - 1) == level


def test_level_is_capped():
    assert level_for_xp(10**9) == 99
    assert level_for_xp(-10) == 1


def test_stars_follow_thresholds():
    thresholds = (0, 60, 85)
    assert [stars_for_score(s, thresholds) for s in (0, 59, 60, 84, 85, 100)] == [1, 1, 2, 2, 3, 3]
    assert stars_for_score(5, (10, 65, 90)) == 0


def test_growth_is_pure():
    plot = _planted(TOMATO)
    first = growth.growth_progress(plot, TOMATO, at(45))
    assert growth.growth_progress(plot, TOMATO, at(45)) == first == 0.5
    assert plot.state == PlotState.GROWING


def test_growth_clamps_clock_skew():
    plot = _planted(TOMATO)
    assert growth.growth_progress(plot, TOMATO, at(-30)) == 0.0
    assert growth.growth_progress(plot, TOMATO, at(900)) == 1.0


def test_vegetable_without_interval_never_needs_water():
    plot = _planted(TOMATO)
    assert not growth.needs_water(plot, TOMATO, at(10_000))


def test_ready_wins_over_needs_water():
    """A pepper watered at 80 s reaches 120 s of growth before drying out again."""
    plot = _planted(PEPPER)
    plot.grown_seconds = 80
    plot.last_watered_at = at(80)
    assert growth.evaluate_state(plot, PEPPER, at(120)) == PlotState.READY
    assert growth.evaluate_state(plot, PEPPER, at(500)) == PlotState.READY


def test_seconds_until_ready():
    plot = _planted(TOMATO)
    assert growth.seconds_until_ready(plot, TOMATO, at(30)) == 60
    assert growth.seconds_until_ready(plot, TOMATO, at(95)) == 0
    assert growth.seconds_until_ready(GardenPlot(id=1), TOMATO, at(0)) == 0
