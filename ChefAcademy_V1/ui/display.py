from datetime import datetime
from typing import List, Optional

from ChefAcademy_V1.console_style import bold, green, progress_bar, red, yellow
from ChefAcademy_V1.core.game import GameSession
from ChefAcademy_V1.core.results import CookResult
from ChefAcademy_V1.domain.types import HealthStat, PlotState
from ChefAcademy_V1.rules.leveling import level_progress

_STATE_LABELS = {
    PlotState.EMPTY: "empty",
    PlotState.GROWING: "growing",
    PlotState.READY: green("ready!"),
    PlotState.NEEDS_WATER: red("needs water"),
}


def format_stars(stars: int, max_stars: int = 3) -> str:
    """Star rating as text, e.g. ``★★☆``."""
    stars = max(0, min(max_stars, stars))
    return "★" * stars + "☆" * (max_stars - stars)


def format_garden(session: GameSession, now: Optional[datetime] = None) -> List[str]:
    """One line per plot: vegetable, growth gauge and state."""
    lines = []
    for plot in session.progress.plots:
        state = session.plot_state(plot.id, now)
        if state == PlotState.EMPTY:
            lines.append(f"  #{plot.id + 1} ·  {_STATE_LABELS[state]}")
            continue
        vegetable = session.catalog.vegetable(plot.vegetable)
        ratio = session.growth_progress(plot.id, now)
        lines.append(
            f"  #{plot.id + 1} {vegetable.emoji} {vegetable.name:<12} "
            f"{progress_bar(ratio)} {ratio:4.0%}  {_STATE_LABELS[state]}"
        )
    return lines


def format_health(session: GameSession) -> List[str]:
    health = session.progress.health
    return [
        f"  {stat.value:<7}{progress_bar(health.get(stat) / 100, width=20)} {health.get(stat):3d}"
        for stat in HealthStat
    ]


def print_session(session: GameSession, now: Optional[datetime] = None) -> None:
    progress = session.progress
    print("\n" + bold("🌱 Pip's Kitchen Garden"))
    print("═" * 44)
    print(
        f"🪙 {progress.coins} coins   ⭐ level {progress.level} "
        f"{progress_bar(level_progress(progress.xp))} ({progress.xp} XP)"
    )
    print("\n" + bold("Garden"))
    for line in format_garden(session, now):
        print(line)

    print("\n" + bold("Basket"))
    harvested = ", ".join(f"{k} x{q}" for k, q in progress.harvested) or "nothing yet"
    seeds = ", ".join(f"{k} x{q}" for k, q in progress.seeds) or "no seeds"
    pantry = ", ".join(f"{k} x{q}" for k, q in progress.pantry) or "empty"
    print(f"  harvested: {harvested}")
    print(f"  seeds    : {seeds}")
    print(f"  pantry   : {pantry}")

    print("\n" + bold("Recipes"))
    cookable = {r.id for r in session.cookable_recipes()}
    for recipe_id in sorted(progress.unlocked_recipes):
        recipe = session.catalog.recipe(recipe_id)
        stars = format_stars(progress.recipe_stars.get(recipe_id, 0))
        mark = green("can cook") if recipe_id in cookable else ""
        print(f"  {stars} {recipe.title:<28} {mark}")

    print("\n" + bold("Body Buddy"))
    for line in format_health(session):
        print(line)
    print("═" * 44)


def print_cook_result(result: CookResult) -> None:
    print(
        f"\n🍳 {bold(result.recipe_id)} {format_stars(result.stars)} "
        f"+{result.coins_gained} coins, +{result.xp_gained} XP"
    )
    if result.leveled_up:
        print(yellow(f"🎉 Level up! You are now level {result.level}"))
    for recipe_id in result.unlocked_recipes:
        print(yellow(f"🔓 New recipe: {recipe_id}"))
