import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ChefAcademy_V1.core.game import GameSession
from ChefAcademy_V1.core.store import JsonFileStorage, ProgressionStore
from ChefAcademy_V1.domain.errors import GameError
from ChefAcademy_V1.ui.display import print_cook_result, print_session

SAVE_PATH = Path("chefacademy_save.json")


def run():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    session = GameSession(ProgressionStore(JsonFileStorage(SAVE_PATH)))
    start = datetime.now(timezone.utc)

    # GROW
    session.reset(start)
    session.buy_seeds("cucumber")
    session.buy_seeds("pumpkin")
    for plot_id, vegetable in enumerate(["lettuce", "tomato", "cucumber", "pumpkin"]):
        session.plant(plot_id, vegetable, now=start)
    print_session(session, start + timedelta(seconds=30))

    later = start + timedelta(seconds=95)
    session.tick(later)
    session.water(3, now=later)
    for plot_id in range(3):
        result = session.harvest(plot_id, now=later)
        print(f"🧺 {result.quantity} x {result.vegetable} (+{result.xp_gained} XP)")

    # BUY
    for item in ("oliveOil", "vinegar", "salt"):
        session.buy_pantry_item(item)

    # COOK -> FEED
    try:
        print_cook_result(session.cook("garden-salad", score=72))
    except GameError as e:
        print(f"❌ {e}")

    print_session(session, later)
    session.save()


if __name__ == "__main__":
    run()
