import logging
from typing import Callable, List, Optional

from ChefAcademy_V1.core.events import EventBus, GameEvent
from ChefAcademy_V1.core.rewards import credit_coins, grant_xp
from ChefAcademy_V1.domain.catalog import Catalog
from ChefAcademy_V1.domain.progress import PlayerProgress
from ChefAcademy_V1.domain.quests import Quest, generate_daily_quests
from ChefAcademy_V1.domain.types import EventKind

logger = logging.getLogger(__name__)


class QuestTracker:
    """
    Counts game events against the daily quests and pays each reward once.
    Quests live for the session only, they are not part of the saved record.
    """

    def __init__(
        self,
        progress: PlayerProgress,
        catalog: Catalog,
        events: EventBus,
        quests: Optional[List[Quest]] = None,
    ):
        self.progress = progress
        self.catalog = catalog
        self.events = events
        self.quests = quests if quests is not None else generate_daily_quests()
        self._unsubscribe: Optional[Callable[[], None]] = events.subscribe(self.on_event)

    def on_event(self, event: GameEvent) -> None:
        for quest in self.quests:
            if quest.event != event.kind or quest.is_completed:
                continue
            quest.current_count += 1
            if quest.is_completed:
                self._reward(quest)

    def _reward(self, quest: Quest) -> None:
        if quest.rewarded:
            return
        quest.rewarded = True
        credit_coins(self.progress, quest.reward_coins, self.events)
        grant_xp(self.progress, quest.reward_xp, self.catalog, self.events)
        logger.info("Quest completed: %s", quest.title)
        self.events.emit(
            EventKind.QUEST_COMPLETED,
            quest_id=quest.id,
            coins=quest.reward_coins,
            xp=quest.reward_xp,
        )

    def completed(self) -> List[Quest]:
        return [q for q in self.quests if q.is_completed]

    def new_day(self) -> None:
        self.quests = generate_daily_quests()

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
