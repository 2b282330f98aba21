from typing import List

from pydantic import BaseModel, Field

from ChefAcademy_V1.domain.types import EventKind


class Quest(BaseModel):
    """A daily goal: count `target_count` events of kind `event`."""

    id: str
    title: str
    description: str
    icon: str = ""
    event: EventKind
    target_count: int = Field(ge=1)
    current_count: int = Field(default=0, ge=0)
    reward_coins: int = Field(default=0, ge=0)
    reward_xp: int = Field(default=0, ge=0)
    rewarded: bool = False

    @property
    def is_completed(self) -> bool:
        return self.current_count >= self.target_count

    @property
    def progress_percent(self) -> float:
        return min(1.0, self.current_count / self.target_count)


def generate_daily_quests() -> List[Quest]:
    """The three daily quests of a fresh day."""
    return [
        Quest(
            id="green-thumb",
            title="Green Thumb",
            description="Plant 2 seeds in your garden",
            icon="🌱",
            event=EventKind.PLANTED,
            target_count=2,
            reward_coins=20,
            reward_xp=15,
        ),
        Quest(
            id="harvest-time",
            title="Harvest Time",
            description="Harvest 1 vegetable",
            icon="🥕",
            event=EventKind.HARVESTED,
            target_count=1,
            reward_coins=15,
            reward_xp=10,
        ),
        Quest(
            id="junior-chef",
            title="Junior Chef",
            description="Complete 1 recipe",
            icon="👨‍🍳",
            event=EventKind.COOKED,
            target_count=1,
            reward_coins=30,
            reward_xp=25,
        ),
    ]
