"""Data models for pointy."""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class Task:
    """A task that pays out `reward` points when solved."""

    title: str
    reward: int

    def __lt__(self, other: "Task") -> bool:
        return self.reward < other.reward


@dataclass
class Reward:
    """A reward that costs `price` points to take."""

    title: str
    price: int

    def __lt__(self, other: "Reward") -> bool:
        return self.price < other.price


@dataclass
class Ledger:
    """Everything that is persisted: tasks, rewards and the point balance."""

    tasks: List[Task] = field(default_factory=list)
    rewards: List[Reward] = field(default_factory=list)
    points: int = 0

    def snapshot(self) -> Tuple:
        """Immutable, hashable copy of the ledger contents."""
        return (
            tuple((t.title, t.reward) for t in self.tasks),
            tuple((r.title, r.price) for r in self.rewards),
            self.points,
        )

    def to_dict(self) -> dict:
        return {
            "tasks": [{"title": t.title, "reward": t.reward} for t in self.tasks],
            "rewards": [{"title": r.title, "price": r.price} for r in self.rewards],
            "points": self.points,
        }
