"""Navigation states, one immutable class per screen.

Transitions build a new instance (dataclasses.replace or a constructor
call); nothing carries over between screens.
"""

from dataclasses import dataclass
from typing import Union

MAIN_ENTRIES = (
    "Add new task",
    "Add new reward",
    "Solve task",
    "Take reward",
    "Clear points",
)

NEW_TASK, NEW_REWARD, SOLVE_TASK, TAKE_REWARD, CLEAR_POINTS = range(len(MAIN_ENTRIES))

# Wizard steps
STEP_TITLE, STEP_AMOUNT, STEP_CONFIRM = 0, 1, 2


@dataclass(frozen=True)
class Main:
    selected: int = 0


@dataclass(frozen=True)
class NewTask:
    step: int = STEP_TITLE
    title: str = ""
    reward: str = ""

    @property
    def amount(self) -> str:
        return self.reward


@dataclass(frozen=True)
class NewReward:
    step: int = STEP_TITLE
    title: str = ""
    price: str = ""

    @property
    def amount(self) -> str:
        return self.price


@dataclass(frozen=True)
class SolveTask:
    selected: int = 0


@dataclass(frozen=True)
class TakeReward:
    selected: int = 0


State = Union[Main, NewTask, NewReward, SolveTask, TakeReward]
Wizard = Union[NewTask, NewReward]
