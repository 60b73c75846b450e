"""Ledger operations and selection helpers (pure functions, no I/O)."""

import string
from typing import List, Optional

from .errors import InvalidAmountError
from .models import Ledger, Reward, Task

DIGITS = frozenset(string.digits)


def parse_amount(text: str) -> int:
    """Parse a point amount typed into a numeric buffer.

    Input is restricted to ASCII digits as it is typed, so a failure here
    means a broken buffer and is raised rather than defaulted.
    """
    if not text or not all(c in DIGITS for c in text):
        raise InvalidAmountError(f"not a point amount: {text!r}")
    return int(text)


def only_digits(text: str) -> str:
    return "".join(c for c in text if c in DIGITS)


def wrap_index(index: int, delta: int, size: int) -> int:
    """Move `index` by `delta` within `size` slots, wrapping at both ends.

    With nothing to select the index is returned unchanged.
    """
    if size <= 0:
        return index
    return (index + delta) % size


def clamp_index(index: int, size: int) -> int:
    """Pull `index` back inside a list that may have shrunk."""
    if size <= 0:
        return 0
    return min(max(index, 0), size - 1)


def add_task(ledger: Ledger, title: str, reward: str) -> Task:
    task = Task(title=title, reward=parse_amount(reward))
    ledger.tasks.append(task)
    return task


def add_reward(ledger: Ledger, title: str, price: str) -> Reward:
    reward = Reward(title=title, price=parse_amount(price))
    ledger.rewards.append(reward)
    return reward


def solve_task(ledger: Ledger, index: int) -> Optional[Task]:
    """Remove the task at `index` and collect its reward."""
    if not ledger.tasks:
        return None
    task = ledger.tasks.pop(clamp_index(index, len(ledger.tasks)))
    ledger.points += task.reward
    return task


def delete_task(ledger: Ledger, index: int) -> Optional[Task]:
    if not ledger.tasks:
        return None
    return ledger.tasks.pop(clamp_index(index, len(ledger.tasks)))


def sort_rewards(ledger: Ledger) -> None:
    """Order rewards by price, cheapest first (stable for equal prices)."""
    ledger.rewards.sort(key=lambda r: r.price)


def affordable_rewards(ledger: Ledger) -> List[Reward]:
    """Price-sorted rewards the current balance can pay for.

    Sorts the ledger's rewards in place, which makes the affordable ones a
    prefix of the list: index i here is index i in ledger.rewards.
    """
    sort_rewards(ledger)
    return [r for r in ledger.rewards if r.price <= ledger.points]


def redeem_reward(ledger: Ledger, index: int) -> Optional[Reward]:
    """Take the `index`-th affordable reward and pay its price."""
    affordable = affordable_rewards(ledger)
    if not affordable:
        return None
    reward = ledger.rewards.pop(clamp_index(index, len(affordable)))
    ledger.points -= reward.price
    return reward


def delete_reward(ledger: Ledger, index: int) -> Optional[Reward]:
    """Drop the `index`-th affordable reward without paying for it."""
    affordable = affordable_rewards(ledger)
    if not affordable:
        return None
    return ledger.rewards.pop(clamp_index(index, len(affordable)))


def clear_points(ledger: Ledger) -> None:
    ledger.points = 0
