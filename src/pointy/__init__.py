"""pointy - earn points for tasks, spend them on rewards."""

__version__ = "0.1.0"

from .models import Task, Reward, Ledger
from .storage import read_file, write_file, load_ledger
from .core import (
    add_task,
    add_reward,
    solve_task,
    delete_task,
    redeem_reward,
    delete_reward,
    clear_points,
    affordable_rewards,
)

__all__ = [
    "Task",
    "Reward",
    "Ledger",
    "read_file",
    "write_file",
    "load_ledger",
    "add_task",
    "add_reward",
    "solve_task",
    "delete_task",
    "redeem_reward",
    "delete_reward",
    "clear_points",
    "affordable_rewards",
]
