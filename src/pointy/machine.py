"""The navigation state machine: one event in, ledger and screen updated."""

import logging
from dataclasses import replace
from typing import Optional

from . import core
from .events import Event, Key, KeyPress, Paste, Resize
from .models import Ledger
from .states import (
    CLEAR_POINTS,
    MAIN_ENTRIES,
    NEW_REWARD,
    NEW_TASK,
    SOLVE_TASK,
    STEP_AMOUNT,
    STEP_CONFIRM,
    STEP_TITLE,
    TAKE_REWARD,
    Main,
    NewReward,
    NewTask,
    SolveTask,
    State,
    TakeReward,
    Wizard,
)
from .storage import write_file

logger = logging.getLogger(__name__)

# Confirmation answers, compared after lower(): Latin and Cyrillic letters.
YES = frozenset({"y", "д"})
NO = frozenset({"n", "н"})


class Machine:
    """Holds the ledger and the current screen, and reacts to input.

    Every mutation is written to `path` before the handler returns; a
    failed write raises StoreWriteError and is not rolled back.
    """

    def __init__(self, ledger: Ledger, path: str, state: Optional[State] = None):
        self.ledger = ledger
        self.path = path
        self.state: State = state or Main()
        self.running = True
        self._handlers = {
            Main: self._on_main,
            NewTask: self._on_wizard,
            NewReward: self._on_wizard,
            SolveTask: self._on_solve_task,
            TakeReward: self._on_take_reward,
        }

    def handle(self, event: Event) -> bool:
        """Process one event. Returns False once the program should exit."""
        if not self.running:
            return False
        if isinstance(event, KeyPress) and event.is_interrupt:
            logger.debug("Interrupted in %s", type(self.state).__name__)
            self.running = False
        elif not isinstance(event, Resize):
            self._handlers[type(self.state)](event)
        return self.running

    def go(self, state: State) -> None:
        if type(state) is not type(self.state):
            logger.debug("%s -> %s", type(self.state).__name__, type(state).__name__)
        self.state = state

    def save(self, message: str, *args) -> None:
        write_file(self.path, self.ledger)
        logger.info(message + " (points=%d)", *args, self.ledger.points)

    # -------------------- main menu --------------------

    def _on_main(self, event: Event) -> None:
        if not isinstance(event, KeyPress):
            return
        selected = self.state.selected
        if event.key is Key.UP:
            self.state = Main(core.wrap_index(selected, -1, len(MAIN_ENTRIES)))
        elif event.key is Key.DOWN:
            self.state = Main(core.wrap_index(selected, +1, len(MAIN_ENTRIES)))
        elif event.key is Key.ESC:
            self.running = False
        elif event.key is Key.ENTER:
            if selected == NEW_TASK:
                self.go(NewTask())
            elif selected == NEW_REWARD:
                self.go(NewReward())
            elif selected == SOLVE_TASK:
                self.go(SolveTask())
            elif selected == TAKE_REWARD:
                core.sort_rewards(self.ledger)
                self.go(TakeReward())
            elif selected == CLEAR_POINTS:
                core.clear_points(self.ledger)
                self.save("Cleared points")

    # -------------------- new task / new reward --------------------

    def _on_wizard(self, event: Event) -> None:
        state: Wizard = self.state
        if isinstance(event, KeyPress) and event.key is Key.ESC:
            self.go(Main())
        elif state.step == STEP_TITLE:
            self._edit_title(state, event)
        elif state.step == STEP_AMOUNT:
            self._edit_amount(state, event)
        elif state.step == STEP_CONFIRM and isinstance(event, KeyPress):
            answer = event.char.lower() if event.key is Key.CHAR and not event.ctrl else ""
            if event.key is Key.ENTER or answer in YES:
                self._commit(state)
                self.go(Main())
            elif answer in NO:
                self.go(Main())

    def _edit_title(self, state: Wizard, event: Event) -> None:
        if isinstance(event, Paste):
            self.state = replace(state, title=state.title + event.text)
        elif event.key is Key.ENTER:
            if state.title:
                self.state = replace(state, step=STEP_AMOUNT)
        elif event.key is Key.BACKSPACE:
            self.state = replace(state, title=state.title[:-1])
        elif event.key is Key.CHAR and not event.ctrl:
            self.state = replace(state, title=state.title + event.char)

    def _edit_amount(self, state: Wizard, event: Event) -> None:
        field = "reward" if isinstance(state, NewTask) else "price"
        if isinstance(event, Paste):
            self.state = replace(state, **{field: state.amount + core.only_digits(event.text)})
        elif event.key is Key.ENTER:
            if state.amount:
                self.state = replace(state, step=STEP_CONFIRM)
        elif event.key is Key.BACKSPACE:
            self.state = replace(state, **{field: state.amount[:-1]})
        elif event.key is Key.CHAR and not event.ctrl and event.char in core.DIGITS:
            self.state = replace(state, **{field: state.amount + event.char})

    def _commit(self, state: Wizard) -> None:
        if isinstance(state, NewTask):
            task = core.add_task(self.ledger, state.title, state.reward)
            self.save("Added task %r worth %d", task.title, task.reward)
        else:
            reward = core.add_reward(self.ledger, state.title, state.price)
            self.save("Added reward %r priced %d", reward.title, reward.price)

    # -------------------- solve task --------------------

    def _on_solve_task(self, event: Event) -> None:
        if not isinstance(event, KeyPress):
            return
        selected = self.state.selected
        size = len(self.ledger.tasks)
        if event.key is Key.UP:
            self.state = SolveTask(core.wrap_index(selected, -1, size))
        elif event.key is Key.DOWN:
            self.state = SolveTask(core.wrap_index(selected, +1, size))
        elif event.key is Key.ENTER:
            task = core.solve_task(self.ledger, selected)
            if task is not None:
                self.save("Solved task %r for %d", task.title, task.reward)
            self.go(Main())
        elif event.key is Key.DELETE:
            task = core.delete_task(self.ledger, selected)
            if task is not None:
                self.save("Deleted task %r", task.title)
                self.state = SolveTask(core.clamp_index(selected, len(self.ledger.tasks)))
        elif event.key is Key.ESC:
            self.go(Main())

    # -------------------- take reward --------------------

    def _on_take_reward(self, event: Event) -> None:
        if not isinstance(event, KeyPress):
            return
        selected = self.state.selected
        size = len(core.affordable_rewards(self.ledger))
        if event.key is Key.UP:
            self.state = TakeReward(core.wrap_index(selected, -1, size))
        elif event.key is Key.DOWN:
            self.state = TakeReward(core.wrap_index(selected, +1, size))
        elif event.key is Key.ENTER:
            reward = core.redeem_reward(self.ledger, selected)
            if reward is not None:
                self.save("Took reward %r for %d", reward.title, reward.price)
            self.go(Main())
        elif event.key is Key.DELETE:
            reward = core.delete_reward(self.ledger, selected)
            if reward is not None:
                self.save("Deleted reward %r", reward.title)
                size = len(core.affordable_rewards(self.ledger))
                self.state = TakeReward(core.clamp_index(selected, size))
        elif event.key is Key.ESC:
            self.go(Main())
