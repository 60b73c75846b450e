"""File I/O for the pointy ledger."""

import json
import logging
import os
import tempfile
from typing import Any, List

from .errors import CorruptStoreError, StoreWriteError
from .models import Ledger, Reward, Task

logger = logging.getLogger(__name__)


def _amount(entry: Any, key: str, path: str) -> int:
    value = entry.get(key)
    # bool is an int subclass; true/false are not amounts
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CorruptStoreError(f"{key!r} must be a non-negative integer, got {value!r}", path)
    return value


def _entries(data: dict, key: str, path: str) -> List[dict]:
    entries = data.get(key, [])
    if not isinstance(entries, list):
        raise CorruptStoreError(f"{key!r} must be a list", path)
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("title"), str):
            raise CorruptStoreError(f"malformed entry in {key!r}: {entry!r}", path)
    return entries


def parse_ledger(data: Any, path: str = "") -> Ledger:
    """Build a Ledger from decoded JSON. Unknown keys are ignored."""
    if not isinstance(data, dict):
        raise CorruptStoreError("top level must be an object", path)
    tasks = [
        Task(title=e["title"], reward=_amount(e, "reward", path))
        for e in _entries(data, "tasks", path)
    ]
    rewards = [
        Reward(title=e["title"], price=_amount(e, "price", path))
        for e in _entries(data, "rewards", path)
    ]
    points = _amount(data, "points", path) if "points" in data else 0
    return Ledger(tasks=tasks, rewards=rewards, points=points)


def read_file(path: str) -> Ledger:
    """Load the ledger stored at `path`.

    Raises FileNotFoundError if there is no store yet and
    CorruptStoreError if the file is not a valid ledger.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as exc:
            raise CorruptStoreError(f"invalid JSON: {exc}", path) from exc
    return parse_ledger(data, path)


def load_ledger(path: str) -> Ledger:
    """Startup load: a missing or corrupt store yields an empty ledger."""
    try:
        ledger = read_file(path)
    except FileNotFoundError:
        logger.info("No store at %s, starting empty", path)
        return Ledger()
    except CorruptStoreError as exc:
        logger.warning("Ignoring corrupt store %s: %s", path, exc.message)
        return Ledger()
    logger.info(
        "Loaded %d tasks, %d rewards, %d points from %s",
        len(ledger.tasks), len(ledger.rewards), ledger.points, path,
    )
    return ledger


def write_file(path: str, ledger: Ledger) -> None:
    """Replace the store with the full ledger in one atomic step."""
    directory = os.path.dirname(os.path.abspath(path))
    tmp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        payload = json.dumps(ledger.to_dict(), ensure_ascii=False, indent=2)
        fd, tmp_path = tempfile.mkstemp(prefix=".pointy-", suffix=".tmp", dir=directory)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    except (OSError, TypeError, ValueError) as exc:
        raise StoreWriteError(f"could not save ledger: {exc}", path) from exc
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
