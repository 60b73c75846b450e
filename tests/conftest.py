import pytest

from pointy.events import char, key
from pointy.machine import Machine
from pointy.models import Ledger
from pointy.storage import read_file


class Driver:
    """Feeds events to a Machine backed by a temporary store."""

    def __init__(self, path, ledger=None, state=None):
        self.path = path
        self.machine = Machine(ledger or Ledger(), path, state)

    @property
    def state(self):
        return self.machine.state

    @property
    def ledger(self):
        return self.machine.ledger

    def send(self, *events):
        result = True
        for event in events:
            result = self.machine.handle(event)
        return result

    def press(self, *keys):
        return self.send(*(key(k) for k in keys))

    def type(self, text):
        return self.send(*(char(c) for c in text))

    def stored(self):
        return read_file(self.path)


@pytest.fixture
def store(tmp_path):
    return str(tmp_path / "pointy" / "config.json")


@pytest.fixture
def driver(store):
    def make(ledger=None, state=None):
        return Driver(store, ledger, state)

    return make
