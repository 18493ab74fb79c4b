"""
Shared fixtures.
DATABASE_URL is pointed at a throwaway SQLite file before backend.api is imported.
"""

import os
import random
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="games-zone-test-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}")

import pytest

from backend.engine.clock import ManualScheduler


class ScriptedRandom(random.Random):
    """Random source whose choice() and randrange() follow a fixed script, then fall back to a seed."""

    def __init__(self, choices=None, ranges=None, seed=0):
        super().__init__(seed)
        self.choices = list(choices or [])
        self.ranges = list(ranges or [])

    def choice(self, seq):
        if self.choices:
            wanted = self.choices.pop(0)
            if wanted in seq:
                return wanted
        return super().choice(seq)

    def randrange(self, *args, **kwargs):
        if self.ranges:
            return self.ranges.pop(0)
        return super().randrange(*args, **kwargs)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)
