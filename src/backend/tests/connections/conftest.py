import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timedelta, timezone

import pytest

from common.connections.store import ConnectionStore
from common.providers.registry import ProviderRegistry


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry.default()


@pytest.fixture
def store(registry, clock) -> ConnectionStore:
    return ConnectionStore(registry, clock=clock)


@pytest.fixture
def make_store(registry, clock):
    def _make(*, snapshot_path=None, autosave: bool = False) -> ConnectionStore:
        return ConnectionStore(registry, snapshot_path=snapshot_path, autosave=autosave, clock=clock)

    return _make
