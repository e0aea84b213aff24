import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import api...` work when running this folder alone.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from common.connections.store import ConnectionStore
from common.providers.registry import ProviderRegistry


@pytest.fixture
def snapshot_path(tmp_path) -> str:
    return str(tmp_path / "store.json")


@pytest.fixture
def client(snapshot_path):
    store = ConnectionStore(ProviderRegistry.default(), snapshot_path=snapshot_path)
    with TestClient(create_app(store)) as test_client:
        yield test_client
