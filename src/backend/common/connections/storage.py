from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Mapping

from .models import Connection


logger = logging.getLogger(__name__)

STORAGE_KEY = "docket-integrations"
SNAPSHOT_VERSION = 1


def load_snapshot(path: str) -> dict[str, dict[str, Any]] | None:
    """Return raw connection payloads keyed by provider id, or None if nothing is persisted."""
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as handle:
        raw = json.loads(handle.read())
    if not isinstance(raw, dict):
        return None
    state = raw.get(STORAGE_KEY)
    if not isinstance(state, dict):
        return None
    connections = state.get("connections")
    if not isinstance(connections, dict):
        return None
    logger.debug("Read %d persisted connection(s) from %s", len(connections), path)
    return {str(k): v for k, v in connections.items() if isinstance(v, dict)}


def save_snapshot(path: str, connections: Mapping[str, Connection]) -> None:
    data: dict[str, Any] = {
        STORAGE_KEY: {
            "version": SNAPSHOT_VERSION,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "connections": {pid: conn.model_dump(mode="json") for pid, conn in connections.items()},
        }
    }
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2)
    logger.debug("Wrote %d connection(s) to %s", len(connections), path)
