from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


STORE_PATH_DEFAULT = ".integrations_store.json"


@dataclass(frozen=True)
class StoreConfig:
    snapshot_path: str
    autosave: bool


def get_store_config() -> StoreConfig:
    """
    Load connection store configuration from environment variables.

    Reads:
      INTEGRATIONS_STORE_PATH (default .integrations_store.json)
      INTEGRATIONS_AUTOSAVE   (default true; flush the snapshot after every mutation)
    """
    return StoreConfig(
        snapshot_path=os.getenv("INTEGRATIONS_STORE_PATH", STORE_PATH_DEFAULT).strip() or STORE_PATH_DEFAULT,
        autosave=_env_flag("INTEGRATIONS_AUTOSAVE", default=True),
    )


def _env_flag(name: str, *, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean flag (true/false), got {value!r}.")
