from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .settings import ProviderSettings


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


class Connection(BaseModel):
    provider_id: str
    status: ConnectionStatus = ConnectionStatus.CONNECTED
    connected_at: datetime
    account_label: Optional[str] = None
    status_message: Optional[str] = None
    # None until the first configure call.
    settings: Optional[ProviderSettings] = None
