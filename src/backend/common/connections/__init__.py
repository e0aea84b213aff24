"""Provider connection state: typed settings, rule lifecycle, JSON snapshot persistence."""

from .config import StoreConfig, get_store_config
from .models import Connection, ConnectionStatus
from .settings import (
    CallIntelligenceSettings,
    CommunicationSettings,
    CrmSettings,
    DocumentSettings,
    GenericSettings,
    SettingsBase,
    parse_settings,
)
from .store import ConnectionStore
