from __future__ import annotations

from enum import Enum
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderCategory(str, Enum):
    CRM = "CRM"
    COMMUNICATION = "Communication"
    STORAGE_AND_WIKI = "Storage & Wiki"
    ENABLEMENT = "Enablement"


class Capability(str, Enum):
    READ = "read"
    WRITE = "write"


class SettingsKind(str, Enum):
    """Which settings schema a provider's connection carries."""

    CALL_INTELLIGENCE = "call_intelligence"
    DOCUMENT = "document"
    COMMUNICATION = "communication"
    CRM = "crm"
    GENERIC = "generic"


class Provider(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: ProviderCategory
    capabilities: FrozenSet[Capability] = frozenset({Capability.READ})
    settings_kind: SettingsKind = SettingsKind.GENERIC
    # Label for the record-type dimension in rule editors ("Call Type", "Meeting Type", ...).
    record_type_label: str = "Record Type"

    website: Optional[str] = None
    oauth: bool = True
    scopes: List[str] = Field(default_factory=list)
