from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, Field, TypeAdapter

from common.ingestion_rules.models import IngestionRule
from common.providers.models import SettingsKind


class SyncFrequency(str, Enum):
    REALTIME = "realtime"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"


class SettingsBase(BaseModel):
    # Every provider may carry ingestion rules; non-call sources typically leave this empty.
    rules: List[IngestionRule] = Field(default_factory=list)
    last_updated: Optional[datetime] = None


class CallIntelligenceSettings(SettingsBase):
    """Call recorders and calendars (calls and meetings)."""

    kind: Literal["call_intelligence"] = "call_intelligence"

    sync_recordings: bool = True
    sync_transcripts: bool = True
    sync_meeting_notes: bool = True
    sync_analytics: bool = True
    enable_ai_insights: bool = True
    auto_tag_calls: bool = True
    share_with_sales_team: bool = True
    share_with_marketing_team: bool = False
    sync_frequency: SyncFrequency = SyncFrequency.DAILY
    include_internal_calls: bool = False
    min_call_duration_minutes: int = Field(default=5, ge=0)
    # Subject matter experts whose calls are eligible for learning.
    selected_smes: List[str] = Field(default_factory=list)
    enabled_data_types: List[str] = Field(default_factory=list)


class DocumentSettings(SettingsBase):
    kind: Literal["document"] = "document"

    selected_items: List[str] = Field(default_factory=list)
    active_account: str = ""
    total_items: int = Field(default=0, ge=0)


class CommunicationSettings(SettingsBase):
    kind: Literal["communication"] = "communication"

    respond_to_mentions: bool = True
    respond_in_all_channels: bool = True
    selected_channels: List[str] = Field(default_factory=list)
    auto_respond_to_questions: bool = False
    auto_respond_in_all_channels: bool = False
    auto_selected_channels: List[str] = Field(default_factory=list)
    forward_unanswered_questions: bool = True
    allow_anyone_to_add_bot: bool = True


class FieldMapping(BaseModel):
    id: str
    local_field: str
    provider_field: str
    skip_if_source_empty: bool = False
    skip_if_destination_has_value: bool = False


class CrmObjectConfig(BaseModel):
    name: str
    can_read: bool = True
    can_write: bool = False
    required_fields: List[str] = Field(default_factory=list)
    mappings: List[FieldMapping] = Field(default_factory=list)


class CrmSettings(SettingsBase):
    kind: Literal["crm"] = "crm"

    objects: List[CrmObjectConfig] = Field(default_factory=list)


class GenericSettings(SettingsBase):
    kind: Literal["generic"] = "generic"

    options: Dict[str, Any] = Field(default_factory=dict)


ProviderSettings = Annotated[
    Union[CallIntelligenceSettings, DocumentSettings, CommunicationSettings, CrmSettings, GenericSettings],
    Field(discriminator="kind"),
]

_settings_adapter: TypeAdapter = TypeAdapter(ProviderSettings)

_MODELS_BY_KIND: Dict[SettingsKind, Type[SettingsBase]] = {
    SettingsKind.CALL_INTELLIGENCE: CallIntelligenceSettings,
    SettingsKind.DOCUMENT: DocumentSettings,
    SettingsKind.COMMUNICATION: CommunicationSettings,
    SettingsKind.CRM: CrmSettings,
    SettingsKind.GENERIC: GenericSettings,
}


def settings_model_for(kind: SettingsKind) -> Type[SettingsBase]:
    return _MODELS_BY_KIND[SettingsKind(kind)]


def default_settings(kind: SettingsKind) -> SettingsBase:
    return settings_model_for(kind)()


def parse_settings(raw: Any, *, kind: Optional[SettingsKind] = None) -> SettingsBase:
    """
    Validate a settings payload into its typed variant.

    Mappings without a `kind` tag are read as the expected `kind` when given.
    Raises pydantic.ValidationError on malformed payloads.
    """
    if isinstance(raw, SettingsBase):
        return raw
    if isinstance(raw, dict) and "kind" not in raw and kind is not None:
        raw = {**raw, "kind": SettingsKind(kind).value}
    return _settings_adapter.validate_python(raw)
