from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field


class RecordType(str, Enum):
    EXTERNAL = "external"
    INTERNAL = "internal"
    ALL = "all"


class RecordKind(str, Enum):
    CALL = "call"
    MEETING = "meeting"
    DOCUMENT = "document"


class RuleDraft(BaseModel):
    """Caller-supplied rule fields, before validation and normalization."""

    name: str = ""
    record_type: RecordType = RecordType.EXTERNAL
    selected_users: Optional[List[str]] = None
    title_keywords: List[str] = Field(default_factory=list)
    deal_stages: Optional[List[str]] = None


class NormalizedRuleFields(BaseModel):
    name: str
    record_type: RecordType = RecordType.EXTERNAL
    # None means "no constraint on this dimension"; never an empty list.
    selected_users: Optional[List[str]] = None
    # Lowercased, deduplicated, first-seen order.
    title_keywords: List[str] = Field(default_factory=list)
    deal_stages: Optional[List[str]] = None


class IngestionRule(NormalizedRuleFields):
    id: str
    is_active: bool = True


class CandidateRecord(BaseModel):
    is_external: bool
    title: str = ""
    deal_stage: Optional[str] = None
    participant_ids: Set[str] = Field(default_factory=set)

    record_id: Optional[str] = None
    kind: Optional[RecordKind] = None


class EvaluationResult(BaseModel):
    included: bool
    matched_rule_ids: List[str] = Field(default_factory=list)


class RuleExplanation(BaseModel):
    rule_id: str
    is_active: bool
    matched: bool
    criteria: Dict[str, bool] = Field(default_factory=dict)
