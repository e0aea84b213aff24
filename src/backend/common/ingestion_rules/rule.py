from __future__ import annotations

import uuid
from typing import Any, Iterable, List, Mapping, Optional, Set, Union

from pydantic import BaseModel

from common.results import CoreError, Result

from .models import IngestionRule, NormalizedRuleFields, RuleDraft


def validate_draft(draft: Union[RuleDraft, Mapping[str, Any]]) -> Result[NormalizedRuleFields]:
    """
    Validate and normalize a draft rule before it enters a rule set.

    - Blank names fail with EMPTY_NAME.
    - Title keywords are stripped, lowercased and deduplicated; blanks are dropped.
    - Empty user / deal-stage lists become None (no constraint).
    """
    if not isinstance(draft, RuleDraft):
        draft = RuleDraft.model_validate(dict(draft))

    name = (draft.name or "").strip()
    if not name:
        return Result.failure(CoreError.EMPTY_NAME, "Rule name must not be empty.")

    return Result.success(
        NormalizedRuleFields(
            name=name,
            record_type=draft.record_type,
            selected_users=_optional_set(draft.selected_users),
            title_keywords=_normalize_keywords(draft.title_keywords),
            deal_stages=_optional_set(draft.deal_stages),
        )
    )


def new_rule_id() -> str:
    return f"rule-{uuid.uuid4().hex[:12]}"


def build_rule(fields: NormalizedRuleFields, rule_id: str, *, is_active: bool = True) -> IngestionRule:
    return IngestionRule(id=rule_id, is_active=is_active, **fields.model_dump())


def apply_edit(rule: IngestionRule, fields: NormalizedRuleFields) -> IngestionRule:
    # Edits replace every field except the identity and the active flag.
    return build_rule(fields, rule.id, is_active=rule.is_active)


def toggled(rule: IngestionRule) -> IngestionRule:
    return rule.model_copy(update={"is_active": not rule.is_active})


def normalize_rules(entries: Iterable[Union[IngestionRule, Mapping[str, Any]]]) -> Result[List[IngestionRule]]:
    """
    Bring a wholesale rule list in line with the rule-set invariants.

    Every entry goes through `validate_draft`. Supplied ids are kept and must
    be unique (INVALID_SETTINGS otherwise); entries without an id get a fresh
    one. `is_active` is kept and defaults to True.

    Malformed field values raise pydantic `ValidationError`.
    """
    prepared = []
    seen: Set[str] = set()
    for entry in entries:
        if isinstance(entry, BaseModel):
            data = entry.model_dump()
        elif isinstance(entry, Mapping):
            data = dict(entry)
        else:
            return Result.failure(CoreError.INVALID_SETTINGS, f"Rule entries must be objects, got {type(entry).__name__}.")

        rule_id = data.get("id")
        if rule_id is not None and str(rule_id).strip():
            rule_id = str(rule_id).strip()
            if rule_id in seen:
                return Result.failure(CoreError.INVALID_SETTINGS, f"Duplicate rule id: {rule_id}")
            seen.add(rule_id)
        else:
            rule_id = None

        validated = validate_draft(data)
        if not validated.ok:
            return Result.failure(validated.error, validated.message)
        is_active = data.get("is_active")
        prepared.append((rule_id, validated.value, True if is_active is None else is_active))

    rules: List[IngestionRule] = []
    for rule_id, fields, is_active in prepared:
        if rule_id is None:
            rule_id = new_rule_id()
            while rule_id in seen:
                rule_id = new_rule_id()
            seen.add(rule_id)
        rules.append(build_rule(fields, rule_id, is_active=is_active))
    return Result.success(rules)


def _normalize_keywords(keywords: Iterable[str]) -> List[str]:
    out: List[str] = []
    for raw in keywords or []:
        kw = str(raw).strip().lower()
        if kw and kw not in out:
            out.append(kw)
    return out


def _optional_set(values: Optional[Iterable[str]]) -> Optional[List[str]]:
    if not values:
        return None
    out: List[str] = []
    for v in values:
        v = str(v).strip()
        if v and v not in out:
            out.append(v)
    return out or None
