from __future__ import annotations

from ..criterion import Criterion
from ..models import CandidateRecord, IngestionRule
from ..registry import register_criterion


@register_criterion
class SELECTED_USERS(Criterion):
    criterion_id = "selected_users"

    def is_satisfied(self, rule: IngestionRule, record: CandidateRecord) -> bool:
        if not rule.selected_users:
            return True
        return not set(rule.selected_users).isdisjoint(record.participant_ids)
