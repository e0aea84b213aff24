from __future__ import annotations

from ..criterion import Criterion
from ..models import CandidateRecord, IngestionRule
from ..registry import register_criterion


@register_criterion
class DEAL_STAGES(Criterion):
    criterion_id = "deal_stages"

    def is_satisfied(self, rule: IngestionRule, record: CandidateRecord) -> bool:
        if not rule.deal_stages:
            return True
        if record.deal_stage is None:
            return False
        return record.deal_stage in set(rule.deal_stages)
