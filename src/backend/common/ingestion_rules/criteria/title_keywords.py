from __future__ import annotations

from ..criterion import Criterion
from ..models import CandidateRecord, IngestionRule
from ..registry import register_criterion


@register_criterion
class TITLE_KEYWORDS(Criterion):
    criterion_id = "title_keywords"

    def is_satisfied(self, rule: IngestionRule, record: CandidateRecord) -> bool:
        if not rule.title_keywords:
            return True
        title = (record.title or "").lower()
        # Any keyword is enough (OR across keywords).
        return any(kw.lower() in title for kw in rule.title_keywords if kw)
