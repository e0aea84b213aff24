from __future__ import annotations

from ..criterion import Criterion
from ..models import CandidateRecord, IngestionRule, RecordType
from ..registry import register_criterion


@register_criterion
class RECORD_TYPE(Criterion):
    criterion_id = "record_type"

    def is_satisfied(self, rule: IngestionRule, record: CandidateRecord) -> bool:
        if rule.record_type == RecordType.ALL:
            return True
        if rule.record_type == RecordType.EXTERNAL:
            return record.is_external
        return not record.is_external
