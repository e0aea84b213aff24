import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from common.ingestion_rules.models import CandidateRecord, IngestionRule, RecordType


@pytest.fixture
def make_rule():
    def _make(
        *,
        rule_id: str = "rule-1",
        name: str = "Rule",
        record_type: RecordType = RecordType.ALL,
        title_keywords=None,
        selected_users=None,
        deal_stages=None,
        is_active: bool = True,
    ) -> IngestionRule:
        return IngestionRule(
            id=rule_id,
            name=name,
            record_type=record_type,
            title_keywords=title_keywords or [],
            selected_users=selected_users,
            deal_stages=deal_stages,
            is_active=is_active,
        )

    return _make


@pytest.fixture
def make_record():
    def _make(
        *,
        is_external: bool = True,
        title: str = "",
        deal_stage=None,
        participant_ids=None,
        record_id=None,
    ) -> CandidateRecord:
        return CandidateRecord(
            is_external=is_external,
            title=title,
            deal_stage=deal_stage,
            participant_ids=set(participant_ids or ()),
            record_id=record_id,
        )

    return _make
