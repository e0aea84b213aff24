from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from common.connections.store import ConnectionStore
from common.ingestion_rules.evaluator import RuleEvaluator
from common.ingestion_rules.models import CandidateRecord, EvaluationResult


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdmissionDecision:
    record: CandidateRecord
    result: EvaluationResult


@dataclass(frozen=True)
class AdmissionReport:
    provider_id: str
    decisions: tuple[AdmissionDecision, ...] = ()

    @property
    def admitted(self) -> list[CandidateRecord]:
        return [d.record for d in self.decisions if d.result.included]

    @property
    def rejected(self) -> list[CandidateRecord]:
        return [d.record for d in self.decisions if not d.result.included]


def admit(
    store: ConnectionStore,
    provider_id: str,
    record: CandidateRecord,
    *,
    evaluator: Optional[RuleEvaluator] = None,
) -> EvaluationResult:
    """Evaluate one arriving record against the provider's current active rules."""
    evaluator = evaluator or RuleEvaluator()
    result = evaluator.evaluate(record, store.active_rules_of(provider_id))
    logger.debug(
        "Record %s from %s included=%s matched=%s",
        record.record_id or "<unnamed>",
        provider_id,
        result.included,
        result.matched_rule_ids,
    )
    return result


def admit_many(
    store: ConnectionStore,
    provider_id: str,
    records: Iterable[CandidateRecord],
    *,
    evaluator: Optional[RuleEvaluator] = None,
) -> AdmissionReport:
    evaluator = evaluator or RuleEvaluator()
    # Rules are read once per batch; edits made mid-batch apply to the next batch.
    rules = store.active_rules_of(provider_id)
    decisions = tuple(AdmissionDecision(record=r, result=evaluator.evaluate(r, rules)) for r in records)
    report = AdmissionReport(provider_id=provider_id, decisions=decisions)
    logger.info(
        "Admitted %d of %d record(s) from %s",
        len(report.admitted),
        len(decisions),
        provider_id,
    )
    return report
