from __future__ import annotations

from typing import Iterable, List, Optional

from .criterion import Criterion
from .models import CandidateRecord, EvaluationResult, IngestionRule, RuleExplanation
from .registry import registry

# Ensure built-in criteria are imported/registered before the default evaluator is built.
from . import criteria as _builtin_criteria  # noqa: F401


def active_rules(rules: Iterable[IngestionRule]) -> List[IngestionRule]:
    return [r for r in rules if r.is_active]


class RuleEvaluator:
    def __init__(self, criteria: Optional[Iterable[Criterion]] = None):
        self._criteria = list(criteria) if criteria is not None else registry.create_all()

    def matches(self, rule: IngestionRule, record: CandidateRecord) -> bool:
        return all(c.is_satisfied(rule, record) for c in self._criteria)

    def evaluate(self, record: CandidateRecord, rules: Iterable[IngestionRule]) -> EvaluationResult:
        """
        Decide admission of `record` against a rule set.

        AND across a rule's dimensions, OR across rules. Inactive rules are
        ignored; no active rules means the record is excluded.
        """
        matched = [rule.id for rule in active_rules(rules) if self.matches(rule, record)]
        return EvaluationResult(included=bool(matched), matched_rule_ids=matched)

    def explain(self, record: CandidateRecord, rule: IngestionRule) -> RuleExplanation:
        outcomes = {c.criterion_id: c.is_satisfied(rule, record) for c in self._criteria}
        return RuleExplanation(
            rule_id=rule.id,
            is_active=rule.is_active,
            matched=rule.is_active and all(outcomes.values()),
            criteria=outcomes,
        )


def evaluate(record: CandidateRecord, rules: Iterable[IngestionRule]) -> EvaluationResult:
    return RuleEvaluator().evaluate(record, rules)
