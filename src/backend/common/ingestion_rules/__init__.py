"""Source-agnostic ingestion rules.

This package intentionally contains only domain logic:
- Rule inputs are drafts from a configuration surface; records are already
  normalized into `CandidateRecord`.
- No provider APIs, persistence, or network calls live here.
"""

from .evaluator import RuleEvaluator, active_rules, evaluate
from .models import (
    CandidateRecord,
    EvaluationResult,
    IngestionRule,
    NormalizedRuleFields,
    RecordKind,
    RecordType,
    RuleDraft,
    RuleExplanation,
)
from .rule import apply_edit, build_rule, new_rule_id, normalize_rules, toggled, validate_draft

# Import built-in criteria so they self-register with the global registry.
from . import criteria as _builtin_criteria  # noqa: F401
