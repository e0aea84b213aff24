from __future__ import annotations

from abc import ABC, abstractmethod

from .models import CandidateRecord, IngestionRule


class Criterion(ABC):
    """One matching dimension of an ingestion rule.

    A rule matches a record when every registered criterion is satisfied.
    Criteria must treat an unconstrained rule dimension as satisfied.
    """

    criterion_id: str

    def __init__(self):
        if not getattr(self, "criterion_id", None):
            raise ValueError("Criterion must define criterion_id")

    @abstractmethod
    def is_satisfied(self, rule: IngestionRule, record: CandidateRecord) -> bool:  # pragma: no cover
        raise NotImplementedError
