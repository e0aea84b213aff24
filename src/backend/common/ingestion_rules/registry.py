from __future__ import annotations

from typing import Dict, Iterable, Type

from .criterion import Criterion


class CriterionRegistry:
    """Criterion classes by id. The evaluator instantiates every registered criterion
    and a rule matches only when all of them are satisfied."""

    def __init__(self):
        self._criteria: Dict[str, Type[Criterion]] = {}

    def register(self, criterion_cls: Type[Criterion]) -> None:
        criterion_id = getattr(criterion_cls, "criterion_id", None)
        if not criterion_id:
            raise ValueError("Criterion class missing criterion_id")
        if criterion_id in self._criteria:
            raise ValueError(f"Duplicate criterion_id registered: {criterion_id}")
        self._criteria[criterion_id] = criterion_cls

    def create_all(self) -> list[Criterion]:
        return [cls() for cls in self._criteria.values()]

    def get(self, criterion_id: str) -> Type[Criterion]:
        return self._criteria[criterion_id]

    def ids(self) -> Iterable[str]:
        return self._criteria.keys()


registry = CriterionRegistry()


def register_criterion(criterion_cls: Type[Criterion]) -> Type[Criterion]:
    registry.register(criterion_cls)
    return criterion_cls
