"""Record predicates for deletes and filtered searches.

Predicates are conjunctions of simple conditions over the ``id`` and
``timestamp`` columns, rendered to the table backend's filter language
rather than interpolated into query strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_OPERATORS = {
    "==": "$eq",
    ">=": "$gte",
    "<=": "$lte",
    ">": "$gt",
    "<": "$lt",
}
_FIELD_OPERATORS = {
    "id": {"=="},
    "timestamp": set(_OPERATORS),
}


@dataclass(frozen=True)
class Condition:
    """A single ``field op value`` comparison."""

    field: str
    op: str
    value: str | int

    def __post_init__(self) -> None:
        allowed = _FIELD_OPERATORS.get(self.field)
        if allowed is None:
            raise ValueError(f"Unsupported predicate field: {self.field}")
        if self.op not in allowed:
            raise ValueError(f"Operator {self.op} not supported for {self.field}")
        if self.field == "id" and not isinstance(self.value, str):
            raise ValueError("id predicates require a string value")
        if self.field == "timestamp" and (
            isinstance(self.value, bool) or not isinstance(self.value, int)
        ):
            raise ValueError("timestamp predicates require an integer value")

    def to_where(self) -> dict[str, Any]:
        return {self.field: {_OPERATORS[self.op]: self.value}}

    def __str__(self) -> str:
        value = f'"{self.value}"' if isinstance(self.value, str) else str(self.value)
        return f"{self.field} {self.op} {value}"


@dataclass(frozen=True)
class Predicate:
    """Conjunction of conditions."""

    conditions: tuple[Condition, ...]

    def __post_init__(self) -> None:
        if not self.conditions:
            raise ValueError("A predicate needs at least one condition")

    @classmethod
    def where(cls, field: str, op: str, value: str | int) -> "Predicate":
        return cls((Condition(field, op, value),))

    @classmethod
    def id_equals(cls, record_id: str) -> "Predicate":
        return cls.where("id", "==", record_id)

    @classmethod
    def timestamp_between(
        cls, start_ms: int | None = None, end_ms: int | None = None
    ) -> "Predicate | None":
        """Inclusive timestamp range; either side may be omitted.

        Returns None when both bounds are omitted.
        """
        conditions = []
        if start_ms is not None:
            conditions.append(Condition("timestamp", ">=", start_ms))
        if end_ms is not None:
            conditions.append(Condition("timestamp", "<=", end_ms))
        if not conditions:
            return None
        return cls(tuple(conditions))

    def to_where(self) -> dict[str, Any]:
        """Render as a metadata filter (``$and`` needs two or more clauses)."""
        clauses = [c.to_where() for c in self.conditions]
        if len(clauses) == 1:
            return clauses[0]
        return {"$and": clauses}

    def __str__(self) -> str:
        return " AND ".join(str(c) for c in self.conditions)
