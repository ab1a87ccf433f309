"""Budget read models - derived on demand, never persisted."""

from pydantic import BaseModel, ConfigDict


class BudgetBreakdown(BaseModel):
    """Actual spend bucketed by category."""

    model_config = ConfigDict(frozen=True)

    transport: float = 0.0
    stay: float = 0.0
    activities: float = 0.0
    food: float = 0.0

    @property
    def total(self) -> float:
        return self.transport + self.stay + self.activities + self.food

    def as_entries(self) -> list[tuple[str, float]]:
        """Label/value pairs in chart order."""
        return [
            ("Transport", self.transport),
            ("Stay", self.stay),
            ("Activities", self.activities),
            ("Food", self.food),
        ]


class BudgetSummary(BaseModel):
    """Everything the budget tab shows for one trip."""

    model_config = ConfigDict(frozen=True)

    planned_total: float
    actual_total: float
    cost_per_person: float
    remaining_budget: float
    progress_pct: float
    over_budget: bool
    breakdown: BudgetBreakdown
