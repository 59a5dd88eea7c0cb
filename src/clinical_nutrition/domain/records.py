"""Domain models for saved planner records."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from clinical_nutrition.domain.exchanges import (
    MacroValues,
    MealDistribution,
    ServingPlan,
)


class ToolType(StrEnum):
    """Tool that produced a saved record."""

    MEAL_PLANNER = "meal-planner"
    MEAL_CREATOR = "meal-creator"
    DAY_PLANNER = "day-planner"
    KCAL_CALCULATOR = "kcal-calculator"


@dataclass(frozen=True)
class SavedRecord:
    """Opaque tool state stored for a user."""

    id: UUID
    user_id: UUID
    tool_type: ToolType
    name: str
    data: dict[str, object]
    created_at: datetime | None = None


@dataclass(frozen=True)
class PlannerSnapshot:
    """Meal planner state as stored and replayed by the persistence layer."""

    plan: ServingPlan = field(default_factory=ServingPlan)
    distribution: MealDistribution = field(default_factory=MealDistribution)
    target_kcal: float = 0.0
    manual_gram_targets: MacroValues = field(default_factory=MacroValues)
    manual_percent_targets: MacroValues = field(default_factory=MacroValues)

    def to_data(self) -> dict[str, object]:
        """Serialize into a JSON-compatible dict."""
        return {
            "servingsByGroup": self.plan.to_counts(),
            "fatBreakdown": self.plan.fat_breakdown_enabled,
            "distributionByGroupAndMeal": self.distribution.to_nested(),
            "targetKcal": self.target_kcal,
            "manualGramTargets": _macro_dict(self.manual_gram_targets),
            "manualPercentTargets": _macro_dict(self.manual_percent_targets),
        }

    @classmethod
    def from_data(cls, data: Mapping[str, object]) -> "PlannerSnapshot":
        """Rebuild a snapshot from ``to_data`` output.

        Raises ``ValueError`` for unknown group or meal-slot keys.
        """
        servings = data.get("servingsByGroup") or {}
        distribution = data.get("distributionByGroupAndMeal") or {}
        if not isinstance(servings, Mapping) or not isinstance(distribution, Mapping):
            raise ValueError("planner data is malformed")
        return cls(
            plan=ServingPlan.from_counts(
                servings, fat_breakdown=bool(data.get("fatBreakdown", False))
            ),
            distribution=MealDistribution.from_nested(distribution),
            target_kcal=float(data.get("targetKcal") or 0.0),
            manual_gram_targets=_macro_values(data.get("manualGramTargets")),
            manual_percent_targets=_macro_values(data.get("manualPercentTargets")),
        )


def _macro_dict(values: MacroValues) -> dict[str, float]:
    return {"cho": values.cho, "pro": values.pro, "fat": values.fat}


def _macro_values(raw: object) -> MacroValues:
    if not isinstance(raw, Mapping):
        return MacroValues()
    return MacroValues(
        cho=float(raw.get("cho", 0.0)),
        pro=float(raw.get("pro", 0.0)),
        fat=float(raw.get("fat", 0.0)),
    )
