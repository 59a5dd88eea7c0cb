"""Meal-distribution feasibility checks."""

from collections.abc import Mapping
from dataclasses import dataclass

from clinical_nutrition.domain.exchanges import (
    FAT_SUBTYPES,
    NON_FAT_GROUPS,
    AggregateFat,
    FatBreakdown,
    FatRepresentation,
    FoodExchangeGroup,
    MealDistribution,
    ServingPlan,
)


@dataclass
class MealDistributionValidator:
    """Compares the day's serving targets with what was placed in meals."""

    def displayed_groups(self, plan: ServingPlan) -> tuple[FoodExchangeGroup, ...]:
        """Groups shown for the plan's fat mode, in display order."""
        if plan.fat_breakdown_enabled:
            return (*NON_FAT_GROUPS, FoodExchangeGroup.FATS, *FAT_SUBTYPES)
        return (*NON_FAT_GROUPS, FoodExchangeGroup.FATS)

    def distributed(
        self,
        plan: ServingPlan,
        distribution: MealDistribution,
        group: FoodExchangeGroup,
    ) -> float:
        """Servings of ``group`` placed across all meal slots.

        Under fat breakdown the ``fats`` row sums its sub-types and its own
        allocations are ignored.
        """
        if group is FoodExchangeGroup.FATS and plan.fat_breakdown_enabled:
            return sum(distribution.distributed(sub) for sub in FAT_SUBTYPES)
        return distribution.distributed(group)

    def remainders(
        self, plan: ServingPlan, distribution: MealDistribution
    ) -> dict[FoodExchangeGroup, float]:
        """Target minus distributed servings for every displayed group.

        A negative remainder means the group is over-allocated.
        """
        return {
            group: plan.count(group) - self.distributed(plan, distribution, group)
            for group in self.displayed_groups(plan)
        }

    def allocated_plan(
        self, plan: ServingPlan, distribution: MealDistribution
    ) -> ServingPlan:
        """Return the servings actually placed in meals as a plan."""
        servings = {
            group: distribution.distributed(group) for group in NON_FAT_GROUPS
        }
        fat: FatRepresentation
        if plan.fat_breakdown_enabled:
            sat, mufa, pufa = (distribution.distributed(sub) for sub in FAT_SUBTYPES)
            fat = FatBreakdown(sat=sat, mufa=mufa, pufa=pufa)
        else:
            fat = AggregateFat(distribution.distributed(FoodExchangeGroup.FATS))
        return ServingPlan(servings=servings, fat=fat)

    def over_allocated(
        self, remainders: Mapping[FoodExchangeGroup, float]
    ) -> list[FoodExchangeGroup]:
        """Groups with more servings distributed than planned."""
        return [group for group, remainder in remainders.items() if remainder < 0]
