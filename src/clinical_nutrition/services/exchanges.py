"""Macro and energy totals for food-exchange serving plans."""

from dataclasses import dataclass

from clinical_nutrition.domain.exchanges import (
    EXCHANGE_FACTORS,
    FAT_SUBTYPES,
    KCAL_PER_GRAM_CHO,
    KCAL_PER_GRAM_FAT,
    KCAL_PER_GRAM_PRO,
    EnergySplit,
    MacroReconciliation,
    MacroTarget,
    MacroTotals,
    MacroValues,
    ServingPlan,
    TargetMode,
)


@dataclass
class ExchangeMacroEngine:
    """Turns serving counts into nutrient totals and target comparisons."""

    def compute_totals(self, plan: ServingPlan) -> MacroTotals:
        """Sum nutrients over the groups active under the plan's fat mode.

        The ``fats`` aggregate is skipped when fats are broken down by
        sub-type, and the sub-types are skipped otherwise.
        """
        cho = pro = fat = fiber = kcal = 0.0
        kcal_by_subtype = dict.fromkeys(FAT_SUBTYPES, 0.0)
        for group, serves in plan.active_counts().items():
            factor = EXCHANGE_FACTORS[group]
            cho += serves * factor.cho
            pro += serves * factor.pro
            fat += serves * factor.fat
            fiber += serves * factor.fiber
            kcal += serves * factor.kcal
            if group in kcal_by_subtype:
                kcal_by_subtype[group] += serves * factor.kcal
        return MacroTotals(
            cho=cho,
            pro=pro,
            fat=fat,
            fiber=fiber,
            kcal=kcal,
            kcal_by_subtype=kcal_by_subtype,
        )

    def energy_split(self, totals: MacroTotals) -> EnergySplit:
        """Percent of the plan's own energy coming from each macro."""
        return EnergySplit(
            cho=percent_of_energy(totals.cho, KCAL_PER_GRAM_CHO, totals.kcal),
            pro=percent_of_energy(totals.pro, KCAL_PER_GRAM_PRO, totals.kcal),
            fat=percent_of_energy(totals.fat, KCAL_PER_GRAM_FAT, totals.kcal),
        )

    def reconcile(
        self, totals: MacroTotals, target: MacroTarget
    ) -> MacroReconciliation:
        """Compare totals against gram or percent-of-energy targets.

        Shares of ``target_kcal`` are 0 when there is no energy target.
        """
        kcal = target.target_kcal
        if target.mode is TargetMode.GRAMS:
            grams = target.grams
            target_percent = MacroValues(
                cho=share_of_target(grams.cho, KCAL_PER_GRAM_CHO, kcal),
                pro=share_of_target(grams.pro, KCAL_PER_GRAM_PRO, kcal),
                fat=share_of_target(grams.fat, KCAL_PER_GRAM_FAT, kcal),
            )
        elif target.mode is TargetMode.PERCENT:
            target_percent = target.percent
            grams = MacroValues(
                cho=grams_for_percent(kcal, target_percent.cho, KCAL_PER_GRAM_CHO),
                pro=grams_for_percent(kcal, target_percent.pro, KCAL_PER_GRAM_PRO),
                fat=grams_for_percent(kcal, target_percent.fat, KCAL_PER_GRAM_FAT),
            )
        else:
            grams = MacroValues()
            target_percent = MacroValues()

        kcal_from_macros = (
            grams.cho * KCAL_PER_GRAM_CHO
            + grams.pro * KCAL_PER_GRAM_PRO
            + grams.fat * KCAL_PER_GRAM_FAT
        )
        remaining_kcal = (
            kcal - totals.kcal
            if target.mode is TargetMode.NONE
            else kcal_from_macros - totals.kcal
        )
        return MacroReconciliation(
            mode=target.mode,
            target_grams=grams,
            target_percent=target_percent,
            percent_total=target_percent.cho + target_percent.pro + target_percent.fat,
            target_kcal_from_macros=kcal_from_macros,
            achievement_percent=MacroValues(
                cho=achievement(totals.cho, grams.cho),
                pro=achievement(totals.pro, grams.pro),
                fat=achievement(totals.fat, grams.fat),
            ),
            kcal_achievement_percent=achievement(totals.kcal, kcal),
            energy_percent_of_target=MacroValues(
                cho=share_of_target(totals.cho, KCAL_PER_GRAM_CHO, kcal),
                pro=share_of_target(totals.pro, KCAL_PER_GRAM_PRO, kcal),
                fat=share_of_target(totals.fat, KCAL_PER_GRAM_FAT, kcal),
            ),
            remaining_grams=MacroValues(
                cho=grams.cho - totals.cho,
                pro=grams.pro - totals.pro,
                fat=grams.fat - totals.fat,
            ),
            remaining_kcal=remaining_kcal,
            remaining_target_kcal=kcal - totals.kcal,
        )


def percent_of_energy(grams: float, kcal_per_gram: float, total_kcal: float) -> float:
    """Share of ``total_kcal`` supplied by ``grams`` of a macro."""
    return grams * kcal_per_gram / max(total_kcal, 1) * 100


def share_of_target(grams: float, kcal_per_gram: float, target_kcal: float) -> float:
    """Percent of ``target_kcal`` supplied by ``grams``; 0 without a target."""
    if target_kcal <= 0:
        return 0.0
    return grams * kcal_per_gram / target_kcal * 100


def grams_for_percent(
    target_kcal: float, percent: float, kcal_per_gram: float
) -> float:
    """Grams of a macro that supply ``percent`` of ``target_kcal``."""
    return target_kcal * percent / 100 / kcal_per_gram


def achievement(total: float, target: float) -> float:
    """Percent of ``target`` reached; 0 when there is no target."""
    if target <= 0:
        return 0.0
    return total / target * 100
