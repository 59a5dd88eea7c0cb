"""Food-exchange groups, serving plans and meal distributions."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class FoodExchangeGroup(StrEnum):
    """Closed set of food-exchange groups."""

    STARCH = "starch"
    VEG = "veg"
    FRUIT = "fruit"
    LEGUMES = "legumes"
    SUGAR = "sugar"
    MEAT_LEAN = "meatLean"
    MEAT_MED = "meatMed"
    MEAT_HIGH = "meatHigh"
    MILK_SKIM = "milkSkim"
    MILK_LOW = "milkLow"
    MILK_WHOLE = "milkWhole"
    FATS = "fats"
    FATS_SAT = "fatsSat"
    FATS_MUFA = "fatsMufa"
    FATS_PUFA = "fatsPufa"


FAT_SUBTYPES: tuple[FoodExchangeGroup, ...] = (
    FoodExchangeGroup.FATS_SAT,
    FoodExchangeGroup.FATS_MUFA,
    FoodExchangeGroup.FATS_PUFA,
)
FAT_GROUPS: frozenset[FoodExchangeGroup] = frozenset(
    (FoodExchangeGroup.FATS, *FAT_SUBTYPES)
)
NON_FAT_GROUPS: tuple[FoodExchangeGroup, ...] = tuple(
    group for group in FoodExchangeGroup if group not in FAT_GROUPS
)


@dataclass(frozen=True)
class ExchangeFactor:
    """Nutrients carried by one serving of a group."""

    cho: float
    pro: float
    fat: float
    fiber: float
    kcal: float


EXCHANGE_FACTORS: Mapping[FoodExchangeGroup, ExchangeFactor] = MappingProxyType(
    {
        FoodExchangeGroup.STARCH: ExchangeFactor(15, 3, 0, 2, 80),
        FoodExchangeGroup.VEG: ExchangeFactor(5, 2, 0, 2, 25),
        FoodExchangeGroup.FRUIT: ExchangeFactor(15, 0, 0, 2, 60),
        FoodExchangeGroup.LEGUMES: ExchangeFactor(15, 7, 0, 4, 110),
        FoodExchangeGroup.SUGAR: ExchangeFactor(5, 0, 0, 0, 20),
        FoodExchangeGroup.MEAT_LEAN: ExchangeFactor(0, 7, 3, 0, 45),
        FoodExchangeGroup.MEAT_MED: ExchangeFactor(0, 7, 5, 0, 75),
        FoodExchangeGroup.MEAT_HIGH: ExchangeFactor(0, 7, 8, 0, 100),
        FoodExchangeGroup.MILK_SKIM: ExchangeFactor(15, 8, 3, 0, 100),
        FoodExchangeGroup.MILK_LOW: ExchangeFactor(15, 8, 5, 0, 120),
        FoodExchangeGroup.MILK_WHOLE: ExchangeFactor(15, 8, 8, 0, 160),
        FoodExchangeGroup.FATS: ExchangeFactor(0, 0, 5, 0, 45),
        FoodExchangeGroup.FATS_SAT: ExchangeFactor(0, 0, 5, 0, 45),
        FoodExchangeGroup.FATS_MUFA: ExchangeFactor(0, 0, 5, 0, 45),
        FoodExchangeGroup.FATS_PUFA: ExchangeFactor(0, 0, 5, 0, 45),
    }
)

KCAL_PER_GRAM_CHO = 4.0
KCAL_PER_GRAM_PRO = 4.0
KCAL_PER_GRAM_FAT = 9.0


class MealSlot(StrEnum):
    """Meal slots of a day, in serving order."""

    SNACK1 = "snack1"
    BREAKFAST = "breakfast"
    SNACK2 = "snack2"
    LUNCH = "lunch"
    SNACK3 = "snack3"
    DINNER = "dinner"
    SNACK4 = "snack4"


@dataclass(frozen=True)
class AggregateFat:
    """Fat servings tracked as a single `fats` count."""

    serves: float = 0.0


@dataclass(frozen=True)
class FatBreakdown:
    """Fat servings split by fatty-acid profile."""

    sat: float = 0.0
    mufa: float = 0.0
    pufa: float = 0.0

    @property
    def total(self) -> float:
        """Sum of the three sub-types."""
        return self.sat + self.mufa + self.pufa


FatRepresentation = AggregateFat | FatBreakdown


@dataclass(frozen=True)
class ServingPlan:
    """Daily serving targets per exchange group."""

    servings: Mapping[FoodExchangeGroup, float] = field(default_factory=dict)
    fat: FatRepresentation = field(default_factory=AggregateFat)

    def __post_init__(self) -> None:
        for group in self.servings:
            if group in FAT_GROUPS:
                raise ValueError(f"fat group {group} belongs in the fat field")
        object.__setattr__(self, "servings", MappingProxyType(dict(self.servings)))

    @classmethod
    def from_counts(
        cls,
        counts: Mapping[FoodExchangeGroup | str, float],
        *,
        fat_breakdown: bool = False,
    ) -> "ServingPlan":
        """Build a plan from flat per-group counts.

        With ``fat_breakdown`` the ``fats`` entry is ignored; without it the
        sub-type entries are ignored.
        """
        parsed = {FoodExchangeGroup(key): float(value) for key, value in counts.items()}
        servings = {
            group: parsed[group] for group in NON_FAT_GROUPS if group in parsed
        }
        fat: FatRepresentation
        if fat_breakdown:
            fat = FatBreakdown(
                sat=parsed.get(FoodExchangeGroup.FATS_SAT, 0.0),
                mufa=parsed.get(FoodExchangeGroup.FATS_MUFA, 0.0),
                pufa=parsed.get(FoodExchangeGroup.FATS_PUFA, 0.0),
            )
        else:
            fat = AggregateFat(parsed.get(FoodExchangeGroup.FATS, 0.0))
        return cls(servings=servings, fat=fat)

    @property
    def fat_breakdown_enabled(self) -> bool:
        """True when fats are tracked by sub-type."""
        return isinstance(self.fat, FatBreakdown)

    def count(self, group: FoodExchangeGroup) -> float:
        """Return the effective serving count for any group.

        Under breakdown mode ``fats`` reports the sum of its sub-types; the
        sub-types report 0 in aggregate mode.
        """
        if group not in FAT_GROUPS:
            return self.servings.get(group, 0.0)
        if isinstance(self.fat, FatBreakdown):
            if group is FoodExchangeGroup.FATS:
                return self.fat.total
            return {
                FoodExchangeGroup.FATS_SAT: self.fat.sat,
                FoodExchangeGroup.FATS_MUFA: self.fat.mufa,
                FoodExchangeGroup.FATS_PUFA: self.fat.pufa,
            }[group]
        if group is FoodExchangeGroup.FATS:
            return self.fat.serves
        return 0.0

    def active_counts(self) -> dict[FoodExchangeGroup, float]:
        """Return counts for the groups that contribute nutrients."""
        counts = {group: self.count(group) for group in NON_FAT_GROUPS}
        if isinstance(self.fat, FatBreakdown):
            for group in FAT_SUBTYPES:
                counts[group] = self.count(group)
        else:
            counts[FoodExchangeGroup.FATS] = self.fat.serves
        return counts

    def to_counts(self) -> dict[str, float]:
        """Flatten the plan into string-keyed counts for every group."""
        counts = {
            group.value: self.servings.get(group, 0.0) for group in NON_FAT_GROUPS
        }
        if isinstance(self.fat, FatBreakdown):
            counts[FoodExchangeGroup.FATS.value] = 0.0
            counts[FoodExchangeGroup.FATS_SAT.value] = self.fat.sat
            counts[FoodExchangeGroup.FATS_MUFA.value] = self.fat.mufa
            counts[FoodExchangeGroup.FATS_PUFA.value] = self.fat.pufa
        else:
            counts[FoodExchangeGroup.FATS.value] = self.fat.serves
            for group in FAT_SUBTYPES:
                counts[group.value] = 0.0
        return counts


@dataclass(frozen=True)
class MealDistribution:
    """Servings allocated to each meal slot, per group."""

    allocations: Mapping[FoodExchangeGroup, Mapping[MealSlot, float]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        frozen = {
            group: MappingProxyType(dict(slots))
            for group, slots in self.allocations.items()
        }
        object.__setattr__(self, "allocations", MappingProxyType(frozen))

    @classmethod
    def from_nested(
        cls, nested: Mapping[str, Mapping[str, float]]
    ) -> "MealDistribution":
        """Build a distribution from string-keyed ``{group: {slot: n}}`` data."""
        return cls(
            allocations={
                FoodExchangeGroup(group): {
                    MealSlot(slot): float(value) for slot, value in slots.items()
                }
                for group, slots in nested.items()
            }
        )

    def get(self, group: FoodExchangeGroup, slot: MealSlot) -> float:
        """Return servings of ``group`` placed in ``slot``."""
        return self.allocations.get(group, {}).get(slot, 0.0)

    def distributed(self, group: FoodExchangeGroup) -> float:
        """Return the total servings of ``group`` across all slots."""
        return sum(self.get(group, slot) for slot in MealSlot)

    def to_nested(self) -> dict[str, dict[str, float]]:
        """Return string-keyed allocations for every group and slot."""
        return {
            group.value: {slot.value: self.get(group, slot) for slot in MealSlot}
            for group in FoodExchangeGroup
        }


@dataclass(frozen=True)
class MacroTotals:
    """Nutrient totals for a set of servings."""

    cho: float = 0.0
    pro: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    kcal: float = 0.0
    kcal_by_subtype: Mapping[FoodExchangeGroup, float] = field(
        default_factory=lambda: dict.fromkeys(FAT_SUBTYPES, 0.0)
    )

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            cho=self.cho + other.cho,
            pro=self.pro + other.pro,
            fat=self.fat + other.fat,
            fiber=self.fiber + other.fiber,
            kcal=self.kcal + other.kcal,
            kcal_by_subtype={
                group: self.kcal_by_subtype.get(group, 0.0)
                + other.kcal_by_subtype.get(group, 0.0)
                for group in FAT_SUBTYPES
            },
        )


@dataclass(frozen=True)
class EnergySplit:
    """Percent of energy contributed by each macronutrient."""

    cho: float
    pro: float
    fat: float


class TargetMode(StrEnum):
    """How macro targets were entered."""

    NONE = "none"
    GRAMS = "grams"
    PERCENT = "percent"


@dataclass(frozen=True)
class MacroValues:
    """A CHO/PRO/fat triple."""

    cho: float = 0.0
    pro: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class MacroTarget:
    """Daily targets entered by the dietitian."""

    target_kcal: float = 0.0
    mode: TargetMode = TargetMode.NONE
    grams: MacroValues = field(default_factory=MacroValues)
    percent: MacroValues = field(default_factory=MacroValues)


@dataclass(frozen=True)
class MacroReconciliation:
    """Comparison of computed totals against macro targets.

    ``remaining_kcal`` is measured against the energy implied by the macro
    targets, falling back to ``target_kcal`` when no macro targets are set.
    ``remaining_target_kcal`` is always measured against ``target_kcal``.
    """

    mode: TargetMode
    target_grams: MacroValues
    target_percent: MacroValues
    percent_total: float
    target_kcal_from_macros: float
    achievement_percent: MacroValues
    kcal_achievement_percent: float
    energy_percent_of_target: MacroValues
    remaining_grams: MacroValues
    remaining_kcal: float
    remaining_target_kcal: float
