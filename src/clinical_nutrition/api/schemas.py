"""Pydantic request models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field, NonNegativeFloat

from clinical_nutrition.domain.anthropometrics import (
    ActivityLevel,
    AnthropometricInput,
    ChangeDuration,
    FluidSeverity,
    Gender,
)
from clinical_nutrition.domain.estimates import HeightMethod
from clinical_nutrition.domain.exchanges import (
    FoodExchangeGroup,
    MacroTarget,
    MacroValues,
    MealDistribution,
    MealSlot,
    ServingPlan,
    TargetMode,
)
from clinical_nutrition.domain.growth import GrowthStandard, MeasurementType
from clinical_nutrition.domain.records import ToolType


class MetabolicRequest(BaseModel):
    """Anthropometric and clinical inputs."""

    gender: Gender
    age: int = Field(ge=0)
    height_cm: NonNegativeFloat
    current_weight: NonNegativeFloat
    selected_weight: NonNegativeFloat
    usual_weight: NonNegativeFloat = 0.0
    change_duration: ChangeDuration = ChangeDuration.NONE
    physical_activity: ActivityLevel = ActivityLevel.NONE
    ascites: FluidSeverity = FluidSeverity.NONE
    edema: FluidSeverity = FluidSeverity.NONE
    deficit: NonNegativeFloat = 0.0
    waist_cm: NonNegativeFloat | None = None
    hip_cm: NonNegativeFloat | None = None
    mac_cm: NonNegativeFloat | None = None
    tsf_cm: NonNegativeFloat | None = None

    def to_input(self) -> AnthropometricInput:
        """Convert into the calculator's input record."""
        return AnthropometricInput(**self.model_dump())


class MacroValuesModel(BaseModel):
    """CHO/PRO/fat triple."""

    cho: NonNegativeFloat = 0.0
    pro: NonNegativeFloat = 0.0
    fat: NonNegativeFloat = 0.0

    def to_values(self) -> MacroValues:
        return MacroValues(cho=self.cho, pro=self.pro, fat=self.fat)


class MacroTargetModel(BaseModel):
    """Daily targets for reconciliation."""

    target_kcal: NonNegativeFloat = 0.0
    mode: TargetMode = TargetMode.NONE
    grams: MacroValuesModel = Field(default_factory=MacroValuesModel)
    percent: MacroValuesModel = Field(default_factory=MacroValuesModel)

    def to_target(self) -> MacroTarget:
        return MacroTarget(
            target_kcal=self.target_kcal,
            mode=self.mode,
            grams=self.grams.to_values(),
            percent=self.percent.to_values(),
        )


class ServingPlanModel(BaseModel):
    """Servings per exchange group, with the fat tracking mode."""

    servings: dict[FoodExchangeGroup, NonNegativeFloat] = Field(default_factory=dict)
    fat_breakdown: bool = False

    def to_plan(self) -> ServingPlan:
        return ServingPlan.from_counts(self.servings, fat_breakdown=self.fat_breakdown)


class ExchangeTotalsRequest(ServingPlanModel):
    """Serving plan with optional targets."""

    target: MacroTargetModel | None = None


class DistributionRequest(ServingPlanModel):
    """Serving plan with its per-meal allocations."""

    distribution: dict[FoodExchangeGroup, dict[MealSlot, NonNegativeFloat]] = Field(
        default_factory=dict
    )

    def to_distribution(self) -> MealDistribution:
        return MealDistribution(allocations=self.distribution)


class GrowthRequest(BaseModel):
    """Measurement to classify against growth references."""

    standard: GrowthStandard
    measurement: MeasurementType
    gender: Gender
    age_years: NonNegativeFloat
    value: float


class HeightRequest(BaseModel):
    """Surrogate measurement for height estimation."""

    method: HeightMethod
    gender: Gender
    age: NonNegativeFloat
    measurement_cm: float


class AgeRequest(BaseModel):
    """Dates for an exact age calculation."""

    date_of_birth: date
    report_date: date


class RecordRequest(BaseModel):
    """Saved tool state."""

    tool_type: ToolType
    name: str = Field(min_length=1)
    data: dict[str, object] = Field(default_factory=dict)
