"""Domain models for anthropometric and metabolic calculations."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the predictive equations."""

    MALE = "male"
    FEMALE = "female"


class ChangeDuration(StrEnum):
    """Period over which a weight change was observed."""

    NONE = "none"
    ONE_WEEK = "1-week"
    ONE_MONTH = "1-month"
    THREE_MONTHS = "3-months"
    SIX_MONTHS = "6-months"
    ONE_YEAR = "1-year"

    @property
    def threshold(self) -> float:
        """Weight-loss percent that marks significant loss for the period."""
        return _CHANGE_THRESHOLDS[self]


_CHANGE_THRESHOLDS: dict[ChangeDuration, float] = {
    ChangeDuration.NONE: 0.0,
    ChangeDuration.ONE_WEEK: 2.0,
    ChangeDuration.ONE_MONTH: 5.0,
    ChangeDuration.THREE_MONTHS: 7.5,
    ChangeDuration.SIX_MONTHS: 10.0,
    ChangeDuration.ONE_YEAR: 20.0,
}


class ActivityLevel(StrEnum):
    """Physical activity level mapped to a TEE multiplier."""

    NONE = "none"
    SEDENTARY = "sedentary"
    MILD = "mild"
    MODERATE = "moderate"
    HEAVY = "heavy"
    VERY_ACTIVE = "very-active"

    @property
    def factor(self) -> float:
        """Multiplier applied to BMR."""
        return _ACTIVITY_FACTORS[self]


_ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.NONE: 0.0,
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.MILD: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.HEAVY: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


class FluidSeverity(StrEnum):
    """Clinical grade of ascites or edema."""

    NONE = "none"
    MINIMAL = "minimal"
    MODERATE = "moderate"
    SEVERE = "severe"


ASCITES_CORRECTION_KG: dict[FluidSeverity, float] = {
    FluidSeverity.NONE: 0.0,
    FluidSeverity.MINIMAL: 2.2,
    FluidSeverity.MODERATE: 6.0,
    FluidSeverity.SEVERE: 14.0,
}

EDEMA_CORRECTION_KG: dict[FluidSeverity, float] = {
    FluidSeverity.NONE: 0.0,
    FluidSeverity.MINIMAL: 1.0,
    FluidSeverity.MODERATE: 5.0,
    FluidSeverity.SEVERE: 10.0,
}


class WeightLossSeverity(StrEnum):
    """Malnutrition grade derived from recent weight loss."""

    NONE = "none"
    MODERATE = "moderate"
    SEVERE = "severe"


class BmiClassification(StrEnum):
    """Adult BMI category."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class WaistClassification(StrEnum):
    """Waist circumference category."""

    BELOW_NORMAL = "below-normal"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


@dataclass(frozen=True)
class AnthropometricInput:
    """Inputs entered for a single metabolic assessment."""

    gender: Gender
    age: int
    height_cm: float
    current_weight: float
    selected_weight: float
    usual_weight: float = 0.0
    change_duration: ChangeDuration = ChangeDuration.NONE
    physical_activity: ActivityLevel = ActivityLevel.NONE
    ascites: FluidSeverity = FluidSeverity.NONE
    edema: FluidSeverity = FluidSeverity.NONE
    deficit: float = 0.0
    waist_cm: float | None = None
    hip_cm: float | None = None
    mac_cm: float | None = None
    tsf_cm: float | None = None

    @property
    def ascites_kg(self) -> float:
        """Fluid correction for ascites in kg."""
        return ASCITES_CORRECTION_KG[self.ascites]

    @property
    def edema_kg(self) -> float:
        """Fluid correction for edema in kg."""
        return EDEMA_CORRECTION_KG[self.edema]


@dataclass(frozen=True)
class BmiResult:
    """BMI value with its category; category is None for unusable input."""

    value: float
    classification: BmiClassification | None


@dataclass(frozen=True)
class EnergyEstimate:
    """BMR with total and deficit-adjusted energy expenditure."""

    bmr: float
    tee: float
    estimated_tee: float


@dataclass(frozen=True)
class EquationResult:
    """One predictive equation evaluated on dry and selected weight."""

    actual: EnergyEstimate
    selected: EnergyEstimate


@dataclass(frozen=True)
class WeightProtocol:
    """Dosing-weight recommendation based on the 30% rule."""

    ibw_margin: float
    threshold: float
    is_high_obesity: bool
    recommended_weight: float
    use_adjusted_weight: bool


@dataclass(frozen=True)
class KcalPerKgTables:
    """Energy needs from fixed kcal/kg factors."""

    underweight: tuple[float, float, float]
    normal: tuple[float, float, float]
    overweight: tuple[float, float, float]
    actual: tuple[float, float, float, float]
    selected: tuple[float, float, float, float]


@dataclass(frozen=True)
class MetabolicResult:
    """Everything derived from one AnthropometricInput."""

    dry_weight: float
    weight_loss_percent: float
    weight_loss_severity: WeightLossSeverity
    bmi_actual: BmiResult
    bmi_selected: BmiResult
    ibw_simple: float
    ibw_accurate: float
    abw_simple: float
    abw_accurate: float
    ibw_simple_diff_percent: float
    ibw_accurate_diff_percent: float
    harris_benedict: EquationResult
    mifflin_st_jeor: EquationResult
    waist: WaistClassification | None
    protocol: WeightProtocol
    kcal_per_kg: KcalPerKgTables
