"""Anthropometric and metabolic profile calculations."""

from collections.abc import Callable
from dataclasses import dataclass

from clinical_nutrition.domain.anthropometrics import (
    AnthropometricInput,
    BmiClassification,
    BmiResult,
    ChangeDuration,
    EnergyEstimate,
    EquationResult,
    Gender,
    KcalPerKgTables,
    MetabolicResult,
    WaistClassification,
    WeightLossSeverity,
    WeightProtocol,
)

BMI_UNDERWEIGHT_BELOW = 18.5
BMI_NORMAL_BELOW = 25.0
BMI_OVERWEIGHT_BELOW = 30.0

ONE_WEEK_MODERATE_FROM = 1.0
ONE_WEEK_MODERATE_TO = 2.0

IBW_PROTOCOL_MARGIN = 0.30

_ADJUSTMENT_FACTOR = {Gender.MALE: 0.38, Gender.FEMALE: 0.32}
_IBW_ACCURATE_BASE = {Gender.MALE: 50.0, Gender.FEMALE: 45.5}

# (below normal under, normal up to, overweight up to) in cm
_WAIST_LIMITS = {Gender.MALE: (78.0, 94.0, 102.0), Gender.FEMALE: (64.0, 80.0, 88.0)}

_METHOD1_FACTORS = {
    BmiClassification.UNDERWEIGHT: (35.0, 40.0, 45.0),
    BmiClassification.NORMAL: (30.0, 35.0, 40.0),
    BmiClassification.OVERWEIGHT: (20.0, 30.0, 35.0),
}
_METHOD2_FACTORS = (25.0, 30.0, 35.0, 40.0)

BmrEquation = Callable[[Gender, float, float, float], float]


@dataclass
class MetabolicProfileCalculator:
    """Computes a full metabolic profile from anthropometric inputs.

    Every call recomputes the result from scratch; degenerate inputs such as a
    zero height produce zeros instead of raising.
    """

    def compute(self, data: AnthropometricInput) -> MetabolicResult:
        """Return the metabolic profile for ``data``."""
        dry_weight = max(0.0, data.current_weight - data.ascites_kg - data.edema_kg)
        weight_loss = weight_loss_percent(data.usual_weight, dry_weight)

        ibw_simple = ideal_body_weight_simple(data.height_cm)
        ibw_accurate = ideal_body_weight_accurate(data.gender, data.height_cm)
        abw_simple = adjusted_body_weight(data.gender, dry_weight, ibw_simple)
        abw_accurate = adjusted_body_weight(data.gender, dry_weight, ibw_accurate)

        height_m = data.height_cm / 100
        activity = data.physical_activity.factor

        def estimate(equation: BmrEquation, weight: float) -> EnergyEstimate:
            bmr = equation(data.gender, weight, data.height_cm, data.age)
            tee = bmr * activity
            return EnergyEstimate(bmr=bmr, tee=tee, estimated_tee=tee - data.deficit)

        return MetabolicResult(
            dry_weight=dry_weight,
            weight_loss_percent=weight_loss,
            weight_loss_severity=classify_weight_loss(
                weight_loss, data.change_duration
            ),
            bmi_actual=body_mass_index(data.current_weight, height_m),
            bmi_selected=body_mass_index(data.selected_weight, height_m),
            ibw_simple=ibw_simple,
            ibw_accurate=ibw_accurate,
            abw_simple=abw_simple,
            abw_accurate=abw_accurate,
            ibw_simple_diff_percent=_diff_percent(dry_weight, ibw_simple),
            ibw_accurate_diff_percent=_diff_percent(dry_weight, ibw_accurate),
            harris_benedict=EquationResult(
                actual=estimate(harris_benedict_bmr, dry_weight),
                selected=estimate(harris_benedict_bmr, data.selected_weight),
            ),
            mifflin_st_jeor=EquationResult(
                actual=estimate(mifflin_st_jeor_bmr, dry_weight),
                selected=estimate(mifflin_st_jeor_bmr, data.selected_weight),
            ),
            waist=classify_waist(data.gender, data.waist_cm),
            protocol=dosing_weight_protocol(dry_weight, ibw_accurate, abw_accurate),
            kcal_per_kg=_kcal_per_kg(dry_weight, data.selected_weight),
        )


def weight_loss_percent(usual_weight: float, dry_weight: float) -> float:
    """Percent of usual weight lost; 0 when usual weight is unknown."""
    if usual_weight <= 0:
        return 0.0
    return max(0.0, (usual_weight - dry_weight) / usual_weight * 100)


def classify_weight_loss(
    percent: float, duration: ChangeDuration
) -> WeightLossSeverity:
    """Grade weight loss against the threshold of its observation period.

    Outside the one-week window the moderate grade requires the loss to equal
    the threshold exactly.
    """
    if duration is ChangeDuration.NONE:
        return WeightLossSeverity.NONE
    if duration is ChangeDuration.ONE_WEEK:
        if ONE_WEEK_MODERATE_FROM <= percent <= ONE_WEEK_MODERATE_TO:
            return WeightLossSeverity.MODERATE
        if percent > ONE_WEEK_MODERATE_TO:
            return WeightLossSeverity.SEVERE
        return WeightLossSeverity.NONE
    threshold = duration.threshold
    if percent == threshold:
        return WeightLossSeverity.MODERATE
    if percent > threshold:
        return WeightLossSeverity.SEVERE
    return WeightLossSeverity.NONE


def ideal_body_weight_simple(height_cm: float) -> float:
    """Broca index: height minus 100, floored at zero."""
    return max(0.0, height_cm - 100)


def ideal_body_weight_accurate(gender: Gender, height_cm: float) -> float:
    """Gender-specific IBW from height above 154 cm."""
    return (height_cm - 154) * 0.9 + _IBW_ACCURATE_BASE[gender]


def adjusted_body_weight(gender: Gender, weight: float, ibw: float) -> float:
    """Adjusted body weight relative to ``ibw``."""
    return (weight - ibw) * _ADJUSTMENT_FACTOR[gender] + ibw


def body_mass_index(weight: float, height_m: float) -> BmiResult:
    """Return BMI and its category, or a zero result for unusable input."""
    if weight <= 0 or height_m <= 0:
        return BmiResult(value=0.0, classification=None)
    value = weight / (height_m * height_m)
    return BmiResult(value=value, classification=classify_bmi(value))


def classify_bmi(value: float) -> BmiClassification:
    """Map a BMI value to its adult category."""
    if value < BMI_UNDERWEIGHT_BELOW:
        return BmiClassification.UNDERWEIGHT
    if value < BMI_NORMAL_BELOW:
        return BmiClassification.NORMAL
    if value < BMI_OVERWEIGHT_BELOW:
        return BmiClassification.OVERWEIGHT
    return BmiClassification.OBESE


def harris_benedict_bmr(
    gender: Gender, weight: float, height_cm: float, age: float
) -> float:
    """Harris-Benedict basal metabolic rate in kcal/day."""
    if gender is Gender.MALE:
        return 66.5 + 13.75 * weight + 5.003 * height_cm - 6.75 * age
    return 655.1 + 9.563 * weight + 1.85 * height_cm - 4.676 * age


def mifflin_st_jeor_bmr(
    gender: Gender, weight: float, height_cm: float, age: float
) -> float:
    """Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * weight + 6.25 * height_cm - 5 * age
    if gender is Gender.MALE:
        return base + 5
    return base - 161


def classify_waist(
    gender: Gender, waist_cm: float | None
) -> WaistClassification | None:
    """Classify waist circumference; None when not measured."""
    if waist_cm is None or waist_cm <= 0:
        return None
    below, normal_to, overweight_to = _WAIST_LIMITS[gender]
    if waist_cm < below:
        return WaistClassification.BELOW_NORMAL
    if waist_cm <= normal_to:
        return WaistClassification.NORMAL
    if waist_cm <= overweight_to:
        return WaistClassification.OVERWEIGHT
    return WaistClassification.OBESE


def dosing_weight_protocol(
    dry_weight: float, ibw: float, abw: float
) -> WeightProtocol:
    """Pick ideal or adjusted weight: adjusted once weight exceeds IBW by 30%."""
    margin = ibw * IBW_PROTOCOL_MARGIN
    threshold = ibw + margin
    high_obesity = dry_weight > threshold
    return WeightProtocol(
        ibw_margin=margin,
        threshold=threshold,
        is_high_obesity=high_obesity,
        recommended_weight=abw if high_obesity else ibw,
        use_adjusted_weight=high_obesity,
    )


def _diff_percent(weight: float, ibw: float) -> float:
    if weight <= 0:
        return 0.0
    return (weight - ibw) / weight * 100


def _kcal_per_kg(dry_weight: float, selected_weight: float) -> KcalPerKgTables:
    def scaled(weight: float, factors: tuple[float, ...]) -> tuple[float, ...]:
        return tuple(weight * factor for factor in factors)

    return KcalPerKgTables(
        underweight=scaled(
            selected_weight, _METHOD1_FACTORS[BmiClassification.UNDERWEIGHT]
        ),
        normal=scaled(selected_weight, _METHOD1_FACTORS[BmiClassification.NORMAL]),
        overweight=scaled(
            selected_weight, _METHOD1_FACTORS[BmiClassification.OVERWEIGHT]
        ),
        actual=scaled(dry_weight, _METHOD2_FACTORS),
        selected=scaled(selected_weight, _METHOD2_FACTORS),
    )
