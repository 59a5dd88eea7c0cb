"""Age and height estimation helpers."""

import calendar
from dataclasses import dataclass
from datetime import date

from clinical_nutrition.domain.anthropometrics import Gender
from clinical_nutrition.domain.estimates import (
    CalendarAge,
    HeightEstimate,
    HeightMethod,
)

ULNA_OLDER_ADULT_AGE = 65

ULNA_FORMULA = "BAPEN/MUST chart approximation"
KNEE_FORMULA = "Chumlea et al."

# (slope, intercept) giving height in metres from ulna length in cm
_ULNA_COEFFICIENTS = {
    (Gender.MALE, False): (0.0354, 0.81),
    (Gender.FEMALE, False): (0.0326, 0.80),
    (Gender.MALE, True): (0.0338, 0.79),
    (Gender.FEMALE, True): (0.0353, 0.71),
}

# (knee slope, age slope, intercept) giving height in cm
_KNEE_COEFFICIENTS = {
    Gender.MALE: (2.02, 0.04, 64.19),
    Gender.FEMALE: (1.83, 0.24, 84.88),
}


def calendar_age(date_of_birth: date, report_date: date) -> CalendarAge:
    """Exact age on ``report_date``.

    Missing days are borrowed from the month before the report month and
    missing months from the years. Each part is floored at zero, so a report
    date earlier than the birth date keeps its borrowed months and days.
    """
    years = report_date.year - date_of_birth.year
    months = report_date.month - date_of_birth.month
    days = report_date.day - date_of_birth.day
    if days < 0:
        months -= 1
        days += _days_in_previous_month(report_date)
    if months < 0:
        years -= 1
        months += 12
    return CalendarAge(
        years=max(0, years), months=max(0, months), days=max(0, days)
    )


def _days_in_previous_month(day: date) -> int:
    if day.month == 1:
        return calendar.monthrange(day.year - 1, 12)[1]
    return calendar.monthrange(day.year, day.month - 1)[1]


@dataclass
class HeightEstimator:
    """Estimates standing height from ulna length or knee height."""

    def estimate_ulna(
        self, gender: Gender, age: float, ulna_cm: float
    ) -> HeightEstimate | None:
        """Height from ulna length; None for a missing measurement."""
        if ulna_cm <= 0:
            return None
        slope, intercept = _ULNA_COEFFICIENTS[
            (gender, age >= ULNA_OLDER_ADULT_AGE)
        ]
        height_m = slope * ulna_cm + intercept
        return HeightEstimate(
            height_cm=round(height_m * 100, 1),
            method=HeightMethod.ULNA,
            formula=ULNA_FORMULA,
        )

    def estimate_knee(
        self, gender: Gender, age: float, knee_height_cm: float
    ) -> HeightEstimate | None:
        """Height from knee height; None for a missing measurement."""
        if knee_height_cm <= 0:
            return None
        knee_slope, age_slope, intercept = _KNEE_COEFFICIENTS[gender]
        height_cm = knee_slope * knee_height_cm - age_slope * age + intercept
        return HeightEstimate(
            height_cm=round(height_cm, 1),
            method=HeightMethod.KNEE,
            formula=KNEE_FORMULA,
        )

    def estimate(
        self, method: HeightMethod, gender: Gender, age: float, measurement_cm: float
    ) -> HeightEstimate | None:
        """Dispatch to the estimator for ``method``."""
        if method is HeightMethod.ULNA:
            return self.estimate_ulna(gender, age, measurement_cm)
        return self.estimate_knee(gender, age, measurement_cm)
