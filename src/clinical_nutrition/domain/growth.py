"""Domain models for growth-reference percentiles."""

from dataclasses import dataclass
from enum import StrEnum

from clinical_nutrition.domain.anthropometrics import Gender

MONTHS_PER_YEAR = 12


class GrowthStandard(StrEnum):
    """Growth reference publisher."""

    WHO = "WHO"
    CDC = "CDC"


class MeasurementType(StrEnum):
    """Measured quantity; infant length is reported as height."""

    BMI = "bmi"
    WEIGHT = "weight"
    HEIGHT = "height"


class AgeRange(StrEnum):
    """Age coverage of a reference table."""

    INFANT = "0-36m"
    CHILD = "2-20y"
    SCHOOL_AGE = "5-19y"

    @property
    def in_months(self) -> bool:
        """True when table ages are expressed in months."""
        return self is AgeRange.INFANT

    def covers(self, age_years: float) -> bool:
        """Return True when ``age_years`` lies inside the range."""
        lower, upper = _AGE_BOUNDS_YEARS[self]
        return lower <= age_years <= upper

    def table_age(self, age_years: float) -> float:
        """Convert an age in years to the unit used by the table."""
        if self.in_months:
            return age_years * MONTHS_PER_YEAR
        return age_years


_AGE_BOUNDS_YEARS: dict[AgeRange, tuple[float, float]] = {
    AgeRange.INFANT: (0.0, 3.0),
    AgeRange.CHILD: (2.0, 20.0),
    AgeRange.SCHOOL_AGE: (5.0, 19.0),
}


class PercentileBand(StrEnum):
    """Interval between reference percentiles."""

    BELOW_3RD = "<3rd"
    P3_TO_P15 = "3rd-15th"
    P15_TO_P50 = "15th-50th"
    P50_TO_P85 = "50th-85th"
    P85_TO_P97 = "85th-97th"
    ABOVE_97TH = ">97th"


class GrowthSeverity(StrEnum):
    """Clinical attention level for a band."""

    HIGH = "high"
    MODERATE = "moderate"
    NORMAL = "normal"


@dataclass(frozen=True)
class PercentilePoint:
    """Reference percentiles at one age; sparse rows omit p15/p85."""

    age: float
    p3: float
    p50: float
    p97: float
    p15: float | None = None
    p85: float | None = None


@dataclass(frozen=True)
class PercentileTable:
    """Reference rows for one standard, measurement and age range."""

    id: str
    label: str
    standard: GrowthStandard
    measurement: MeasurementType
    age_range: AgeRange
    male: tuple[PercentilePoint, ...]
    female: tuple[PercentilePoint, ...]

    def rows(self, gender: Gender) -> tuple[PercentilePoint, ...]:
        """Return the rows for ``gender``."""
        if gender is Gender.MALE:
            return self.male
        return self.female


@dataclass(frozen=True)
class PercentileClassification:
    """Band and severity of a measurement against its reference row."""

    band: PercentileBand
    severity: GrowthSeverity
    reference: PercentilePoint
    table_id: str


@dataclass(frozen=True)
class GrowthUnavailable:
    """No reference data applies to the request."""

    reason: str
