"""Domain models for age and height estimation."""

from dataclasses import dataclass
from enum import StrEnum

PEDIATRIC_AGE_LIMIT = 20


@dataclass(frozen=True)
class CalendarAge:
    """Exact age split into years, months and days."""

    years: int
    months: int
    days: int

    @property
    def is_pediatric(self) -> bool:
        """True for patients assessed on pediatric references."""
        return self.years < PEDIATRIC_AGE_LIMIT

    @property
    def total_months(self) -> int:
        """Completed months of age."""
        return self.years * 12 + self.months


class HeightMethod(StrEnum):
    """Surrogate measurement used to estimate height."""

    ULNA = "ulna"
    KNEE = "knee"


@dataclass(frozen=True)
class HeightEstimate:
    """Estimated standing height."""

    height_cm: float
    method: HeightMethod
    formula: str
