"""Domain models for predefined diet templates."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from clinical_nutrition.domain.exchanges import FoodExchangeGroup


@dataclass(frozen=True)
class DietTemplateRow:
    """Serving plan for one energy tier."""

    energy_tier: int
    exchanges: Mapping[FoodExchangeGroup, float]


@dataclass(frozen=True)
class DietDistribution:
    """A macro distribution with its ordered tier rows."""

    id: str
    label: str
    rows: tuple[DietTemplateRow, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DietType:
    """A diet type grouping its macro distributions."""

    id: str
    name: str
    distributions: tuple[DietDistribution, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TemplateNotFound:
    """Lookup miss for a diet template row."""

    diet_type_id: str
    distribution_id: str
    energy_tier: int
