"""Predefined diet-template catalog and lookups."""

import logging
from dataclasses import dataclass
from typing import Protocol

from clinical_nutrition.data.diet_templates import DIET_TEMPLATES
from clinical_nutrition.domain.exchanges import (
    FAT_SUBTYPES,
    FoodExchangeGroup,
    ServingPlan,
)
from clinical_nutrition.domain.templates import (
    DietDistribution,
    DietTemplateRow,
    DietType,
    TemplateNotFound,
)
from clinical_nutrition.services.cache import Cache

_CATALOG_CACHE_KEY = "diet_templates:catalog"

_logger = logging.getLogger(__name__)


class DietTemplateRepository(Protocol):
    """Source of the diet-template catalog."""

    def list_diet_types(self) -> list[DietType]:
        """Return every diet type with its distributions and rows."""


@dataclass
class StaticDietTemplateRepository(DietTemplateRepository):
    """Catalog shipped with the package."""

    diet_types: tuple[DietType, ...] = DIET_TEMPLATES

    def list_diet_types(self) -> list[DietType]:
        """Return the shipped diet types."""
        return list(self.diet_types)


@dataclass
class DietTemplateSelector:
    """Looks up template rows by exact energy tier and turns them into plans."""

    repository: DietTemplateRepository
    cache: Cache
    ttl_seconds: int = 3600
    debug: bool = False

    def catalog(self) -> list[DietType]:
        """Return the catalog, reloading it once the cached copy expires."""
        cached = self.cache.get(_CATALOG_CACHE_KEY)
        if isinstance(cached, list):
            return cached

        diet_types = self.repository.list_diet_types()
        self.cache.set(_CATALOG_CACHE_KEY, diet_types, ttl_seconds=self.ttl_seconds)
        _logger.info("Loaded diet template catalog: diet_types=%s", len(diet_types))
        return diet_types

    def refresh(self) -> list[DietType]:
        """Drop the cached catalog and load it again."""
        self.cache.invalidate(_CATALOG_CACHE_KEY)
        return self.catalog()

    def find_distribution(
        self, diet_type_id: str, distribution_id: str
    ) -> DietDistribution | None:
        """Return a distribution of a diet type, if both exist."""
        for diet_type in self.catalog():
            if diet_type.id != diet_type_id:
                continue
            for distribution in diet_type.distributions:
                if distribution.id == distribution_id:
                    return distribution
        return None

    def energy_tiers(self, diet_type_id: str, distribution_id: str) -> list[int]:
        """Energy tiers offered by a distribution, in catalog order."""
        distribution = self.find_distribution(diet_type_id, distribution_id)
        if distribution is None:
            return []
        return [row.energy_tier for row in distribution.rows]

    def lookup(
        self, diet_type_id: str, distribution_id: str, energy_tier: int
    ) -> DietTemplateRow | TemplateNotFound:
        """Return the row whose tier equals ``energy_tier`` exactly.

        Tiers between two catalog rows are not interpolated.
        """
        distribution = self.find_distribution(diet_type_id, distribution_id)
        if distribution is not None:
            for row in distribution.rows:
                if row.energy_tier == energy_tier:
                    return row
        if self.debug:
            _logger.info(
                "Diet template miss: diet=%s distribution=%s tier=%s",
                diet_type_id,
                distribution_id,
                energy_tier,
            )
        return TemplateNotFound(
            diet_type_id=diet_type_id,
            distribution_id=distribution_id,
            energy_tier=energy_tier,
        )

    def apply(self, row: DietTemplateRow) -> ServingPlan:
        """Copy a row into a plan.

        Rows that name any fat sub-type switch the plan to fat breakdown,
        dropping the aggregate ``fats`` count.
        """
        breakdown = any(group in row.exchanges for group in FAT_SUBTYPES)
        counts = dict(row.exchanges)
        if breakdown:
            counts.pop(FoodExchangeGroup.FATS, None)
        return ServingPlan.from_counts(counts, fat_breakdown=breakdown)
