"""Supabase-backed diet-template catalog."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from supabase import Client

from clinical_nutrition.domain.exchanges import FoodExchangeGroup
from clinical_nutrition.domain.templates import (
    DietDistribution,
    DietTemplateRow,
    DietType,
)
from clinical_nutrition.services.templates import DietTemplateRepository

_TABLE = "diet_templates"

# Column names used by the remote table, lowest fat first.
_LEGACY_GROUP_KEYS = {
    "milkLow": FoodExchangeGroup.MILK_SKIM,
    "milkMed": FoodExchangeGroup.MILK_LOW,
    "milkFull": FoodExchangeGroup.MILK_WHOLE,
    "meatLow": FoodExchangeGroup.MEAT_LEAN,
}

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseDietTemplateRepository(DietTemplateRepository):
    """Reads diet types from the ``diet_templates`` table."""

    client: Client

    def list_diet_types(self) -> list[DietType]:
        """Return every diet type, ordered by name."""
        response = (
            self.client.table(_TABLE)
            .select("id, name, distributions")
            .order("name")
            .execute()
        )
        return [_parse_diet_type(row) for row in response.data or []]


def _parse_diet_type(row: dict[str, object]) -> DietType:
    """Parse a ``diet_templates`` row into a domain model."""
    distributions = row.get("distributions") or []
    return DietType(
        id=str(row["id"]),
        name=str(row.get("name") or row["id"]),
        distributions=tuple(
            _parse_distribution(item)
            for item in distributions
            if isinstance(item, Mapping)
        ),
    )


def _parse_distribution(item: Mapping[str, object]) -> DietDistribution:
    rows = item.get("rows") or []
    return DietDistribution(
        id=str(item["id"]),
        label=str(item.get("label") or item["id"]),
        rows=tuple(
            DietTemplateRow(
                energy_tier=int(row["kcal"]),
                exchanges=_parse_exchanges(row.get("exchanges") or {}),
            )
            for row in rows
            if isinstance(row, Mapping)
        ),
    )


def _parse_exchanges(raw: Mapping[str, object]) -> dict[FoodExchangeGroup, float]:
    exchanges: dict[FoodExchangeGroup, float] = {}
    for key, value in raw.items():
        group = _LEGACY_GROUP_KEYS.get(key)
        if group is None:
            try:
                group = FoodExchangeGroup(key)
            except ValueError:
                _logger.warning("Skipping unknown exchange group: %s", key)
                continue
        exchanges[group] = float(value or 0)
    return exchanges
