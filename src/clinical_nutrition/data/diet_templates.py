"""Shipped diet-template catalog.

Each table lists ``(kcal, *servings)`` in the order of its column tuple.
"""

from clinical_nutrition.domain.exchanges import FoodExchangeGroup as G
from clinical_nutrition.domain.templates import (
    DietDistribution,
    DietTemplateRow,
    DietType,
)

_FAT_BREAKDOWN_COLUMNS = (
    G.STARCH,
    G.VEG,
    G.FRUIT,
    G.LEGUMES,
    G.MILK_SKIM,
    G.MEAT_LEAN,
    G.FATS_SAT,
    G.FATS_MUFA,
    G.FATS_PUFA,
    G.SUGAR,
)

_AGGREGATE_FAT_COLUMNS = (
    G.STARCH,
    G.VEG,
    G.FRUIT,
    G.LEGUMES,
    G.MILK_SKIM,
    G.MILK_LOW,
    G.MEAT_LEAN,
    G.FATS,
    G.SUGAR,
)


def _rows(
    columns: tuple[G, ...], table: tuple[tuple[float, ...], ...]
) -> tuple[DietTemplateRow, ...]:
    return tuple(
        DietTemplateRow(
            energy_tier=int(kcal), exchanges=dict(zip(columns, servings, strict=True))
        )
        for kcal, *servings in table
    )


DIABETIC = DietType(
    id="diabetic",
    name="Diabetic",
    distributions=(
        DietDistribution(
            id="cho50-pro20-fat30",
            label="50% CHO / 20% PRO / 30% Fat",
            rows=_rows(
                _FAT_BREAKDOWN_COLUMNS,
                (
                    (1200, 5, 3, 2, 0.5, 2, 3, 1, 2, 1, 0),
                    (1400, 6, 3, 3, 0.5, 2, 3, 1, 2, 1, 0),
                    (1600, 7, 4, 3, 1, 2, 4, 1, 2, 2, 0),
                    (1800, 8, 4, 3, 1, 2, 5, 1, 3, 2, 0),
                    (2000, 9, 5, 4, 1, 2, 5, 2, 3, 2, 0),
                ),
            ),
        ),
        DietDistribution(
            id="cho45-pro20-fat35",
            label="45% CHO / 20% PRO / 35% Fat",
            rows=_rows(
                _FAT_BREAKDOWN_COLUMNS,
                (
                    (1200, 4, 3, 2, 0.5, 2, 3, 1, 3, 1, 0),
                    (1400, 5, 3, 2, 0.5, 2, 4, 1, 3, 2, 0),
                    (1600, 6, 4, 2, 1, 2, 4, 1, 4, 2, 0),
                    (1800, 7, 4, 3, 1, 2, 5, 2, 4, 2, 0),
                    (2000, 8, 5, 3, 1, 2, 5, 2, 5, 2, 0),
                ),
            ),
        ),
    ),
)

WEIGHT_MANAGEMENT = DietType(
    id="weight-management",
    name="Weight Management",
    distributions=(
        DietDistribution(
            id="balanced",
            label="Balanced",
            rows=_rows(
                _AGGREGATE_FAT_COLUMNS,
                (
                    (1200, 5, 4, 2, 0, 0, 2, 3, 3, 0),
                    (1400, 6, 4, 3, 0, 0, 2, 3, 3, 0),
                    (1600, 7, 4, 3, 0.5, 0, 2, 4, 4, 0),
                    (1800, 8, 5, 3, 0.5, 0, 2, 4, 5, 1),
                ),
            ),
        ),
        DietDistribution(
            id="high-protein",
            label="High Protein",
            rows=_rows(
                _AGGREGATE_FAT_COLUMNS,
                (
                    (1200, 3, 5, 2, 1, 2, 0, 5, 2, 0),
                    (1400, 4, 5, 2, 1, 2, 0, 6, 3, 0),
                    (1600, 5, 5, 2, 1, 2, 0, 7, 3, 0),
                ),
            ),
        ),
    ),
)

DIET_TEMPLATES: tuple[DietType, ...] = (DIABETIC, WEIGHT_MANAGEMENT)
