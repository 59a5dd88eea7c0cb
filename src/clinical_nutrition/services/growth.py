"""Growth-reference percentile classification."""

from dataclasses import dataclass

from clinical_nutrition.data.growth_tables import GROWTH_TABLES
from clinical_nutrition.domain.anthropometrics import Gender
from clinical_nutrition.domain.growth import (
    GrowthSeverity,
    GrowthStandard,
    GrowthUnavailable,
    MeasurementType,
    PercentileBand,
    PercentileClassification,
    PercentilePoint,
    PercentileTable,
)

_BAND_SEVERITY = {
    PercentileBand.BELOW_3RD: GrowthSeverity.HIGH,
    PercentileBand.P3_TO_P15: GrowthSeverity.MODERATE,
    PercentileBand.P15_TO_P50: GrowthSeverity.NORMAL,
    PercentileBand.P50_TO_P85: GrowthSeverity.NORMAL,
    PercentileBand.P85_TO_P97: GrowthSeverity.MODERATE,
    PercentileBand.ABOVE_97TH: GrowthSeverity.HIGH,
}


@dataclass
class GrowthPercentileClassifier:
    """Places a measurement between the percentiles of its reference row."""

    tables: tuple[PercentileTable, ...] = GROWTH_TABLES

    def candidate_tables(
        self,
        standard: GrowthStandard,
        measurement: MeasurementType,
        age_years: float,
    ) -> list[PercentileTable]:
        """Tables for the standard and measurement whose age range covers age."""
        return [
            table
            for table in self.tables
            if table.standard is standard
            and table.measurement is measurement
            and table.age_range.covers(age_years)
        ]

    def classify(
        self,
        standard: GrowthStandard,
        measurement: MeasurementType,
        gender: Gender,
        age_years: float,
        value: float,
    ) -> PercentileClassification | GrowthUnavailable:
        """Classify ``value`` against the nearest-age row of the first table.

        Infant tables are indexed in months; the age is converted before the
        nearest row is chosen. Ties between two rows go to the earlier one.
        """
        if value <= 0:
            return GrowthUnavailable(reason="measurement must be positive")
        tables = self.candidate_tables(standard, measurement, age_years)
        if not tables:
            return GrowthUnavailable(
                reason=f"no {standard} {measurement} reference for age {age_years}"
            )
        table = tables[0]
        rows = table.rows(gender)
        if not rows:
            return GrowthUnavailable(reason=f"table {table.id} has no {gender} rows")
        age = table.age_range.table_age(age_years)
        reference = min(rows, key=lambda row: abs(row.age - age))
        band = percentile_band(reference, value)
        return PercentileClassification(
            band=band,
            severity=_BAND_SEVERITY[band],
            reference=reference,
            table_id=table.id,
        )


def percentile_band(row: PercentilePoint, value: float) -> PercentileBand:
    """Return the first band whose upper percentile exceeds ``value``.

    Percentiles missing from a sparse row are skipped, so their band is never
    reported.
    """
    bounds = (
        (row.p3, PercentileBand.BELOW_3RD),
        (row.p15, PercentileBand.P3_TO_P15),
        (row.p50, PercentileBand.P15_TO_P50),
        (row.p85, PercentileBand.P50_TO_P85),
        (row.p97, PercentileBand.P85_TO_P97),
    )
    for upper, band in bounds:
        if upper is not None and value < upper:
            return band
    return PercentileBand.ABOVE_97TH
