"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from clinical_nutrition.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from clinical_nutrition.adapters.supabase_template_repository import (
    SupabaseDietTemplateRepository,
)
from clinical_nutrition.config import Settings, TemplateSource
from clinical_nutrition.services.cache import InMemoryCache
from clinical_nutrition.services.distribution import MealDistributionValidator
from clinical_nutrition.services.estimates import HeightEstimator
from clinical_nutrition.services.exchanges import ExchangeMacroEngine
from clinical_nutrition.services.growth import GrowthPercentileClassifier
from clinical_nutrition.services.metabolic import MetabolicProfileCalculator
from clinical_nutrition.services.records import PlannerRecordService
from clinical_nutrition.services.templates import (
    DietTemplateRepository,
    DietTemplateSelector,
    StaticDietTemplateRepository,
)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    metabolic_calculator: MetabolicProfileCalculator
    exchange_engine: ExchangeMacroEngine
    distribution_validator: MealDistributionValidator
    template_selector: DietTemplateSelector
    growth_classifier: GrowthPercentileClassifier
    height_estimator: HeightEstimator
    record_service: PlannerRecordService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    template_repository: DietTemplateRepository
    if resolved_settings.template_source is TemplateSource.SUPABASE:
        template_repository = SupabaseDietTemplateRepository(supabase_client)
    else:
        template_repository = StaticDietTemplateRepository()
    template_selector = DietTemplateSelector(
        repository=template_repository,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.template_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        metabolic_calculator=MetabolicProfileCalculator(),
        exchange_engine=ExchangeMacroEngine(),
        distribution_validator=MealDistributionValidator(),
        template_selector=template_selector,
        growth_classifier=GrowthPercentileClassifier(),
        height_estimator=HeightEstimator(),
        record_service=PlannerRecordService(SupabaseRecordRepository(supabase_client)),
    )
