"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from clinical_nutrition.config import Settings
from clinical_nutrition.containers import AppContainer
from clinical_nutrition.domain.anthropometrics import (
    ActivityLevel,
    AnthropometricInput,
    Gender,
)
from clinical_nutrition.domain.records import SavedRecord, ToolType
from clinical_nutrition.domain.templates import DietType
from clinical_nutrition.services.cache import InMemoryCache
from clinical_nutrition.services.distribution import MealDistributionValidator
from clinical_nutrition.services.estimates import HeightEstimator
from clinical_nutrition.services.exchanges import ExchangeMacroEngine
from clinical_nutrition.services.growth import GrowthPercentileClassifier
from clinical_nutrition.services.metabolic import MetabolicProfileCalculator
from clinical_nutrition.services.records import PlannerRecordService, RecordRepository
from clinical_nutrition.services.templates import (
    DietTemplateRepository,
    DietTemplateSelector,
    StaticDietTemplateRepository,
)


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory saved-record repository for tests."""

    records: dict[UUID, SavedRecord] = field(default_factory=dict)

    def create_record(
        self, user_id: UUID, tool_type: ToolType, name: str, data: dict[str, object]
    ) -> SavedRecord:
        record = SavedRecord(
            id=uuid4(),
            user_id=user_id,
            tool_type=tool_type,
            name=name,
            data=data,
            created_at=datetime.now(tz=UTC),
        )
        self.records[record.id] = record
        return record

    def update_record(
        self, user_id: UUID, record_id: UUID, name: str, data: dict[str, object]
    ) -> SavedRecord | None:
        current = self.records.get(record_id)
        if current is None or current.user_id != user_id:
            return None
        updated = SavedRecord(
            id=current.id,
            user_id=current.user_id,
            tool_type=current.tool_type,
            name=name,
            data=data,
            created_at=current.created_at,
        )
        self.records[record_id] = updated
        return updated

    def get_record(self, user_id: UUID, record_id: UUID) -> SavedRecord | None:
        record = self.records.get(record_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    def list_records(
        self, user_id: UUID, tool_type: ToolType | None
    ) -> list[SavedRecord]:
        return [
            record
            for record in self.records.values()
            if record.user_id == user_id
            and (tool_type is None or record.tool_type is tool_type)
        ]

    def delete_record(self, user_id: UUID, record_id: UUID) -> bool:
        if self.get_record(user_id, record_id) is None:
            return False
        del self.records[record_id]
        return True


@dataclass
class CountingTemplateRepository(DietTemplateRepository):
    """Static catalog that counts how often it is read."""

    inner: StaticDietTemplateRepository = field(
        default_factory=StaticDietTemplateRepository
    )
    loads: int = 0

    def list_diet_types(self) -> list[DietType]:
        self.loads += 1
        return self.inner.list_diet_types()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
    )


@pytest.fixture
def male_adult() -> AnthropometricInput:
    return AnthropometricInput(
        gender=Gender.MALE,
        age=40,
        height_cm=175,
        current_weight=90,
        selected_weight=80,
        physical_activity=ActivityLevel.SEDENTARY,
    )


@pytest.fixture
def template_selector() -> DietTemplateSelector:
    return DietTemplateSelector(
        repository=CountingTemplateRepository(), cache=InMemoryCache()
    )


@pytest.fixture
def container(
    settings: Settings, template_selector: DietTemplateSelector
) -> AppContainer:
    return AppContainer(
        settings=settings,
        metabolic_calculator=MetabolicProfileCalculator(),
        exchange_engine=ExchangeMacroEngine(),
        distribution_validator=MealDistributionValidator(),
        template_selector=template_selector,
        growth_classifier=GrowthPercentileClassifier(),
        height_estimator=HeightEstimator(),
        record_service=PlannerRecordService(InMemoryRecordRepository()),
    )
