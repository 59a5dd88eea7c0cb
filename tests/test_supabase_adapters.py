"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from uuid import uuid4

import pytest

from clinical_nutrition.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from clinical_nutrition.adapters.supabase_template_repository import (
    SupabaseDietTemplateRepository,
)
from clinical_nutrition.domain.exchanges import FoodExchangeGroup
from clinical_nutrition.domain.records import ToolType
from clinical_nutrition.services.cache import InMemoryCache
from clinical_nutrition.services.templates import DietTemplateSelector


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _record_row(record_id: str, user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": record_id,
        "user_id": user_id,
        "tool_type": "meal-planner",
        "name": "Week 1",
        "data": {"targetKcal": 1800},
        "created_at": "2024-05-01T10:00:00+00:00",
    }
    row.update(overrides)
    return row


def test_supabase_record_repository_create_and_get() -> None:
    client = FakeSupabaseClient()
    table = client.table("saved_meals")
    record_id, user_id = str(uuid4()), str(uuid4())
    table.queue("insert", [_record_row(record_id, user_id)])
    table.queue("select", [_record_row(record_id, user_id)])

    repository = SupabaseRecordRepository(client)
    created = repository.create_record(
        uuid4(), ToolType.MEAL_PLANNER, "Week 1", {"targetKcal": 1800}
    )
    fetched = repository.get_record(created.user_id, created.id)

    assert str(created.id) == record_id
    assert created.created_at is not None
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["tool_type"] == "meal-planner"
    assert fetched is not None
    assert fetched.data == {"targetKcal": 1800}
    assert ("user_id", user_id) in table.last_filters


def test_supabase_record_repository_create_failure() -> None:
    repository = SupabaseRecordRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.create_record(uuid4(), ToolType.MEAL_PLANNER, "Week 1", {})


def test_supabase_record_repository_update_miss_returns_none() -> None:
    repository = SupabaseRecordRepository(FakeSupabaseClient())

    assert repository.update_record(uuid4(), uuid4(), "Name", {}) is None


def test_supabase_record_repository_list_and_delete() -> None:
    client = FakeSupabaseClient()
    table = client.table("saved_meals")
    user_id = str(uuid4())
    table.queue(
        "select",
        [
            _record_row(str(uuid4()), user_id, tool_type="day-planner"),
            _record_row(str(uuid4()), user_id, created_at=None),
        ],
    )
    table.queue("delete", [{"id": "deleted"}])

    repository = SupabaseRecordRepository(client)
    records = repository.list_records(uuid4(), ToolType.DAY_PLANNER)
    deleted = repository.delete_record(uuid4(), uuid4())

    assert [record.tool_type for record in records] == [
        ToolType.DAY_PLANNER,
        ToolType.MEAL_PLANNER,
    ]
    assert records[1].created_at is None
    assert ("tool_type", "day-planner") in table.last_filters
    assert table.last_order == ("created_at", True)
    assert deleted is True


def test_supabase_template_repository_maps_column_names() -> None:
    client = FakeSupabaseClient()
    client.table("diet_templates").queue(
        "select",
        [
            {
                "id": "renal",
                "name": "Renal",
                "distributions": [
                    {
                        "id": "low-protein",
                        "label": "Low protein",
                        "rows": [
                            {
                                "kcal": 1600,
                                "exchanges": {
                                    "starch": 7,
                                    "milkLow": 1,
                                    "milkMed": 0.5,
                                    "meatLow": 2,
                                    "fatsMufa": 3,
                                    "bread": 9,
                                },
                            }
                        ],
                    }
                ],
            }
        ],
    )

    diet_types = SupabaseDietTemplateRepository(client).list_diet_types()

    row = diet_types[0].distributions[0].rows[0]
    assert diet_types[0].name == "Renal"
    assert row.energy_tier == 1600
    assert row.exchanges == {
        FoodExchangeGroup.STARCH: 7,
        FoodExchangeGroup.MILK_SKIM: 1,
        FoodExchangeGroup.MILK_LOW: 0.5,
        FoodExchangeGroup.MEAT_LEAN: 2,
        FoodExchangeGroup.FATS_MUFA: 3,
    }


def test_selector_reads_remote_catalog() -> None:
    client = FakeSupabaseClient()
    client.table("diet_templates").queue(
        "select",
        [
            {
                "id": "renal",
                "name": "Renal",
                "distributions": [
                    {"id": "low-protein", "rows": [{"kcal": 1600, "exchanges": {}}]}
                ],
            }
        ],
    )
    selector = DietTemplateSelector(
        repository=SupabaseDietTemplateRepository(client), cache=InMemoryCache()
    )

    assert selector.energy_tiers("renal", "low-protein") == [1600]
    assert selector.energy_tiers("renal", "low-protein") == [1600]
