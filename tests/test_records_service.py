"""Tests for saved planner records."""

from uuid import uuid4

import pytest

from clinical_nutrition.domain.exchanges import (
    FatBreakdown,
    FoodExchangeGroup,
    MacroValues,
    MealDistribution,
    ServingPlan,
)
from clinical_nutrition.domain.records import PlannerSnapshot, ToolType
from clinical_nutrition.services.records import PlannerRecordService
from tests.conftest import InMemoryRecordRepository


def _snapshot() -> PlannerSnapshot:
    return PlannerSnapshot(
        plan=ServingPlan(
            servings=ServingPlan.from_counts({"starch": 6, "veg": 3}).servings,
            fat=FatBreakdown(sat=1, mufa=2, pufa=0.5),
        ),
        distribution=MealDistribution.from_nested(
            {"starch": {"breakfast": 2, "lunch": 2}, "fatsMufa": {"dinner": 1}}
        ),
        target_kcal=1800,
        manual_gram_targets=MacroValues(cho=200, pro=90, fat=60),
        manual_percent_targets=MacroValues(cho=45, pro=20, fat=35),
    )


def test_planner_snapshot_round_trips_through_service() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()
    snapshot = _snapshot()

    record = service.save_planner(user_id, "Week 1", snapshot)
    assert record is not None
    loaded = service.load_planner(user_id, record.id)

    assert loaded is not None
    assert loaded.to_data() == snapshot.to_data()
    assert loaded.plan.fat == FatBreakdown(sat=1, mufa=2, pufa=0.5)


def test_save_with_record_id_overwrites() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()
    record = service.save(user_id, ToolType.KCAL_CALCULATOR, "Visit", {"age": 40})
    assert record is not None

    updated = service.save(
        user_id, ToolType.KCAL_CALCULATOR, "Visit 2", {"age": 41}, record.id
    )

    assert updated is not None
    assert updated.id == record.id
    assert updated.data == {"age": 41}
    assert len(service.list_records(user_id)) == 1


def test_update_of_foreign_record_is_rejected() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    record = service.save(uuid4(), ToolType.MEAL_CREATOR, "Lunch", {})
    assert record is not None

    result = service.save(uuid4(), ToolType.MEAL_CREATOR, "Lunch", {}, record.id)

    assert result is None


def test_list_filters_by_tool_type() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()
    service.save(user_id, ToolType.MEAL_PLANNER, "Plan", {})
    service.save(user_id, ToolType.DAY_PLANNER, "Day", {})

    records = service.list_records(user_id, ToolType.DAY_PLANNER)

    assert [record.name for record in records] == ["Day"]


def test_delete_record() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()
    record = service.save(user_id, ToolType.MEAL_PLANNER, "Plan", {})
    assert record is not None

    assert service.delete(user_id, record.id) is True
    assert service.delete(user_id, record.id) is False
    assert service.load(user_id, record.id) is None


def test_load_planner_ignores_other_tools() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()
    record = service.save(user_id, ToolType.KCAL_CALCULATOR, "Visit", {})
    assert record is not None

    assert service.load_planner(user_id, record.id) is None


def test_snapshot_rejects_unknown_groups() -> None:
    with pytest.raises(ValueError):
        PlannerSnapshot.from_data({"servingsByGroup": {"bread": 2}})


def test_snapshot_serializes_every_group() -> None:
    data = _snapshot().to_data()

    assert data["servingsByGroup"]["fats"] == 0
    assert data["servingsByGroup"]["fatsMufa"] == 2
    assert data["distributionByGroupAndMeal"]["starch"]["snack1"] == 0
    assert data["manualPercentTargets"] == {"cho": 45, "pro": 20, "fat": 35}


def test_save_normalizes_meal_planner_data() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()

    record = service.save(
        user_id, ToolType.MEAL_PLANNER, "Plan", {"servingsByGroup": {"starch": 6}}
    )

    assert record is not None
    assert record.data == PlannerSnapshot.from_data(record.data).to_data()
    loaded = service.load_planner(user_id, record.id)
    assert loaded is not None
    assert loaded.plan.count(FoodExchangeGroup.STARCH) == 6


def test_save_rejects_unknown_planner_group() -> None:
    repository = InMemoryRecordRepository()
    service = PlannerRecordService(repository)

    with pytest.raises(ValueError):
        service.save(
            uuid4(), ToolType.MEAL_PLANNER, "Plan", {"servingsByGroup": {"bread": 2}}
        )

    assert repository.records == {}


def test_update_cannot_change_tool_type() -> None:
    service = PlannerRecordService(InMemoryRecordRepository())
    user_id = uuid4()
    record = service.save(user_id, ToolType.KCAL_CALCULATOR, "Visit", {"age": 40})
    assert record is not None

    with pytest.raises(ValueError):
        service.save(user_id, ToolType.DAY_PLANNER, "Visit", {}, record.id)

    stored = service.load(user_id, record.id)
    assert stored is not None
    assert stored.data == {"age": 40}
