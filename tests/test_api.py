"""Tests for the HTTP API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from clinical_nutrition.api.app import create_app
from clinical_nutrition.containers import AppContainer
from clinical_nutrition.services.cache import InMemoryCache
from clinical_nutrition.services.templates import DietTemplateSelector
from tests.conftest import CountingTemplateRepository

_AUTH = {"X-Api-Token": "api-token"}


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_lifespan_warms_template_catalog(container: AppContainer) -> None:
    repository = CountingTemplateRepository()
    container.template_selector = DietTemplateSelector(
        repository=repository, cache=InMemoryCache()
    )

    with TestClient(create_app(container)) as client:
        client.get("/templates")

    assert repository.loads == 1


def test_metabolic_endpoint(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/metabolic",
        json={
            "gender": "male",
            "age": 40,
            "height_cm": 175,
            "current_weight": 90,
            "selected_weight": 80,
            "physical_activity": "sedentary",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["bmi_actual"]["classification"] == "overweight"
    assert data["ibw_simple"] == 75
    assert round(data["mifflin_st_jeor"]["actual"]["bmr"], 2) == 1798.75


def test_metabolic_rejects_unknown_enum(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/metabolic",
        json={
            "gender": "male",
            "age": 40,
            "height_cm": 175,
            "current_weight": 90,
            "selected_weight": 80,
            "change_duration": "2-weeks",
        },
    )

    assert response.status_code == 422


def test_exchange_totals_endpoint(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/exchanges/totals",
        json={
            "servings": {"starch": 4, "veg": 6, "fruit": 2},
            "target": {"target_kcal": 2000, "mode": "percent", "percent": {"cho": 50}},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["totals"]["cho"] == 120
    assert data["totals"]["kcal"] == 590
    assert data["reconciliation"]["target_grams"]["cho"] == 250
    assert data["reconciliation"]["achievement_percent"]["cho"] == pytest.approx(48)


def test_distribution_endpoint_reports_over_allocation(
    container: AppContainer,
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/distribution/remainders",
        json={
            "servings": {"starch": 4},
            "distribution": {"starch": {"breakfast": 3, "dinner": 2}},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["remainders"]["starch"] == -1
    assert data["over_allocated"] == ["starch"]
    assert data["allocated"]["starch"] == 5


def test_template_endpoints(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    catalog = client.get("/templates").json()
    tiers = client.get("/templates/diabetic/cho45-pro20-fat35").json()
    plan = client.get("/templates/diabetic/cho45-pro20-fat35/1600")
    missing = client.get("/templates/diabetic/cho45-pro20-fat35/1500")

    assert [item["id"] for item in catalog["diet_types"]] == [
        "diabetic",
        "weight-management",
    ]
    assert tiers["energy_tiers"] == [1200, 1400, 1600, 1800, 2000]
    assert plan.status_code == 200
    assert plan.json()["fat_breakdown"] is True
    assert plan.json()["servings"]["fatsMufa"] == 4
    assert missing.status_code == 404


def test_growth_endpoint(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/growth/classify",
        json={
            "standard": "WHO",
            "measurement": "bmi",
            "gender": "male",
            "age_years": 10,
            "value": 16.4,
        },
    )
    unavailable = client.post(
        "/growth/classify",
        json={
            "standard": "WHO",
            "measurement": "bmi",
            "gender": "male",
            "age_years": 3,
            "value": 16.4,
        },
    )

    assert response.status_code == 200
    assert response.json()["band"] == "50th-85th"
    assert unavailable.status_code == 404


def test_height_and_age_endpoints(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    height = client.post(
        "/height/estimate",
        json={"method": "knee", "gender": "female", "age": 70, "measurement_cm": 50},
    )
    age = client.post(
        "/age", json={"date_of_birth": "2014-06-15", "report_date": "2024-06-15"}
    )

    assert height.json()["estimate"]["height_cm"] == 159.6
    assert age.json() == {
        "years": 10,
        "months": 0,
        "days": 0,
        "total_months": 120,
        "is_pediatric": True,
    }


def test_records_require_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/records", headers={"X-User-Id": str(uuid4())})

    assert response.status_code == 401


def test_records_crud(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    headers = {**_AUTH, "X-User-Id": str(user_id)}

    created = client.post(
        "/records",
        headers=headers,
        json={
            "tool_type": "meal-planner",
            "name": "Week 1",
            "data": {"servingsByGroup": {"starch": 6}, "targetKcal": 1800},
        },
    ).json()["record"]
    record_id = created["id"]
    updated = client.put(
        f"/records/{record_id}",
        headers=headers,
        json={
            "tool_type": "meal-planner",
            "name": "Week 2",
            "data": {"servingsByGroup": {"starch": 7}},
        },
    )
    listed = client.get("/records?tool_type=meal-planner", headers=headers)
    deleted = client.delete(f"/records/{record_id}", headers=headers)
    missing = client.get(f"/records/{record_id}", headers=headers)

    assert created["data"]["servingsByGroup"]["starch"] == 6
    assert created["data"]["servingsByGroup"]["veg"] == 0
    assert created["data"]["targetKcal"] == 1800
    assert updated.json()["record"]["name"] == "Week 2"
    assert updated.json()["record"]["data"]["servingsByGroup"]["starch"] == 7
    assert [item["id"] for item in listed.json()["records"]] == [record_id]
    assert deleted.json() == {"status": "deleted"}
    assert missing.status_code == 404
    assert container.record_service.list_records(user_id) == []


def test_records_reject_malformed_planner_data(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    headers = {**_AUTH, "X-User-Id": str(user_id)}

    response = client.post(
        "/records",
        headers=headers,
        json={
            "tool_type": "meal-planner",
            "name": "Week 1",
            "data": {"servingsByGroup": {"bread": 2}},
        },
    )

    assert response.status_code == 422
    assert "bread" in response.json()["detail"]
    assert container.record_service.list_records(user_id) == []


def test_records_keep_other_tool_data_as_is(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    headers = {**_AUTH, "X-User-Id": str(uuid4())}

    response = client.post(
        "/records",
        headers=headers,
        json={"tool_type": "kcal-calculator", "name": "Visit", "data": {"age": 40}},
    )

    assert response.status_code == 200
    assert response.json()["record"]["data"] == {"age": 40}


def test_record_update_cannot_change_tool_type(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    headers = {**_AUTH, "X-User-Id": str(user_id)}
    record_id = client.post(
        "/records",
        headers=headers,
        json={"tool_type": "kcal-calculator", "name": "Visit", "data": {"age": 40}},
    ).json()["record"]["id"]

    response = client.put(
        f"/records/{record_id}",
        headers=headers,
        json={"tool_type": "day-planner", "name": "Visit", "data": {}},
    )

    assert response.status_code == 422
    records = container.record_service.list_records(user_id)
    assert [record.data for record in records] == [{"age": 40}]
