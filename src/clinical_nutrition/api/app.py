"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from clinical_nutrition.api.records import router as records_router
from clinical_nutrition.api.schemas import (
    AgeRequest,
    DistributionRequest,
    ExchangeTotalsRequest,
    GrowthRequest,
    HeightRequest,
    MetabolicRequest,
)
from clinical_nutrition.app_logging import configure_logging
from clinical_nutrition.containers import AppContainer
from clinical_nutrition.domain.exchanges import MacroTotals, ServingPlan
from clinical_nutrition.domain.growth import GrowthUnavailable
from clinical_nutrition.domain.templates import DietType, TemplateNotFound
from clinical_nutrition.services.estimates import calendar_age


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.template_selector.catalog()
        except Exception:
            logger.exception("Failed to load diet template catalog")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(records_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/metabolic")
    async def metabolic(
        payload: MetabolicRequest, request: Request
    ) -> dict[str, object]:
        """Compute the metabolic profile for one assessment."""
        state_container: AppContainer = request.app.state.container
        result = state_container.metabolic_calculator.compute(payload.to_input())
        return asdict(result)

    @app.post("/exchanges/totals")
    async def exchange_totals(
        payload: ExchangeTotalsRequest, request: Request
    ) -> dict[str, object]:
        """Macro totals, energy split and optional target reconciliation."""
        engine = request.app.state.container.exchange_engine
        totals = engine.compute_totals(payload.to_plan())
        response: dict[str, object] = {
            "totals": _totals_dict(totals),
            "energy_split": asdict(engine.energy_split(totals)),
        }
        if payload.target is not None:
            reconciliation = engine.reconcile(totals, payload.target.to_target())
            response["reconciliation"] = asdict(reconciliation)
        return response

    @app.post("/distribution/remainders")
    async def distribution_remainders(
        payload: DistributionRequest, request: Request
    ) -> dict[str, object]:
        """Remaining servings per group after meal allocation."""
        validator = request.app.state.container.distribution_validator
        plan = payload.to_plan()
        distribution = payload.to_distribution()
        remainders = validator.remainders(plan, distribution)
        return {
            "remainders": {group.value: value for group, value in remainders.items()},
            "over_allocated": [
                group.value for group in validator.over_allocated(remainders)
            ],
            "allocated": validator.allocated_plan(plan, distribution).to_counts(),
        }

    @app.get("/templates")
    async def list_templates(request: Request) -> dict[str, object]:
        """List diet types, distributions and their energy tiers."""
        selector = request.app.state.container.template_selector
        return {"diet_types": [_diet_type_summary(item) for item in selector.catalog()]}

    @app.get("/templates/{diet_type_id}/{distribution_id}")
    async def template_tiers(
        diet_type_id: str, distribution_id: str, request: Request
    ) -> dict[str, object]:
        """Energy tiers offered by a distribution."""
        selector = request.app.state.container.template_selector
        if selector.find_distribution(diet_type_id, distribution_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"energy_tiers": selector.energy_tiers(diet_type_id, distribution_id)}

    @app.get("/templates/{diet_type_id}/{distribution_id}/{energy_tier}")
    async def template_plan(
        diet_type_id: str, distribution_id: str, energy_tier: int, request: Request
    ) -> dict[str, object]:
        """Serving plan of one template row, with its totals."""
        state_container: AppContainer = request.app.state.container
        row = state_container.template_selector.lookup(
            diet_type_id, distribution_id, energy_tier
        )
        if isinstance(row, TemplateNotFound):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=(
                    f"No {energy_tier} kcal row for {diet_type_id}/{distribution_id}"
                ),
            )
        plan = state_container.template_selector.apply(row)
        totals = state_container.exchange_engine.compute_totals(plan)
        return {
            "energy_tier": row.energy_tier,
            **_plan_dict(plan),
            "totals": _totals_dict(totals),
        }

    @app.post("/growth/classify")
    async def growth_classify(
        payload: GrowthRequest, request: Request
    ) -> dict[str, object]:
        """Percentile band of a pediatric measurement."""
        classifier = request.app.state.container.growth_classifier
        result = classifier.classify(
            payload.standard,
            payload.measurement,
            payload.gender,
            payload.age_years,
            payload.value,
        )
        if isinstance(result, GrowthUnavailable):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=result.reason
            )
        return asdict(result)

    @app.post("/height/estimate")
    async def height_estimate(
        payload: HeightRequest, request: Request
    ) -> dict[str, object]:
        """Estimated height from ulna length or knee height."""
        estimator = request.app.state.container.height_estimator
        estimate = estimator.estimate(
            payload.method, payload.gender, payload.age, payload.measurement_cm
        )
        return {"estimate": asdict(estimate) if estimate is not None else None}

    @app.post("/age")
    async def age(payload: AgeRequest) -> dict[str, object]:
        """Exact age between two dates."""
        result = calendar_age(payload.date_of_birth, payload.report_date)
        return {
            **asdict(result),
            "total_months": result.total_months,
            "is_pediatric": result.is_pediatric,
        }

    return app


def _plan_dict(plan: ServingPlan) -> dict[str, object]:
    return {"servings": plan.to_counts(), "fat_breakdown": plan.fat_breakdown_enabled}


def _totals_dict(totals: MacroTotals) -> dict[str, object]:
    return {
        "cho": totals.cho,
        "pro": totals.pro,
        "fat": totals.fat,
        "fiber": totals.fiber,
        "kcal": totals.kcal,
        "kcal_by_subtype": {
            group.value: kcal for group, kcal in totals.kcal_by_subtype.items()
        },
    }


def _diet_type_summary(diet_type: DietType) -> dict[str, object]:
    return {
        "id": diet_type.id,
        "name": diet_type.name,
        "distributions": [
            {
                "id": distribution.id,
                "label": distribution.label,
                "energy_tiers": [row.energy_tier for row in distribution.rows],
            }
            for distribution in diet_type.distributions
        ],
    }
