"""Saved-record endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from clinical_nutrition.api.schemas import RecordRequest  # noqa: TC001
from clinical_nutrition.domain.records import ToolType  # noqa: TC001

if TYPE_CHECKING:
    from clinical_nutrition.containers import AppContainer

router = APIRouter(prefix="/records", tags=["records"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("", dependencies=[Depends(require_api_token)])
async def list_records(
    request: Request,
    x_user_id: UUID = Header(),
    tool_type: ToolType | None = None,
) -> dict[str, object]:
    """Return the caller's saved records."""
    container: AppContainer = request.app.state.container
    return {"records": container.record_service.list_records(x_user_id, tool_type)}


@router.post("", dependencies=[Depends(require_api_token)])
async def create_record(
    payload: RecordRequest, request: Request, x_user_id: UUID = Header()
) -> dict[str, object]:
    """Save a new record."""
    container: AppContainer = request.app.state.container
    try:
        record = container.record_service.save(
            x_user_id, payload.tool_type, payload.name, payload.data
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return {"record": record}


@router.get("/{record_id}", dependencies=[Depends(require_api_token)])
async def get_record(
    record_id: UUID, request: Request, x_user_id: UUID = Header()
) -> dict[str, object]:
    """Return one saved record."""
    container: AppContainer = request.app.state.container
    record = container.record_service.load(x_user_id, record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"record": record}


@router.put("/{record_id}", dependencies=[Depends(require_api_token)])
async def update_record(
    record_id: UUID,
    payload: RecordRequest,
    request: Request,
    x_user_id: UUID = Header(),
) -> dict[str, object]:
    """Overwrite a saved record; its tool type cannot change."""
    container: AppContainer = request.app.state.container
    try:
        record = container.record_service.save(
            x_user_id, payload.tool_type, payload.name, payload.data, record_id
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"record": record}


@router.delete("/{record_id}", dependencies=[Depends(require_api_token)])
async def delete_record(
    record_id: UUID, request: Request, x_user_id: UUID = Header()
) -> dict[str, str]:
    """Delete a saved record."""
    container: AppContainer = request.app.state.container
    if not container.record_service.delete(x_user_id, record_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"status": "deleted"}
