"""API route handlers.

Every entity shares the same set of routes, parameterised by the
``{resource}`` path segment, so the mock server mirrors a json-server
style REST API plus the table and export views.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from schooladmin.backend.core.listing import get_entity
from schooladmin.backend.core.storage import RecordStore
from schooladmin.backend.schemas import (
    RECORD_MODELS,
    HealthOut,
    LoginIn,
    LoginOut,
    TablePageOut,
)
from schooladmin.backend.services import TableSession, login, service_for

logger = logging.getLogger(__name__)

router = APIRouter()


def _store(request: Request) -> RecordStore:
    return request.app.state.store


def _validate(resource: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Validate ``payload`` against the entity model; 422 on failure."""
    get_entity(resource)
    try:
        model = RECORD_MODELS[resource].model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_context=False)) from exc
    return model.model_dump(by_alias=True, exclude={"id"})


def _open_table(
    request: Request,
    resource: str,
    search: str,
    sort: str | None,
    direction: str,
    page_size: int | None = None,
) -> TableSession:
    get_entity(resource)
    listing = request.app.state.config["listing"]
    session = TableSession(
        service_for(_store(request), resource),
        page_size=page_size or listing["page_size"],
    )
    ctrl = session.controller
    ctrl.set_search_text(search)
    if sort:
        ctrl.set_sort(sort)
        if direction == "desc":
            ctrl.set_sort(sort)
    return session


# ── Routes ─────────────────────────────────────────────────────────────────


@router.get("/health", response_model=HealthOut, include_in_schema=False)
async def health_check() -> HealthOut:
    """Liveness check (suppressed from access log via log filter)."""
    return HealthOut()


@router.post("/auth/login", response_model=LoginOut)
def auth_login(request: Request, credentials: LoginIn) -> JSONResponse:
    """Mock login; 401 with ``success: false`` on bad credentials."""
    result = login(_store(request), credentials.username, credentials.password)
    body = LoginOut(
        success=result.success,
        message=result.message,
        token=result.token,
        user=result.user,
    )
    code = status.HTTP_200_OK if result.success else status.HTTP_401_UNAUTHORIZED
    return JSONResponse(status_code=code, content=body.model_dump(exclude_none=True))


@router.get("/{resource}/table", response_model=TablePageOut)
def get_table_page(
    request: Request,
    resource: str,
    search: str = "",
    sort: str | None = None,
    direction: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = 1,
    page_size: int | None = Query(None, alias="pageSize", gt=0),
) -> JSONResponse:
    """One page of the entity table, filtered and sorted.

    Out-of-range pages fall back to the first page rather than erroring.
    """
    session = _open_table(request, resource, search, sort, direction, page_size)
    ctrl = session.controller
    ctrl.go_to_page(page)
    info = ctrl.page_info()
    out = TablePageOut(
        items=ctrl.visible_rows(),
        page=info.page,
        page_size=info.page_size,
        total_pages=info.total_pages,
        filtered_count=info.filtered_count,
        total_count=info.total_count,
        first_row=info.first_row,
        last_row=info.last_row,
        page_numbers=ctrl.page_numbers(request.app.state.config["listing"]["page_window"]),
        search=ctrl.search_text,
        sort=ctrl.sort_field,
        direction=ctrl.sort_direction.value,
    )
    return JSONResponse(content=out.model_dump(by_alias=True))


@router.get("/{resource}/export")
def export_table(
    request: Request,
    resource: str,
    search: str = "",
    sort: str | None = None,
    direction: str = Query("asc", pattern="^(asc|desc)$"),
) -> Response:
    """CSV download of every row matching the search (not just one page)."""
    session = _open_table(request, resource, search, sort, direction)
    filename, text = session.export_csv()
    logger.info("Exported %d %s rows", session.controller.filtered_count, resource)
    return Response(
        content=text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{resource}")
def list_records(request: Request, resource: str) -> list[dict[str, Any]]:
    """Full collection, json-server style."""
    return service_for(_store(request), resource).get_all()


@router.get("/{resource}/{record_id}")
def get_record(request: Request, resource: str, record_id: int) -> dict[str, Any]:
    return service_for(_store(request), resource).get_by_id(record_id)


@router.post("/{resource}", status_code=status.HTTP_201_CREATED)
def create_record(
    request: Request, resource: str, payload: dict[str, Any] = Body(...)
) -> dict[str, Any]:
    record = _validate(resource, payload)
    return service_for(_store(request), resource).create(record)


@router.patch("/{resource}/{record_id}")
def patch_record(
    request: Request, resource: str, record_id: int, payload: dict[str, Any] = Body(...)
) -> dict[str, Any]:
    """Partial update; the merged record must still validate."""
    service = service_for(_store(request), resource)
    merged = {**service.get_by_id(record_id), **payload}
    record = _validate(resource, merged)
    return service.update(record_id, record)


@router.put("/{resource}/{record_id}")
def put_record(
    request: Request, resource: str, record_id: int, payload: dict[str, Any] = Body(...)
) -> dict[str, Any]:
    """Full replacement; fields left out of the body are not kept."""
    record = _validate(resource, payload)
    return service_for(_store(request), resource).replace(record_id, record)


@router.delete("/{resource}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(request: Request, resource: str, record_id: int) -> Response:
    service_for(_store(request), resource).delete(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
