"""Response Shaper - uniform JSON envelope and the fixed CORS header set.

Invariants:
    - Success: {"success": true, "data": ...}
    - Failure: {"success": false, "error": "<message>", "code": "<ERROR_CODE>"}
    - Every response built here carries CORS_HEADERS, including 500s produced
      outside the middleware stack
"""

from typing import Any, Iterable

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import inspect

from freezefit.core.errors import FreezeFitError
from freezefit.db.base import Base

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}


def serialize_row(row: Base) -> dict[str, Any]:
    """Column values of an ORM row, keyed by column name."""
    return {
        attr.columns[0].name: getattr(row, attr.key)
        for attr in inspect(row).mapper.column_attrs
    }


def serialize_rows(rows: Iterable[Base]) -> list[dict[str, Any]]:
    return [serialize_row(r) for r in rows]


def ok(data: Any, status_code: int = 200) -> JSONResponse:
    if isinstance(data, Base):
        data = serialize_row(data)
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "data": jsonable_encoder(data)},
        headers=CORS_HEADERS,
    )


def created(data: Any) -> JSONResponse:
    return ok(data, status_code=201)


def fail(error: FreezeFitError) -> JSONResponse:
    return JSONResponse(
        status_code=error.http_status,
        content=error.to_response(),
        headers=CORS_HEADERS,
    )


def fail_with(
    status_code: int, message: str, code: str, details: list[dict] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": message, "code": code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)
