"""
HTTP integration: StatusCode→HTTP status mapping and problem-detail responses.

Framework-agnostic core with an optional FastAPI adapter. The adapter only
reads a result's public fields (status_code.id, message, validation_errors
and, for typed results, the payload).

    200 → payload body
    400 → validation problem document, errors grouped by identifier
    401 / 404 / 409 / 428 → problem document (message + type URI)
    anything else → 500

Usage (standalone):
    body, status = build_response(result)

Usage (FastAPI):
    from rop.http_support import build_fastapi_response
    return build_fastapi_response(result)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional, Union

import structlog

from rop.result import Result, TypedResult
from rop.status import StatusCode

log = structlog.get_logger()

VALIDATION_TYPE_URI = "https://tools.ietf.org/html/rfc7231#section-6.5.1"
UNAUTHORIZED_TYPE_URI = "https://tools.ietf.org/html/rfc7235#section-3.1"
NOT_FOUND_TYPE_URI = "https://tools.ietf.org/html/rfc7231#section-6.5.4"


# ──────────────────────── StatusCode → HTTP Status Mapping ────────────────────────


class HttpStatusMapper:
    """Maps catalog status codes to the HTTP status the adapter answers with."""

    _PROBLEM_TYPES: dict[int, str] = {
        StatusCode.UNAUTHORIZED.id: UNAUTHORIZED_TYPE_URI,
        StatusCode.CONFLICT.id: UNAUTHORIZED_TYPE_URI,
        StatusCode.NOT_FOUND.id: NOT_FOUND_TYPE_URI,
        StatusCode.PRECONDITION_REQUIRED.id: NOT_FOUND_TYPE_URI,
    }

    _MAPPED: frozenset[int] = frozenset(
        {StatusCode.OK.id, StatusCode.BAD_REQUEST.id, *_PROBLEM_TYPES}
    )

    @classmethod
    def map_status(cls, status_code: StatusCode) -> int:
        """Map a StatusCode to an HTTP status; unmapped codes degrade to 500."""
        if status_code.id in cls._MAPPED:
            return status_code.id
        return StatusCode.INTERNAL_SERVER_ERROR.id

    @classmethod
    def problem_type(cls, status_code: StatusCode) -> Optional[str]:
        """Type URI for a problem document, or None when the code has none."""
        if status_code == StatusCode.BAD_REQUEST:
            return VALIDATION_TYPE_URI
        return cls._PROBLEM_TYPES.get(status_code.id)


# ──────────────────────── Problem Documents ────────────────────────


@dataclass(frozen=True, slots=True)
class ProblemDetails:
    """
    RFC 7807 problem document.

        {
            "type": "https://tools.ietf.org/html/rfc7231#section-6.5.4",
            "title": "Not Found",
            "status": 404,
            "detail": "User not found",
            "instance": ""
        }
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str = ""

    @staticmethod
    def from_result(result: Union[Result, TypedResult[Any]], type_uri: str) -> ProblemDetails:
        return ProblemDetails(
            type=type_uri,
            title=result.status_code.name,
            status=result.status_code.id,
            detail=result.message,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ValidationProblemDetails:
    """Problem document for BadRequest, with messages grouped by identifier."""

    title: str
    status: int
    detail: str
    errors: dict[str, list[str]] = field(default_factory=dict)
    type: str = VALIDATION_TYPE_URI
    instance: str = ""

    @staticmethod
    def from_result(result: Union[Result, TypedResult[Any]]) -> ValidationProblemDetails:
        errors: dict[str, list[str]] = {}
        for error in result.validation_errors or ():
            errors.setdefault(error.identifier, []).append(error.error_message)
        return ValidationProblemDetails(
            title=result.status_code.name,
            status=result.status_code.id,
            detail=result.message,
            errors=errors,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ──────────────────────── Generic Response Builder ────────────────────────


def build_response(result: Union[Result, TypedResult[Any]]) -> tuple[Any, int]:
    """
    Build a (body, status_code) tuple from a result.

    Framework-agnostic: works with any web framework. An untyped success has
    no body.

        body, status = build_response(result)
    """
    if result.is_success() and result.status_code == StatusCode.OK:
        body = result.ensure_value() if isinstance(result, TypedResult) else None
        return body, StatusCode.OK.id
    return _problem_response(result)


def _problem_response(result: Union[Result, TypedResult[Any]]) -> tuple[Optional[dict[str, Any]], int]:
    status = HttpStatusMapper.map_status(result.status_code)
    type_uri = HttpStatusMapper.problem_type(result.status_code)

    if status == StatusCode.INTERNAL_SERVER_ERROR.id or type_uri is None:
        log.warning(
            "http.unmapped_status",
            status_code=result.status_code.id,
            detail=result.message,
        )
        return None, StatusCode.INTERNAL_SERVER_ERROR.id

    if result.status_code == StatusCode.BAD_REQUEST:
        return ValidationProblemDetails.from_result(result).to_dict(), status
    return ProblemDetails.from_result(result, type_uri).to_dict(), status


# ──────────────────────── FastAPI Adapter ────────────────────────


def build_fastapi_response(result: Union[Result, TypedResult[Any]]) -> Any:
    """
    Build a FastAPI response from a result.

    Requires fastapi to be installed. Problem documents are sent as
    application/problem+json; a bodiless outcome becomes an empty response.

        @app.get("/users/{user_id}")
        def get_user(user_id: int):
            return build_fastapi_response(service.find(user_id))
    """
    try:
        from fastapi import Response
        from fastapi.encoders import jsonable_encoder
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError("FastAPI is required: pip install rop-result[fastapi]")

    body, status = build_response(result)
    if body is None:
        return Response(status_code=status)
    if status == StatusCode.OK.id:
        return JSONResponse(content=jsonable_encoder(body), status_code=status)
    return JSONResponse(content=body, status_code=status, media_type="application/problem+json")
