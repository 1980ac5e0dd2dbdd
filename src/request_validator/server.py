"""FastAPI integration for request validation.

Routes declare their body fields with :func:`validated_body` and receive the
validated payload; failures are turned into 400 JSON responses by the handler
installed through :func:`register_exception_handlers`::

    app = FastAPI()
    register_exception_handlers(app)

    @app.post("/users")
    async def create_user(body: dict = Depends(validated_body(["email", {"age": "integer"}]))):
        ...
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .errors import INVALID_REQUEST, BadRequestError
from .orchestrator import FieldSpecs, validate_request
from .spec import normalize_specs


logger = logging.getLogger(__name__)


def error_payload(error: BadRequestError) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": error.code, "message": error.message}
    if error.field is not None:
        payload["field"] = error.field
    return payload


async def _handle_bad_request(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, BadRequestError):  # pragma: no cover - registered for BadRequestError only
        raise exc
    logger.info(
        "Rejected request payload",
        extra={
            "path": request.url.path,
            "error_code": exc.code,
            "status_code": exc.status_code,
            "field": exc.field,
        },
    )
    return JSONResponse(error_payload(exc), status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BadRequestError, _handle_bad_request)


async def _read_json_body(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "").lower()
    if "application/json" not in content_type:
        logger.error("Request is not JSON", extra={"path": request.url.path})
        raise BadRequestError(message="Request must be JSON.", code=INVALID_REQUEST)

    try:
        body = await request.json()
    except json.JSONDecodeError:
        logger.error("Malformed JSON payload", extra={"path": request.url.path})
        raise BadRequestError(message="Request must be JSON.", code=INVALID_REQUEST) from None

    if not isinstance(body, dict):
        raise BadRequestError(message="Request body must be a JSON object.", code=INVALID_REQUEST)
    return body


def validated_body(params: FieldSpecs) -> Callable[[Request], Awaitable[dict[str, Any]]]:
    """Build a FastAPI dependency that validates the JSON body of a request.

    The field specs are normalised here, so a malformed spec fails when the
    route is declared rather than on the first request.
    """

    descriptors = normalize_specs(params)

    async def _dependency(request: Request) -> dict[str, Any]:
        body = await _read_json_body(request)
        return await validate_request(body, descriptors)

    return _dependency


__all__ = ["error_payload", "register_exception_handlers", "validated_body"]
