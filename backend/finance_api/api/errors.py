"""Exception handlers mapping failures to JSON responses.

- request validation -> 400 {"errors": {field: [messages]}}
- DomainError -> status by kind, {"error", "code"} (+ "errors" when per-field)
- HTTPException -> same status, {"error", "code"} with a code derived from the status
- anything else -> 500 with a generic message; the traceback is logged
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from finance_api.domain.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVARIANT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAUTHORIZED: 401,
}


CODE_BY_STATUS = {
    400: "BadRequest",
    401: "Unauthorized",
    403: "Forbidden",
    404: "NotFound",
    405: "MethodNotAllowed",
    409: "Conflict",
}


def field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        key = ".".join(loc) or "body"
        ctx = err.get("ctx") or {}
        # ValueErrors raised by our validators carry the plain message in ctx.
        message = str(ctx["error"]) if "error" in ctx else err.get("msg", "Invalid value")
        errors.setdefault(key, []).append(message)
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"errors": field_errors(exc)}, status_code=400)


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, 400)
    if exc.kind is ErrorKind.INVARIANT:
        logger.warning("Domain invariant violated on %s %s: %s", request.method, request.url.path, exc.message)

    body: dict = {"error": exc.message, "code": exc.code}
    if exc.errors:
        body["errors"] = exc.errors
    return JSONResponse(body, status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = CODE_BY_STATUS.get(exc.status_code, "HttpError")
    return JSONResponse(
        {"error": str(exc.detail), "code": code},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "An unexpected error occurred."}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DomainError, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
