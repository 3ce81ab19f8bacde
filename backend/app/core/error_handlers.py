import logging
from collections import defaultdict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ApiError


logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the global exception handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Malformed request on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_field_errors(exc.errors()),
        )


def build_field_errors(errors) -> dict:
    """Fold pydantic error entries into the field -> [messages] shape."""
    fields = defaultdict(list)
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = loc[-1] if loc else "body"
        fields[field].append(error.get("msg", "Invalid value."))
    return dict(fields)
