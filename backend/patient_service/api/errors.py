"""Exception handlers translating service errors into HTTP responses."""

from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from patient_service.core.exceptions import PatientServiceError, PatientValidationError
from patient_service.core.logging import get_logger
from patient_service.schemas.patient import ErrorResponse, ValidationErrorResponse

logger = get_logger(__name__)

VALIDATION_FAILED_MESSAGE = PatientValidationError.default_message


def safe_request_path(request: Request) -> str:
    """Return a route template path to avoid logging PHI in URLs."""
    route = request.scope.get("route")
    if route and hasattr(route, "path"):
        return route.path
    return request.url.path


def _error_response(request: Request, status_code: int, message: str | None) -> JSONResponse:
    body = ErrorResponse(
        status=status_code,
        message=message,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _validation_response(request: Request, errors: dict[str, str]) -> JSONResponse:
    body = ValidationErrorResponse(
        status=400,
        message=VALIDATION_FAILED_MESSAGE,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
        validationErrors=errors,
    )
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


def request_errors_by_field(exc: RequestValidationError) -> dict[str, str]:
    """Flatten FastAPI parsing errors into ``{field: message}``, first error per field."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[-1]) if loc else "request"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


async def patient_service_error_handler(request: Request, exc: PatientServiceError) -> JSONResponse:
    if isinstance(exc, PatientValidationError):
        logger.info(
            "patient_validation_failed",
            path=safe_request_path(request),
            fields=sorted(exc.errors),
        )
        return _validation_response(request, exc.errors)

    logger.info(
        "patient_request_failed",
        path=safe_request_path(request),
        status_code=exc.status_code,
        error=type(exc).__name__,
    )
    return _error_response(request, exc.status_code, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = request_errors_by_field(exc)
    logger.info(
        "request_validation_failed",
        path=safe_request_path(request),
        fields=sorted(errors),
    )
    return _validation_response(request, errors)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(
        "unhandled_exception",
        path=safe_request_path(request),
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    return _error_response(request, 500, str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PatientServiceError, patient_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
