from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple, Union

from django.core.exceptions import (
    PermissionDenied as DjangoPermissionDenied,
    ValidationError as DjangoValidationError,
)
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound as DRFNotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="exception")

GENERIC_SERVER_MESSAGE = "Something went wrong"

STATUS_CODE_DEFAULTS: Dict[int, Tuple[str, str]] = {
    status.HTTP_400_BAD_REQUEST: ("VALIDATION_ERROR", "Validation failed"),
    status.HTTP_401_UNAUTHORIZED: ("UNAUTHORIZED", "Authentication required"),
    status.HTTP_403_FORBIDDEN: (
        "FORBIDDEN",
        "You do not have permission to perform this action",
    ),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", "Resource not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("METHOD_NOT_ALLOWED", "Method not allowed"),
    status.HTTP_409_CONFLICT: ("CONFLICT", "Resource conflict"),
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: (
        "UNSUPPORTED_MEDIA_TYPE",
        "Unsupported media type",
    ),
    status.HTTP_429_TOO_MANY_REQUESTS: ("TOO_MANY_REQUESTS", "Request was throttled"),
    status.HTTP_500_INTERNAL_SERVER_ERROR: ("SERVER_ERROR", GENERIC_SERVER_MESSAGE),
    status.HTTP_503_SERVICE_UNAVAILABLE: (
        "SERVICE_UNAVAILABLE",
        "Service temporarily unavailable",
    ),
}


class ApplicationError(Exception):
    """
    Domain-level error raised from services and rendered by the global handler.

    Args:
        code: Machine readable error code.
        message: Human readable explanation of the error.
        status_code: Optional explicit HTTP status. If omitted, code mapping is used.
        details: Optional structured details for clients.
        hint: Optional hint for remediation.
        extra: Optional additional machine readable fields.
        headers: Optional mapping of headers to include in the response.
    """

    default_code = "SERVER_ERROR"
    default_message = GENERIC_SERVER_MESSAGE
    default_status: Optional[int] = None

    def __init__(
        self,
        code: Optional[str] = None,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        hint: Optional[str] = None,
        extra: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
    ):
        self.code = code or self.default_code
        self.message = message or self.default_message
        super().__init__(self.message)
        self.status_code = status_code if status_code is not None else self.default_status
        self.details = details
        self.hint = hint
        self.extra = extra
        self.headers = headers

    def as_tuple(self) -> Tuple[str, str, Optional[Any]]:
        return self.code, self.message, self.details

    def to_response(self) -> Response:
        return error_response(
            self.code,
            self.message,
            self.details,
            http_status=self.status_code,
            hint=self.hint,
            extra=self.extra,
            headers=self.headers,
        )


class _TaxonomyError(ApplicationError):
    """Fixed-code error: only the message and details vary per raise site."""

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None, **kwargs):
        super().__init__(None, message, details=details, **kwargs)


class Unauthenticated(_TaxonomyError):
    default_code = "UNAUTHORIZED"
    default_message = "Authentication required"
    default_status = status.HTTP_401_UNAUTHORIZED


class NotFound(_TaxonomyError):
    default_code = "NOT_FOUND"
    default_message = "Resource not found"
    default_status = status.HTTP_404_NOT_FOUND


class ValidationFailed(_TaxonomyError):
    default_code = "VALIDATION_ERROR"
    default_message = "Validation failed"
    default_status = status.HTTP_400_BAD_REQUEST


class Conflict(_TaxonomyError):
    default_code = "CONFLICT"
    default_message = "Resource conflict"
    default_status = status.HTTP_409_CONFLICT


class CartEmpty(_TaxonomyError):
    default_code = "CART_EMPTY"
    default_message = "Cart is empty"
    default_status = status.HTTP_400_BAD_REQUEST


class Internal(_TaxonomyError):
    default_code = "SERVER_ERROR"
    default_message = GENERIC_SERVER_MESSAGE
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR


def global_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """
    Central exception handler for DRF views returning structured JSON errors.
    """

    bound_logger = _bind_logger(context)

    if isinstance(exc, ApplicationError):
        if exc.status_code is not None and exc.status_code >= 500:
            bound_logger.error("Application error reached handler", code=exc.code)
            return error_response(
                exc.code, GENERIC_SERVER_MESSAGE, http_status=exc.status_code
            )
        bound_logger.info(
            "Handled application error", code=exc.code, status=exc.status_code
        )
        return exc.to_response()

    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(_normalize_django_validation_error(exc))

    response = drf_exception_handler(exc, context)
    if response is not None:
        return _from_drf_exception(exc, response, bound_logger)

    bound_logger.exception("Unhandled exception bubbled to global handler")
    return error_response(
        "SERVER_ERROR",
        GENERIC_SERVER_MESSAGE,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _bind_logger(context: Dict[str, Any]):
    log = logger
    view = context.get("view")
    request = context.get("request")
    if view is not None:
        log = log.bind(view=type(view).__name__)
    if request is not None:
        log = log.bind(
            method=getattr(request, "method", None),
            path=getattr(request, "path", None),
        )
    return log


def _from_drf_exception(exc: Exception, response: Response, bound_logger) -> Response:
    status_code = response.status_code
    code, message, details, hint = _normalize_payload(exc, response.data, status_code)
    headers = dict(response.headers) if getattr(response, "headers", None) else None

    if status_code >= 500:
        bound_logger.error("Converted server error", code=code, status=status_code)
    else:
        bound_logger.info("Converted API exception", code=code, status=status_code)

    return error_response(
        code, message, details, http_status=status_code, hint=hint, headers=headers
    )


def _normalize_django_validation_error(
    exc: DjangoValidationError,
) -> Union[Dict[str, Any], list]:
    if hasattr(exc, "message_dict"):
        return exc.message_dict
    if hasattr(exc, "messages"):
        return list(exc.messages)
    return {"detail": getattr(exc, "message", "Validation failed")}


# Checked in order; the flag keeps the DRF payload as error details.
DRF_ERROR_CODES = (
    (ValidationError, "VALIDATION_ERROR", "Validation failed", True),
    (ParseError, "VALIDATION_ERROR", "Malformed request", True),
    (AuthenticationFailed, "UNAUTHORIZED", "Authentication failed", False),
    (NotAuthenticated, "UNAUTHORIZED", "Authentication required", False),
    (
        (PermissionDenied, DjangoPermissionDenied),
        "FORBIDDEN",
        "You do not have permission to perform this action",
        False,
    ),
    ((DRFNotFound, Http404), "NOT_FOUND", "Resource not found", False),
    (MethodNotAllowed, "METHOD_NOT_ALLOWED", "Method not allowed", False),
)


def _normalize_payload(
    exc: Exception,
    payload: Any,
    status_code: int,
) -> Tuple[str, str, Optional[Any], Optional[str]]:
    for exc_types, code, fallback, keep_details in DRF_ERROR_CODES:
        if isinstance(exc, exc_types):
            details = payload if keep_details else None
            return code, _extract_message(payload, fallback, status_code), details, None

    if isinstance(exc, Throttled):
        wait = getattr(exc, "wait", None)
        message = _extract_message(payload, "Request was throttled", status_code)
        if wait is None:
            return "TOO_MANY_REQUESTS", message, None, None
        return (
            "TOO_MANY_REQUESTS",
            message,
            {"retryAfter": wait},
            "Wait before retrying this request.",
        )

    if status_code in STATUS_CODE_DEFAULTS:
        code, fallback = STATUS_CODE_DEFAULTS[status_code]
    elif status_code >= 500:
        code, fallback = "SERVER_ERROR", GENERIC_SERVER_MESSAGE
    else:
        code, fallback = "UNKNOWN_ERROR", "Request failed"
    details = None
    if status_code < 500 and isinstance(payload, (dict, list)) and payload:
        details = payload
    return code, _extract_message(payload, fallback, status_code), details, None


def _extract_message(payload: Any, fallback: str, status_code: int) -> str:
    if status_code >= 500:
        return GENERIC_SERVER_MESSAGE
    if isinstance(payload, dict):
        payload = payload.get("detail")
    elif isinstance(payload, list) and payload:
        payload = payload[0]
    return payload if isinstance(payload, str) else fallback


__all__ = [
    "ApplicationError",
    "CartEmpty",
    "Conflict",
    "Internal",
    "NotFound",
    "Unauthenticated",
    "ValidationFailed",
    "global_exception_handler",
]
