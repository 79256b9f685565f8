from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.serializers import as_serializer_error

DEFAULT_ERROR_STATUS = status.HTTP_400_BAD_REQUEST

ERROR_STATUS_MAP = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "CART_EMPTY": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "METHOD_NOT_ALLOWED": status.HTTP_405_METHOD_NOT_ALLOWED,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNPROCESSABLE_ENTITY": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "TOO_MANY_REQUESTS": status.HTTP_429_TOO_MANY_REQUESTS,
    "SERVER_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "SERVICE_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
}

# (code, message, details) as returned by services for expected failures.
ErrorTuple = Tuple[str, str, Optional[Any]]


def status_for_code(code: str) -> int:
    return ERROR_STATUS_MAP.get(code.strip().upper(), DEFAULT_ERROR_STATUS)


def _normalize_details(details: Any) -> Any:
    if isinstance(details, ValidationError):
        return as_serializer_error(details)
    if isinstance(details, Mapping):
        return dict(details)
    if isinstance(details, Exception):
        return {"type": details.__class__.__name__}
    return details


def error_response(
    code: str,
    message: str,
    details: Optional[Any] = None,
    http_status: Optional[int] = None,
    *,
    hint: Optional[str] = None,
    extra: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    """
    Build the error envelope shared by every endpoint.

    Args:
        code: Machine-readable error identifier, e.g. ``NOT_FOUND``.
        message: Human-readable explanation.
        details: Optional context such as validation errors or offending ids.
        http_status: Explicit status overriding the code mapping.
        hint: Optional remediation text for clients.
        extra: Optional additional machine-readable fields.
        headers: Optional response headers.
    """

    if not isinstance(code, str) or not isinstance(message, str):
        raise TypeError("error_response requires string code and message")
    code = code.strip().upper()
    message = message.strip()
    if not code or not message:
        raise ValueError("error_response requires a non-empty code and message")
    if extra is not None and not isinstance(extra, Mapping):
        raise TypeError("error_response extra must be a mapping if provided")
    if headers is not None and not isinstance(headers, Mapping):
        raise TypeError("error_response headers must be a mapping if provided")

    status_code = int(http_status) if http_status is not None else status_for_code(code)
    if not 100 <= status_code <= 599:
        raise ValueError("error_response status must be a valid HTTP status code")

    body: Dict[str, Any] = {"code": code, "message": message, "status": status_code}
    if details is not None:
        body["details"] = _normalize_details(details)
    if hint is not None:
        body["hint"] = str(hint)
    if extra:
        body["extra"] = dict(extra)

    headers_dict = (
        {str(key): str(value) for key, value in headers.items()} if headers else None
    )
    return Response({"error": body}, status=status_code, headers=headers_dict)


def error_from_tuple(error: ErrorTuple) -> Response:
    code, message, details = error
    return error_response(code, message, details)
