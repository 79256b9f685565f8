from typing import Any, Optional

from django.http import HttpRequest
from rest_framework.exceptions import AuthenticationFailed as DRFAuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from apps.api.utils import error_response
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="validation")

_jwt_authenticator = JWTAuthentication()

# Views acting on the authenticated customer's own data, mapped to the path
# kwarg (if any) that must be a positive integer identifier.
CUSTOMER_VIEWS = {
    "CartView": None,
    "CartItemView": "item_id",
    "WishlistListView": None,
    "WishlistItemView": "product_id",
    "OrderListView": None,
    "OrderDetailView": "order_id",
    "OrderQuoteView": None,
    "AddressListView": None,
    "AddressDetailView": "address_id",
    "AccountView": None,
}

_TRUE_VALUES = ("1", "true", "yes")
_FALSE_VALUES = ("0", "false", "no")


def _is_authenticated_user(request: HttpRequest) -> bool:
    user = getattr(request, "user", None)
    if user and getattr(user, "is_authenticated", False) and getattr(user, "id", None):
        return True

    # The middleware runs before DRF authenticates, so bearer tokens are
    # resolved here directly.
    meta = getattr(request, "META", {}) or {}
    auth_header = meta.get("HTTP_AUTHORIZATION") if hasattr(meta, "get") else None
    if not auth_header:
        return False

    try:
        authenticated = _jwt_authenticator.authenticate(request)
    except (InvalidToken, DRFAuthenticationFailed) as exc:
        logger.warning("JWT authentication failed", detail=str(exc))
        return False

    if not authenticated:
        return False

    user, token = authenticated
    if not getattr(user, "is_authenticated", False) or not getattr(user, "id", None):
        return False

    request.user = user
    request.auth = token
    logger.debug("Authenticated user from bearer token", user_id=user.id)
    return True


def _is_privileged_user(user: Any) -> bool:
    return bool(getattr(user, "is_staff", False) or getattr(user, "is_superuser", False))


def _set_validated_user(request: HttpRequest, user_id: Optional[int]) -> None:
    request.validated_user_id = user_id
    request.is_privileged_user = _is_privileged_user(getattr(request, "user", None))


def _parse_positive_int(raw: Any) -> Optional[int]:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def _validate_path_identifier(view_name: str, kwarg: str, view_kwargs) -> Any:
    raw = (view_kwargs or {}).get(kwarg)
    if _parse_positive_int(raw) is None:
        logger.warning("Invalid path identifier", view=view_name, kwarg=kwarg, value=raw)
        return error_response(
            "VALIDATION_ERROR",
            f"{kwarg} must be a positive integer",
            {kwarg: str(raw)},
        )
    return None


def _validate_product_filters(request: HttpRequest) -> Any:
    raw_category = request.GET.get("categoryId")
    if raw_category not in (None, ""):
        if _parse_positive_int(raw_category) is None:
            logger.warning("Invalid categoryId filter", value=raw_category)
            return error_response(
                "VALIDATION_ERROR",
                "categoryId must be a positive integer",
                {"categoryId": raw_category},
            )
    raw_featured = request.GET.get("featured")
    if raw_featured not in (None, ""):
        if raw_featured.strip().lower() not in _TRUE_VALUES + _FALSE_VALUES:
            logger.warning("Invalid featured filter", value=raw_featured)
            return error_response(
                "VALIDATION_ERROR",
                "featured must be a boolean",
                {"featured": raw_featured},
            )
    return None


def validate_request_context(request: HttpRequest, view_class, view_kwargs) -> Any:
    """
    Performs request level validation for specific API views.
    Returns a DRF Response when validation fails; otherwise None and
    attaches validated data to the request instance.
    """
    view_name = getattr(view_class, "__name__", "")

    logger.debug(
        "Running request context validation",
        view=view_name,
        method=getattr(request, "method", None),
    )

    if view_name in CUSTOMER_VIEWS:
        if not _is_authenticated_user(request):
            logger.warning(
                "Customer view requires authentication",
                view=view_name,
                method=request.method,
            )
            return error_response("UNAUTHORIZED", "Authentication required")
        actor_id = int(request.user.id)
        _set_validated_user(request, actor_id)
        kwarg = CUSTOMER_VIEWS[view_name]
        if kwarg is not None:
            resp = _validate_path_identifier(view_name, kwarg, view_kwargs)
            if resp is not None:
                return resp
        logger.debug(
            "Validated customer request",
            view=view_name,
            user_id=actor_id,
            method=request.method,
        )
    elif view_name == "ProductListView":
        if request.method == "GET":
            resp = _validate_product_filters(request)
            if resp is not None:
                return resp
    elif view_name == "ProductDetailView":
        resp = _validate_path_identifier(view_name, "product_id", view_kwargs)
        if resp is not None:
            return resp

    return None


def parse_bool_param(raw: Optional[str]) -> Optional[bool]:
    """Interpret a boolean query flag; unset or unrecognised values mean no filter."""
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return None
