from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer, MessageResponseSerializer
from apps.api.utils import error_from_tuple
from apps.common import get_logger
from .container import build_cart_service
from .serializers import (
    CartClearResponseSerializer,
    CartItemAddSerializer,
    CartItemSerializer,
    CartItemUpdateSerializer,
    CartSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get current cart",
        description="Returns the caller's cart, creating an empty one on first access.",
        responses={
            200: CartSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        user_id = request.validated_user_id
        dto, error = self.service.get_or_create_cart(user_id)
        if error:
            return error_from_tuple(error)
        return Response(CartSerializer(dto).data)

    @extend_schema(
        summary="Add product to cart",
        description=(
            "Adds a product line. Adding a product already in the cart "
            "increases its quantity and responds 200 instead of 201."
        ),
        request=CartItemAddSerializer,
        responses={
            200: CartItemSerializer,
            201: CartItemSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            403: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        user_id = request.validated_user_id
        dto, created, error = self.service.add_item(user_id, request.data)
        if error:
            return error_from_tuple(error)
        self.log.info("Cart item added via API", user_id=user_id, created=created)
        response_status = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return Response(CartItemSerializer(dto).data, status=response_status)

    @extend_schema(
        summary="Clear cart",
        responses={
            200: CartClearResponseSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request):
        user_id = request.validated_user_id
        removed, error = self.service.clear_cart(user_id)
        if error:
            return error_from_tuple(error)
        return Response({"message": "Cart cleared", "removed": removed})


@extend_schema(tags=["Cart"])
class CartItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_cart_service()
    log = logger.bind(view="CartItemView")

    @extend_schema(
        summary="Set cart line quantity",
        description="A quantity of 0 or less removes the line.",
        parameters=[OpenApiParameter("item_id", int, OpenApiParameter.PATH)],
        request=CartItemUpdateSerializer,
        responses={
            200: CartItemSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def patch(self, request, item_id: int):
        user_id = request.validated_user_id
        dto, removed, error = self.service.update_item(user_id, item_id, request.data)
        if error:
            return error_from_tuple(error)
        if removed:
            return Response({"message": "Item removed from cart"})
        return Response(CartItemSerializer(dto).data)

    @extend_schema(
        summary="Remove cart line",
        parameters=[OpenApiParameter("item_id", int, OpenApiParameter.PATH)],
        responses={
            200: MessageResponseSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, item_id: int):
        user_id = request.validated_user_id
        _, error = self.service.remove_item(user_id, item_id)
        if error:
            return error_from_tuple(error)
        return Response({"message": "Item removed from cart"})
