from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.exceptions import ApplicationError
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .commands import PlaceOrderCommand
from .container import build_order_service
from .serializers import (
    OrderQuoteSerializer,
    OrderSerializer,
    PlaceOrderRequestSerializer,
    QuoteRequestSerializer,
)

logger = get_logger(__name__).bind(component="orders", layer="view")


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderListView")

    @extend_schema(
        summary="List orders",
        description="The caller's orders, newest first.",
        responses={
            200: OrderSerializer(many=True),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        data = self.service.list_orders(request.validated_user_id)
        return Response(OrderSerializer(data, many=True).data)

    @extend_schema(
        summary="Place order",
        description=(
            "Checks out the caller's cart: prices it, stores the order with "
            "frozen line prices and empties the cart atomically. The promo code "
            "WELCOME10 gives 10% off the subtotal."
        ),
        request=PlaceOrderRequestSerializer,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="VALIDATION_ERROR or CART_EMPTY",
            ),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            500: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        user_id = request.validated_user_id
        command = PlaceOrderCommand.from_raw(request.data)
        self.log.info("Processing checkout", user_id=user_id)
        try:
            dto = self.service.place_order(
                user_id,
                command.address_id,
                command.payment_method,
                command.promo_code,
            )
        except ApplicationError as exc:
            self.log.warning("Checkout failed", user_id=user_id, code=exc.code)
            return exc.to_response()
        return Response(OrderSerializer(dto).data, status=status.HTTP_200_OK)


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderDetailView")

    @extend_schema(
        summary="Get order",
        parameters=[OpenApiParameter("order_id", int, OpenApiParameter.PATH)],
        responses={
            200: OrderSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, order_id: int):
        try:
            dto = self.service.get_order(request.validated_user_id, order_id)
        except ApplicationError as exc:
            return exc.to_response()
        return Response(OrderSerializer(dto).data)


@extend_schema(tags=["Orders"])
class OrderQuoteView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_order_service()
    log = logger.bind(view="OrderQuoteView")

    @extend_schema(
        summary="Quote cart totals",
        description="Prices the current cart with an optional promo code. Nothing is stored.",
        request=QuoteRequestSerializer,
        responses={
            200: OrderQuoteSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        promo_code = request.data.get("promoCode") if hasattr(request.data, "get") else None
        dto = self.service.quote(request.validated_user_id, promo_code)
        return Response(OrderQuoteSerializer(dto).data)
