from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_from_tuple
from apps.common import get_logger
from .container import build_wishlist_service
from .serializers import WishlistAddSerializer, WishlistItemSerializer

logger = get_logger(__name__).bind(component="wishlist", layer="view")


@extend_schema(tags=["Wishlist"])
class WishlistListView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistListView")

    @extend_schema(
        summary="List wishlist",
        description="Newest first.",
        responses={
            200: WishlistItemSerializer(many=True),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        data = self.service.list_items(request.validated_user_id)
        return Response(WishlistItemSerializer(data, many=True).data)

    @extend_schema(
        summary="Add product to wishlist",
        request=WishlistAddSerializer,
        responses={
            201: WishlistItemSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        user_id = request.validated_user_id
        dto, error = self.service.add_item(user_id, request.data)
        if error:
            return error_from_tuple(error)
        self.log.info("Wishlist item added via API", user_id=user_id)
        return Response(WishlistItemSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Wishlist"])
class WishlistItemView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_wishlist_service()
    log = logger.bind(view="WishlistItemView")

    @extend_schema(
        summary="Remove product from wishlist",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            204: None,
            401: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, product_id: int):
        _, error = self.service.remove_item(request.validated_user_id, product_id)
        if error:
            return error_from_tuple(error)
        return Response(status=status.HTTP_204_NO_CONTENT)
