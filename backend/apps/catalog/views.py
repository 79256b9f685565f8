from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from apps.api.schemas import paginated_response, ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .commands import ProductFilterCommand
from .container import build_product_service, build_category_service
from .pagination import ProductListPagination
from .serializers import (
    CategoryDetailSerializer,
    CategorySerializer,
    ProductReadSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description=(
            "Newest first. Supports pagination via ?page and ?limit. "
            "Cached results may be served for non-search listings."
        ),
        parameters=[
            OpenApiParameter(
                name="categoryId", type=int, required=False, description="Filter by category id"
            ),
            OpenApiParameter(
                name="category", type=str, required=False, description="Filter by category slug"
            ),
            OpenApiParameter(
                name="featured", type=bool, required=False, description="Only featured products"
            ),
            OpenApiParameter(
                name="q",
                type=str,
                required=False,
                description="Case-insensitive search on name or description",
            ),
        ],
        responses={
            200: paginated_response(ProductReadSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        filters = ProductFilterCommand.from_raw(request.query_params)
        self.log.debug(
            "Handling product list request",
            category_id=filters.category_id,
            category_slug=filters.category_slug,
            featured=filters.featured,
            search=filters.search,
        )
        return self.service.list_products_paginated(
            request,
            filters=filters,
            paginator_class=ProductListPagination,
            serializer_class=ProductReadSerializer,
            view=self,
        )


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(product_id)
        if not dto:
            self.log.info("Product not found", product_id=product_id)
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(ProductReadSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryListView")

    @extend_schema(
        summary="List categories",
        description="Ordered by name.",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        self.log.debug("Listing categories")
        data = self.service.list_categories()
        return Response(CategorySerializer(data, many=True).data)


@extend_schema(tags=["Catalog"])
class CategoryDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryDetailView")

    @extend_schema(
        summary="Get category with its products",
        parameters=[OpenApiParameter("slug", str, OpenApiParameter.PATH)],
        responses={
            200: CategoryDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, slug: str):
        self.log.debug("Fetching category detail", slug=slug)
        dto = self.service.get_category(slug)
        if not dto:
            return error_response("NOT_FOUND", "Category not found", {"slug": slug})
        return Response(CategoryDetailSerializer(dto).data)
