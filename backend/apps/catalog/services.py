from __future__ import annotations

from typing import List, Optional, Type

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from apps.common import get_logger
from .commands import ProductFilterCommand
from .dtos import CategoryDTO, CategoryDetailDTO, ProductDTO
from .mappers import CategoryMapper, ProductMapper
from .protocols import (
    CacheBackendProtocol,
    CategoryRepositoryProtocol,
    ProductRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="catalog", layer="service")

CACHE_PREFIX = "products:list"
CACHE_VERSION_KEY = f"{CACHE_PREFIX}:version"


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(CACHE_VERSION_KEY)
        return v or self._default_version

    def bump_cache_version(self) -> int:
        v = self._get_cache_version() + 1
        # Version key should not expire
        self.cache.set(CACHE_VERSION_KEY, v, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=v)
        return v

    def _cache_key(self, filters: ProductFilterCommand) -> str:
        return f"{CACHE_PREFIX}:v{self._get_cache_version()}:{filters.cache_fragment()}"

    def list_products(
        self, filters: Optional[ProductFilterCommand] = None
    ) -> List[ProductDTO]:
        filters = filters or ProductFilterCommand()
        use_cache = not self.disable_cache and not filters.is_search
        self.logger.debug(
            "Listing products",
            category_id=filters.category_id,
            category_slug=filters.category_slug,
            featured=filters.featured,
            search=filters.search,
            cache_enabled=use_cache,
        )
        if not use_cache:
            return ProductMapper.many_to_dto(self.products.search(filters))
        # Read-through cache per filter tuple; free-text searches bypass it.
        key = self._cache_key(filters)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = ProductMapper.many_to_dto(self.products.search(filters))
        self.cache.set(key, data)
        return data

    def list_products_paginated(
        self,
        request,
        *,
        filters: Optional[ProductFilterCommand] = None,
        paginator_class: Optional[Type[PageNumberPagination]] = None,
        serializer_class=None,
        view=None,
    ) -> Response:
        dtos = self.list_products(filters)
        paginator = (paginator_class or PageNumberPagination)()
        page = paginator.paginate_queryset(dtos, request, view=view)
        if serializer_class is None:
            from .serializers import ProductReadSerializer  # Avoid circular import

            serializer_class = ProductReadSerializer
        if page is None:
            return Response(serializer_class(dtos, many=True).data)
        return paginator.get_paginated_response(serializer_class(page, many=True).data)

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        p = self.products.get(id=product_id)
        if not p:
            self.logger.info("Product not found", product_id=product_id)
        return ProductMapper.to_dto(p) if p else None


class CategoryService:
    def __init__(self, categories: CategoryRepositoryProtocol):
        self.categories = categories
        self.logger = logger.bind(service="CategoryService")

    def list_categories(self) -> List[CategoryDTO]:
        self.logger.debug("Listing categories")
        return CategoryMapper.many_to_dto(self.categories.list())

    def get_category(self, slug: str) -> Optional[CategoryDetailDTO]:
        self.logger.debug("Fetching category", slug=slug)
        c = self.categories.get_by_slug(slug)
        if not c:
            self.logger.info("Category not found", slug=slug)
            return None
        return CategoryMapper.to_detail_dto(c, self.categories.products_for(c))
