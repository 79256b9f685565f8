from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.core.cache import cache

from .repositories import ProductRepository, CategoryRepository
from .services import ProductService, CategoryService


def build_product_service(*, disable_cache: Optional[bool] = None) -> ProductService:
    if disable_cache is None:
        disable_cache = getattr(settings, "DISABLE_PRODUCT_CACHE", False)
    return ProductService(
        products=ProductRepository(),
        cache_backend=cache,
        disable_cache=disable_cache,
    )


def build_category_service() -> CategoryService:
    return CategoryService(categories=CategoryRepository())
