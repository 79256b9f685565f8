from __future__ import annotations

from apps.catalog.mappers import ProductMapper
from apps.catalog.repositories import ProductRepository

from .mappers import WishlistItemMapper
from .repositories import WishlistItemRepository
from .services import WishlistService


def build_wishlist_service() -> WishlistService:
    return WishlistService(
        items=WishlistItemRepository(),
        products=ProductRepository(),
        mapper=WishlistItemMapper(ProductMapper()),
    )
