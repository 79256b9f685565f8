from __future__ import annotations

from typing import Iterable, Optional, Protocol, TYPE_CHECKING

from .models import WishlistItem

if TYPE_CHECKING:
    from apps.catalog.models import Product


class WishlistItemRepositoryProtocol(Protocol):
    def list_for_user(self, user_id: int) -> Iterable[WishlistItem]:
        ...

    def get_for_user_product(self, user_id: int, product_id: int) -> Optional[WishlistItem]:
        ...

    def create(self, **data) -> WishlistItem:
        ...

    def delete(self, obj: WishlistItem) -> None:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...
