from typing import Optional

from apps.common.repository import GenericRepository
from .models import WishlistItem


class WishlistItemRepository(GenericRepository[WishlistItem]):
    def __init__(self):
        super().__init__(WishlistItem)

    def _base_queryset(self):
        return self.model.objects.select_related(
            "product", "product__category"
        ).prefetch_related("product__images")

    def list_for_user(self, user_id: int):
        return self.list(user_id=user_id, order_by=("-created_at", "-id"))

    def get_for_user_product(self, user_id: int, product_id: int) -> Optional[WishlistItem]:
        return self.get(user_id=user_id, product_id=product_id)
