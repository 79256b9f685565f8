from typing import Optional, Tuple

from apps.common.repository import GenericRepository
from .models import Cart, CartItem

ITEM_PREFETCH = ("items__product__images", "items__product__category")


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def _base_queryset(self):
        return self.model.objects.prefetch_related(*ITEM_PREFETCH)

    def get_for_user(self, user_id: int) -> Optional[Cart]:
        return self._base_queryset().filter(user_id=user_id).first()

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        return self.model.objects.get_or_create(user_id=user_id)

    def lock_for_user(self, user_id: int) -> Optional[Cart]:
        """Row-lock the user's cart; must run inside ``transaction.atomic``."""
        return self.model.objects.select_for_update().filter(user_id=user_id).first()

    def touch(self, cart: Cart) -> Cart:
        cart.save(update_fields=["updated_at"])
        return cart


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def _base_queryset(self):
        return self.model.objects.select_related(
            "product", "product__category"
        ).prefetch_related("product__images")

    def list_for_cart(self, cart_id: int):
        return self.list(cart_id=cart_id, order_by=("id",))

    def get_for_cart(self, cart_id: int, item_id: int) -> Optional[CartItem]:
        return self.get(cart_id=cart_id, id=item_id)

    def get_for_cart_product(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        return self.get(cart_id=cart_id, product_id=product_id)

    def delete_for_cart(self, cart: Cart) -> int:
        deleted, _ = self.model.objects.filter(cart=cart).delete()
        return deleted
