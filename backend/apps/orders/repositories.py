from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from apps.catalog.models import Product
from apps.common.repository import GenericRepository
from .models import Order, OrderItem


class OrderRepository(GenericRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def _base_queryset(self):
        return self.model.objects.select_related("address").prefetch_related(
            "items__product__images", "items__product__category"
        )

    def list_for_user(self, user_id: int):
        return self.list(user_id=user_id, order_by=("-created_at", "-id"))

    def get_for_user(self, user_id: int, order_id: int) -> Optional[Order]:
        return self.get(user_id=user_id, id=order_id)


class OrderItemRepository(GenericRepository[OrderItem]):
    def __init__(self):
        super().__init__(OrderItem)

    def create_for_order(
        self, order: Order, lines: Iterable[Tuple[Product, int, Decimal]]
    ) -> List[OrderItem]:
        return self.model.objects.bulk_create(
            [
                OrderItem(order=order, product=product, quantity=quantity, price=price)
                for product, quantity, price in lines
            ]
        )
