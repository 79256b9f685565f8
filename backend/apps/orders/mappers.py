from typing import Iterable, List, Optional

from apps.catalog.mappers import ProductMapper
from apps.users.dtos import address_to_dto
from .dtos import OrderDTO, OrderItemDTO, OrderQuoteDTO
from .models import Order, OrderItem
from .pricing import OrderTotals, compute_subtotal, to_money


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class OrderItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            id=item.id,
            product=self.product_mapper.to_dto(item.product),
            quantity=item.quantity,
            price=str(to_money(item.price)),
            line_total=str(to_money(item.price * item.quantity)),
        )

    def many_to_dto(self, items: Iterable[OrderItem]) -> List[OrderItemDTO]:
        return [self.to_dto(i) for i in items]


class OrderMapper:
    def __init__(self, item_mapper: Optional[OrderItemMapper] = None) -> None:
        self.item_mapper = item_mapper or OrderItemMapper()

    def to_dto(self, order: Order) -> OrderDTO:
        items = list(order.items.all())
        # Subtotal is derived from the frozen line prices; it is not stored.
        subtotal, _ = compute_subtotal((i.price, i.quantity) for i in items)
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            status=order.status,
            address=address_to_dto(order.address),
            payment_method=order.payment_method,
            subtotal=str(subtotal),
            tax=str(to_money(order.tax)),
            delivery_fee=str(to_money(order.delivery_fee)),
            total_amount=str(to_money(order.total_amount)),
            promo_code=order.promo_code,
            promo_discount=(
                str(to_money(order.promo_discount))
                if order.promo_discount is not None
                else None
            ),
            items=self.item_mapper.many_to_dto(items),
            created_at=_iso(order.created_at),
            updated_at=_iso(order.updated_at),
        )

    def many_to_dto(self, orders: Iterable[Order]) -> List[OrderDTO]:
        return [self.to_dto(o) for o in orders]


class QuoteMapper:
    @staticmethod
    def to_dto(totals: OrderTotals) -> OrderQuoteDTO:
        return OrderQuoteDTO(
            subtotal=str(totals.subtotal),
            discount=str(totals.discount),
            tax=str(totals.tax),
            delivery_fee=str(totals.delivery_fee),
            total=str(totals.total),
            item_count=totals.item_count,
            promo_code=totals.applied_promo_code,
        )
