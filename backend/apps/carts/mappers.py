from typing import Iterable, List, Optional

from apps.catalog.mappers import ProductMapper
from apps.orders.pricing import compute_subtotal, to_money
from .dtos import CartDTO, CartItemDTO
from .models import Cart, CartItem


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


class CartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: CartItem) -> CartItemDTO:
        product = item.product
        return CartItemDTO(
            id=item.id,
            product=self.product_mapper.to_dto(product),
            quantity=item.quantity,
            line_total=str(to_money(product.price * item.quantity)),
        )

    def many_to_dto(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, item_mapper: Optional[CartItemMapper] = None) -> None:
        self.item_mapper = item_mapper or CartItemMapper()

    def to_dto(self, cart: Cart, items: Optional[Iterable[CartItem]] = None) -> CartDTO:
        lines = list(cart.items.all() if items is None else items)
        subtotal, item_count = compute_subtotal(
            (line.product.price, line.quantity) for line in lines
        )
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            items=self.item_mapper.many_to_dto(lines),
            item_count=item_count,
            subtotal=str(subtotal),
            created_at=_iso(cart.created_at),
            updated_at=_iso(cart.updated_at),
        )
