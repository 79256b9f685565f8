from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Order, OrderItem

if TYPE_CHECKING:
    from apps.carts.models import Cart, CartItem
    from apps.catalog.models import Product
    from apps.users.models import Address, User


class OrderRepositoryProtocol(Protocol):
    def create(self, **data) -> Order:
        ...

    def list_for_user(self, user_id: int) -> Iterable[Order]:
        ...

    def get_for_user(self, user_id: int, order_id: int) -> Optional[Order]:
        ...


class OrderItemRepositoryProtocol(Protocol):
    def create_for_order(
        self, order: Order, lines: Iterable[Tuple["Product", int, Decimal]]
    ) -> List[OrderItem]:
        ...


class CartRepositoryProtocol(Protocol):
    def get_for_user(self, user_id: int) -> Optional["Cart"]:
        ...

    def lock_for_user(self, user_id: int) -> Optional["Cart"]:
        ...


class CartItemRepositoryProtocol(Protocol):
    def list_for_cart(self, cart_id: int) -> Iterable["CartItem"]:
        ...

    def delete_for_cart(self, cart: "Cart") -> int:
        ...


class UserRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["User"]:
        ...


class AddressRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Address"]:
        ...
