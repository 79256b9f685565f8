from __future__ import annotations

from typing import Iterable, Optional, Protocol, Tuple, TYPE_CHECKING

from .models import Cart, CartItem

if TYPE_CHECKING:
    from apps.catalog.models import Product
    from apps.users.models import User


class CartRepositoryProtocol(Protocol):
    def get_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        ...

    def lock_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def touch(self, cart: Cart) -> Cart:
        ...


class CartItemRepositoryProtocol(Protocol):
    def create(self, **data) -> CartItem:
        ...

    def update(self, obj: CartItem, **data) -> CartItem:
        ...

    def delete(self, obj: CartItem) -> None:
        ...

    def list_for_cart(self, cart_id: int) -> Iterable[CartItem]:
        ...

    def get_for_cart(self, cart_id: int, item_id: int) -> Optional[CartItem]:
        ...

    def get_for_cart_product(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        ...

    def delete_for_cart(self, cart: Cart) -> int:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class UserRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["User"]:
        ...
