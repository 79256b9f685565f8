from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from django.db import transaction

from apps.api.utils import ErrorTuple
from apps.common import get_logger
from .commands import CartItemAddCommand, CartItemUpdateCommand, CommandValidationError
from .dtos import CartDTO, CartItemDTO
from .mappers import CartItemMapper, CartMapper
from .protocols import (
    CartItemRepositoryProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
    UserRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="carts", layer="service")


def _item_not_found(item_id: int) -> ErrorTuple:
    return ("NOT_FOUND", "Cart item not found", {"itemId": str(item_id)})


class CartService:
    def __init__(
        self,
        carts: CartRepositoryProtocol,
        items: CartItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        users: UserRepositoryProtocol,
        cart_mapper: Optional[CartMapper] = None,
    ):
        self.carts = carts
        self.items = items
        self.products = products
        self.users = users
        self.cart_mapper = cart_mapper or CartMapper()
        self.item_mapper: CartItemMapper = self.cart_mapper.item_mapper
        self.logger = logger.bind(service="CartService")

    def _check_customer(self, user_id: int) -> Optional[ErrorTuple]:
        user = self.users.get(id=user_id)
        if not user:
            self.logger.warning("Cart access rejected: user missing", user_id=user_id)
            return ("NOT_FOUND", "User not found", {"userId": str(user_id)})
        if user.is_staff or user.is_superuser:
            self.logger.warning(
                "Cart access rejected for non-customer account", user_id=user_id
            )
            return (
                "FORBIDDEN",
                "Staff and admin accounts cannot own carts",
                {"userId": str(user_id)},
            )
        return None

    def get_or_create_cart(
        self, user_id: int
    ) -> Tuple[Optional[CartDTO], Optional[ErrorTuple]]:
        """Return the user's cart, creating an empty one on first access."""
        self.logger.debug("Ensuring cart exists", user_id=user_id)
        error = self._check_customer(user_id)
        if error:
            return None, error
        cart, created = self.carts.get_or_create_for_user(user_id)
        if created:
            self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        return self.cart_mapper.to_dto(cart, self.items.list_for_cart(cart.id)), None

    def add_item(
        self, user_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[CartItemDTO], bool, Optional[ErrorTuple]]:
        """
        Add a product to the user's cart.

        Adding a product already in the cart increases that line's quantity
        instead of creating a second line. Returns ``(line, created, error)``.
        """
        try:
            command = CartItemAddCommand.from_raw(payload)
        except CommandValidationError as exc:
            self.logger.warning("Cart add rejected: invalid payload", errors=exc.details)
            return None, False, ("VALIDATION_ERROR", "Invalid input", exc.details)
        error = self._check_customer(user_id)
        if error:
            return None, False, error
        product = self.products.get(id=command.product_id)
        if not product:
            self.logger.warning(
                "Cart add rejected: product missing",
                user_id=user_id,
                product_id=command.product_id,
            )
            return (
                None,
                False,
                ("NOT_FOUND", "Product not found", {"productId": str(command.product_id)}),
            )
        with transaction.atomic():
            self.carts.get_or_create_for_user(user_id)
            cart = self.carts.lock_for_user(user_id)
            existing = self.items.get_for_cart_product(cart.id, product.id)
            if existing:
                item = self.items.update(
                    existing, quantity=existing.quantity + command.quantity
                )
                created = False
            else:
                item = self.items.create(
                    cart=cart, product=product, quantity=command.quantity
                )
                created = True
            self.carts.touch(cart)
        self.logger.info(
            "Cart item added",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product.id,
            quantity=item.quantity,
            merged=not created,
        )
        return self.item_mapper.to_dto(item), created, None

    def update_item(
        self, user_id: int, item_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[CartItemDTO], bool, Optional[ErrorTuple]]:
        """Set a line's quantity; zero or less removes the line. Returns ``(line, removed, error)``."""
        try:
            command = CartItemUpdateCommand.from_raw(item_id, payload)
        except CommandValidationError as exc:
            self.logger.warning(
                "Cart update rejected: invalid payload", item_id=item_id, errors=exc.details
            )
            return None, False, ("VALIDATION_ERROR", "Invalid input", exc.details)
        with transaction.atomic():
            cart = self.carts.lock_for_user(user_id)
            item = self.items.get_for_cart(cart.id, command.item_id) if cart else None
            if not item:
                self.logger.info(
                    "Cart update failed: item not found", user_id=user_id, item_id=item_id
                )
                return None, False, _item_not_found(item_id)
            if command.removes_line:
                self.items.delete(item)
                self.carts.touch(cart)
                self.logger.info(
                    "Cart item removed via quantity update", user_id=user_id, item_id=item_id
                )
                return None, True, None
            item = self.items.update(item, quantity=command.quantity)
            self.carts.touch(cart)
        self.logger.info(
            "Cart item quantity set",
            user_id=user_id,
            item_id=item_id,
            quantity=command.quantity,
        )
        return self.item_mapper.to_dto(item), False, None

    def remove_item(
        self, user_id: int, item_id: int
    ) -> Tuple[bool, Optional[ErrorTuple]]:
        with transaction.atomic():
            cart = self.carts.lock_for_user(user_id)
            item = self.items.get_for_cart(cart.id, item_id) if cart else None
            if not item:
                self.logger.info(
                    "Cart remove failed: item not found", user_id=user_id, item_id=item_id
                )
                return False, _item_not_found(item_id)
            self.items.delete(item)
            self.carts.touch(cart)
        self.logger.info("Cart item removed", user_id=user_id, item_id=item_id)
        return True, None

    def clear_cart(self, user_id: int) -> Tuple[int, Optional[ErrorTuple]]:
        with transaction.atomic():
            cart = self.carts.lock_for_user(user_id)
            if not cart:
                self.logger.debug("Clear requested for user without cart", user_id=user_id)
                return 0, None
            removed = self.items.delete_for_cart(cart)
            self.carts.touch(cart)
        self.logger.info("Cart cleared", user_id=user_id, cart_id=cart.id, removed=removed)
        return removed, None
