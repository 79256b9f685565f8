from __future__ import annotations

from typing import List, Optional

from django.db import transaction

from apps.api.exceptions import (
    ApplicationError,
    CartEmpty,
    Internal,
    NotFound,
    Unauthenticated,
)
from apps.common import get_logger
from .commands import PlaceOrderCommand
from .dtos import OrderDTO, OrderQuoteDTO
from .mappers import OrderMapper, QuoteMapper
from .pricing import compute_order_totals
from .protocols import (
    AddressRepositoryProtocol,
    CartItemRepositoryProtocol,
    CartRepositoryProtocol,
    OrderItemRepositoryProtocol,
    OrderRepositoryProtocol,
    UserRepositoryProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")


class OrderService:
    """
    Checkout and order history for a single customer.

    ``place_order`` is the only writer. It prices the cart, stores the order
    with its lines and empties the cart in one database transaction, holding a
    row lock on the cart so that two concurrent checkouts of the same cart
    cannot both succeed.
    """

    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        order_items: OrderItemRepositoryProtocol,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        users: UserRepositoryProtocol,
        addresses: AddressRepositoryProtocol,
        mapper: Optional[OrderMapper] = None,
    ):
        self.orders = orders
        self.order_items = order_items
        self.carts = carts
        self.cart_items = cart_items
        self.users = users
        self.addresses = addresses
        self.mapper = mapper or OrderMapper()
        self.logger = logger.bind(service="OrderService")

    def place_order(
        self,
        user_id: Optional[int],
        address_id,
        payment_method,
        promo_code: Optional[str] = None,
    ) -> OrderDTO:
        if user_id is None:
            self.logger.warning("Checkout rejected: no authenticated user")
            raise Unauthenticated()
        command = PlaceOrderCommand(address_id, payment_method, promo_code).validated()

        if not self.users.get(id=user_id):
            self.logger.warning("Checkout rejected: user missing", user_id=user_id)
            raise NotFound("User not found", details={"userId": str(user_id)})
        address = self.addresses.get(id=command.address_id, user_id=user_id)
        if not address:
            self.logger.warning(
                "Checkout rejected: address not found",
                user_id=user_id,
                address_id=command.address_id,
            )
            raise NotFound(
                "Address not found", details={"addressId": str(command.address_id)}
            )

        try:
            with transaction.atomic():
                cart = self.carts.lock_for_user(user_id)
                lines = list(self.cart_items.list_for_cart(cart.id)) if cart else []
                if not lines:
                    self.logger.info("Checkout rejected: cart empty", user_id=user_id)
                    raise CartEmpty(details={"userId": str(user_id)})
                totals = compute_order_totals(
                    [(line.product.price, line.quantity) for line in lines],
                    command.promo_code,
                )
                order = self.orders.create(
                    user_id=user_id,
                    address=address,
                    total_amount=totals.total,
                    tax=totals.tax,
                    delivery_fee=totals.delivery_fee,
                    promo_code=totals.applied_promo_code,
                    promo_discount=totals.discount if totals.promo_applied else None,
                    payment_method=command.payment_method,
                )
                self.order_items.create_for_order(
                    order,
                    [(line.product, line.quantity, line.product.price) for line in lines],
                )
                self.cart_items.delete_for_cart(cart)
        except ApplicationError:
            raise
        except Exception as exc:
            self.logger.exception("Checkout failed; transaction rolled back", user_id=user_id)
            raise Internal() from exc

        self.logger.info(
            "Order placed",
            user_id=user_id,
            order_id=order.id,
            lines=len(lines),
            total=str(totals.total),
            promo_code=totals.applied_promo_code,
        )
        placed = self.orders.get_for_user(user_id, order.id) or order
        return self.mapper.to_dto(placed)

    def list_orders(self, user_id: int) -> List[OrderDTO]:
        self.logger.debug("Listing orders", user_id=user_id)
        return self.mapper.many_to_dto(self.orders.list_for_user(user_id))

    def get_order(self, user_id: int, order_id: int) -> OrderDTO:
        self.logger.debug("Fetching order", user_id=user_id, order_id=order_id)
        order = self.orders.get_for_user(user_id, order_id)
        if not order:
            self.logger.info("Order not found", user_id=user_id, order_id=order_id)
            raise NotFound("Order not found", details={"orderId": str(order_id)})
        return self.mapper.to_dto(order)

    def quote(self, user_id: int, promo_code: Optional[str] = None) -> OrderQuoteDTO:
        """Price the current cart without writing; an empty cart quotes all zeros."""
        cart = self.carts.get_for_user(user_id)
        lines = list(self.cart_items.list_for_cart(cart.id)) if cart else []
        totals = compute_order_totals(
            [(line.product.price, line.quantity) for line in lines], promo_code
        )
        self.logger.debug(
            "Quoted cart",
            user_id=user_id,
            item_count=totals.item_count,
            total=str(totals.total),
        )
        return QuoteMapper.to_dto(totals)
