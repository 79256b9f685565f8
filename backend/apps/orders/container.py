from __future__ import annotations

from apps.carts.repositories import CartItemRepository, CartRepository
from apps.catalog.mappers import ProductMapper
from apps.users.repositories import AddressRepository, UserRepository

from .mappers import OrderItemMapper, OrderMapper
from .repositories import OrderItemRepository, OrderRepository
from .services import OrderService


def build_order_service() -> OrderService:
    return OrderService(
        orders=OrderRepository(),
        order_items=OrderItemRepository(),
        carts=CartRepository(),
        cart_items=CartItemRepository(),
        users=UserRepository(),
        addresses=AddressRepository(),
        mapper=OrderMapper(OrderItemMapper(ProductMapper())),
    )
