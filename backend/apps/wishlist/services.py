from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from django.db import IntegrityError, transaction

from apps.api.utils import ErrorTuple
from apps.common import get_logger
from .commands import CommandValidationError, WishlistAddCommand
from .dtos import WishlistItemDTO
from .mappers import WishlistItemMapper
from .protocols import ProductRepositoryProtocol, WishlistItemRepositoryProtocol

logger = get_logger(__name__).bind(component="wishlist", layer="service")


def _already_present(product_id: int) -> ErrorTuple:
    return (
        "CONFLICT",
        "Product already in wishlist",
        {"productId": str(product_id)},
    )


class WishlistService:
    def __init__(
        self,
        items: WishlistItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        mapper: Optional[WishlistItemMapper] = None,
    ):
        self.items = items
        self.products = products
        self.mapper = mapper or WishlistItemMapper()
        self.logger = logger.bind(service="WishlistService")

    def list_items(self, user_id: int) -> List[WishlistItemDTO]:
        self.logger.debug("Listing wishlist", user_id=user_id)
        return self.mapper.many_to_dto(self.items.list_for_user(user_id))

    def add_item(
        self, user_id: int, payload: Dict[str, Any]
    ) -> Tuple[Optional[WishlistItemDTO], Optional[ErrorTuple]]:
        try:
            command = WishlistAddCommand.from_raw(payload)
        except CommandValidationError as exc:
            self.logger.warning("Wishlist add rejected: invalid payload", errors=exc.details)
            return None, ("VALIDATION_ERROR", "Invalid input", exc.details)
        product = self.products.get(id=command.product_id)
        if not product:
            self.logger.warning(
                "Wishlist add rejected: product missing",
                user_id=user_id,
                product_id=command.product_id,
            )
            return None, (
                "NOT_FOUND",
                "Product not found",
                {"productId": str(command.product_id)},
            )
        if self.items.get_for_user_product(user_id, product.id):
            self.logger.info(
                "Wishlist add rejected: duplicate", user_id=user_id, product_id=product.id
            )
            return None, _already_present(product.id)
        try:
            with transaction.atomic():
                item = self.items.create(user_id=user_id, product=product)
        except IntegrityError:
            # Lost a race against a concurrent add of the same product.
            self.logger.info(
                "Wishlist add rejected: duplicate on insert",
                user_id=user_id,
                product_id=product.id,
            )
            return None, _already_present(product.id)
        self.logger.info("Wishlist item added", user_id=user_id, product_id=product.id)
        return self.mapper.to_dto(item), None

    def remove_item(self, user_id: int, product_id: int) -> Tuple[bool, Optional[ErrorTuple]]:
        item = self.items.get_for_user_product(user_id, product_id)
        if not item:
            self.logger.info(
                "Wishlist remove failed: not present", user_id=user_id, product_id=product_id
            )
            return False, (
                "NOT_FOUND",
                "Product not in wishlist",
                {"productId": str(product_id)},
            )
        self.items.delete(item)
        self.logger.info("Wishlist item removed", user_id=user_id, product_id=product_id)
        return True, None
