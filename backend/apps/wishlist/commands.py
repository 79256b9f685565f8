from dataclasses import dataclass
from typing import Any, Dict


class CommandValidationError(ValueError):
    def __init__(self, details: Dict[str, Any]):
        super().__init__("Invalid wishlist payload")
        self.details = details


@dataclass
class WishlistAddCommand:
    product_id: int

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "WishlistAddCommand":
        raw = payload.get("productId") if isinstance(payload, dict) else None
        try:
            product_id = int(raw) if not isinstance(raw, bool) else 0
        except (TypeError, ValueError):
            product_id = 0
        if product_id <= 0:
            raise CommandValidationError(
                {"productId": "A positive integer product id is required."}
            )
        return WishlistAddCommand(product_id=product_id)
