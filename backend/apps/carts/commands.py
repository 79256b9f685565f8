from dataclasses import dataclass
from typing import Any, Dict, Optional


class CommandValidationError(ValueError):
    """Raised when a raw cart payload cannot be turned into a command."""

    def __init__(self, details: Dict[str, Any]):
        super().__init__("Invalid cart payload")
        self.details = details


def _parse_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


@dataclass
class CartItemAddCommand:
    product_id: int
    quantity: int

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "CartItemAddCommand":
        if not isinstance(payload, dict):
            raise CommandValidationError({"non_field_errors": "Payload must be an object"})
        errors: Dict[str, Any] = {}
        pid = _parse_int(payload.get("productId", payload.get("product_id")))
        if pid is None or pid <= 0:
            errors["productId"] = "A positive integer product id is required."
        qty = _parse_int(payload.get("quantity", 1))
        if qty is None or qty < 1:
            errors["quantity"] = "Quantity must be a positive integer."
        if errors:
            raise CommandValidationError(errors)
        return CartItemAddCommand(product_id=pid, quantity=qty)


@dataclass
class CartItemUpdateCommand:
    item_id: int
    quantity: int

    @property
    def removes_line(self) -> bool:
        return self.quantity <= 0

    @staticmethod
    def from_raw(item_id: int, payload: Dict[str, Any]) -> "CartItemUpdateCommand":
        if not isinstance(payload, dict) or "quantity" not in payload:
            raise CommandValidationError({"quantity": "Quantity is required."})
        qty = _parse_int(payload.get("quantity"))
        if qty is None:
            raise CommandValidationError({"quantity": "Quantity must be an integer."})
        return CartItemUpdateCommand(item_id=int(item_id), quantity=qty)
