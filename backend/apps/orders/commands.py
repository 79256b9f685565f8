from dataclasses import dataclass
from typing import Any, Dict, Optional

from apps.api.exceptions import ValidationFailed


@dataclass
class PlaceOrderCommand:
    address_id: Any
    payment_method: Any
    promo_code: Optional[str] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "PlaceOrderCommand":
        payload = payload if isinstance(payload, dict) else {}
        return PlaceOrderCommand(
            address_id=payload.get("addressId"),
            payment_method=payload.get("paymentMethod"),
            promo_code=payload.get("promoCode"),
        )

    def validated(self) -> "PlaceOrderCommand":
        """Normalise the fields, raising ``ValidationFailed`` listing every bad one."""
        errors: Dict[str, str] = {}
        address_id: Optional[int] = None
        if self.address_id in (None, "") or isinstance(self.address_id, bool):
            errors["addressId"] = "This field is required."
        else:
            try:
                address_id = int(self.address_id)
            except (TypeError, ValueError):
                address_id = None
            if address_id is None or address_id <= 0:
                errors["addressId"] = "A positive integer address id is required."
        payment_method = (
            self.payment_method.strip() if isinstance(self.payment_method, str) else ""
        )
        if not payment_method:
            errors["paymentMethod"] = "This field is required."
        elif len(payment_method) > 50:
            errors["paymentMethod"] = "Ensure this field has no more than 50 characters."
        if errors:
            raise ValidationFailed("Address and payment method are required", details=errors)
        promo = self.promo_code if isinstance(self.promo_code, str) else None
        return PlaceOrderCommand(
            address_id=address_id,
            payment_method=payment_method,
            promo_code=promo,
        )
