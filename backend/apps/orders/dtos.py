from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.dtos import ProductDTO
from apps.users.dtos import AddressDTO


@dataclass
class OrderItemDTO:
    id: int
    product: ProductDTO
    quantity: int
    price: str
    line_total: str


@dataclass
class OrderDTO:
    id: int
    user_id: int
    status: str
    address: AddressDTO
    payment_method: str
    subtotal: str
    tax: str
    delivery_fee: str
    total_amount: str
    promo_code: Optional[str] = None
    promo_discount: Optional[str] = None
    items: List[OrderItemDTO] = field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class OrderQuoteDTO:
    subtotal: str
    discount: str
    tax: str
    delivery_fee: str
    total: str
    item_count: int
    promo_code: Optional[str] = None
