from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.dtos import ProductDTO


@dataclass
class CartItemDTO:
    id: int
    product: ProductDTO
    quantity: int
    line_total: str


@dataclass
class CartDTO:
    id: int
    user_id: int
    items: List[CartItemDTO] = field(default_factory=list)
    item_count: int = 0
    subtotal: str = "0.00"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
