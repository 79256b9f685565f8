from dataclasses import dataclass
from typing import Optional

from apps.catalog.dtos import ProductDTO


@dataclass
class WishlistItemDTO:
    id: int
    product: ProductDTO
    created_at: Optional[str] = None
