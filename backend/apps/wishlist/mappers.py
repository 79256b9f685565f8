from typing import Iterable, List, Optional

from apps.catalog.mappers import ProductMapper
from .dtos import WishlistItemDTO
from .models import WishlistItem


class WishlistItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: WishlistItem) -> WishlistItemDTO:
        created_at = getattr(item, "created_at", None)
        return WishlistItemDTO(
            id=item.id,
            product=self.product_mapper.to_dto(item.product),
            created_at=created_at.isoformat() if created_at is not None else None,
        )

    def many_to_dto(self, items: Iterable[WishlistItem]) -> List[WishlistItemDTO]:
        return [self.to_dto(i) for i in items]
