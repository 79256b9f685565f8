from dataclasses import dataclass
from typing import Any, Mapping, Optional

_TRUE_VALUES = ("1", "true", "yes")


@dataclass(frozen=True)
class ProductFilterCommand:
    category_id: Optional[int] = None
    category_slug: Optional[str] = None
    featured: Optional[bool] = None
    search: Optional[str] = None

    @property
    def is_search(self) -> bool:
        return bool(self.search)

    def cache_fragment(self) -> str:
        return ":".join(
            [
                f"cat-{self.category_id or 'all'}",
                f"slug-{self.category_slug or 'all'}",
                f"featured-{'1' if self.featured else 'all'}",
            ]
        )

    @staticmethod
    def _parse_int(raw: Any) -> Optional[int]:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return None
        return value if value > 0 else None

    @staticmethod
    def from_raw(params: Optional[Mapping[str, Any]]) -> "ProductFilterCommand":
        data = params or {}
        slug = str(data.get("category") or "").strip() or None
        search = str(data.get("q") or "").strip() or None
        featured_raw = str(data.get("featured") or "").strip().lower()
        return ProductFilterCommand(
            category_id=ProductFilterCommand._parse_int(data.get("categoryId")),
            category_slug=slug,
            # Only an explicit "true" narrows the listing; false means unfiltered.
            featured=True if featured_raw in _TRUE_VALUES else None,
            search=search,
        )
