from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from .commands import ProductFilterCommand
    from .models import Category, Product


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, timeout: Optional[int] = ...) -> Any: ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]: ...

    def search(self, filters: "ProductFilterCommand") -> Iterable["Product"]: ...


class CategoryRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["Category"]: ...

    def get_by_slug(self, slug: str) -> Optional["Category"]: ...

    def products_for(self, category: "Category") -> Iterable["Product"]: ...
