from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CategoryDTO:
    id: int
    name: str
    slug: str
    image_url: str


@dataclass
class ProductImageDTO:
    id: int
    url: str


@dataclass
class ProductDTO:
    id: int
    name: str
    slug: str
    description: str
    price: str
    discount: Optional[str]
    stock: int
    featured: bool
    category: Optional[CategoryDTO]
    images: List[ProductImageDTO] = field(default_factory=list)
    created_at: Optional[str] = None


@dataclass
class CategoryDetailDTO:
    id: int
    name: str
    slug: str
    image_url: str
    products: List[ProductDTO] = field(default_factory=list)
