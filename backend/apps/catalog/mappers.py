from typing import Iterable, List

from .dtos import CategoryDTO, CategoryDetailDTO, ProductDTO, ProductImageDTO
from .models import Category, Product


class CategoryMapper:
    @staticmethod
    def to_dto(cat: Category) -> CategoryDTO:
        return CategoryDTO(
            id=cat.id,
            name=cat.name,
            slug=cat.slug,
            image_url=cat.image_url or "",
        )

    @staticmethod
    def many_to_dto(categories: Iterable[Category]) -> List[CategoryDTO]:
        return [CategoryMapper.to_dto(c) for c in categories]

    @staticmethod
    def to_detail_dto(cat: Category, products: Iterable[Product]) -> CategoryDetailDTO:
        return CategoryDetailDTO(
            id=cat.id,
            name=cat.name,
            slug=cat.slug,
            image_url=cat.image_url or "",
            products=ProductMapper.many_to_dto(products),
        )


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        category = getattr(product, "category", None)
        created_at = getattr(product, "created_at", None)
        return ProductDTO(
            id=product.id,
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=str(product.price),
            discount=str(product.discount) if product.discount is not None else None,
            stock=product.stock,
            featured=bool(product.featured),
            category=CategoryMapper.to_dto(category) if category is not None else None,
            images=[
                ProductImageDTO(id=img.id, url=img.url) for img in product.images.all()
            ],
            created_at=created_at.isoformat() if created_at is not None else None,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
