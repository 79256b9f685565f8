from django.db.models import Q

from apps.common.repository import GenericRepository
from .commands import ProductFilterCommand
from .models import Category, Product


class CategoryRepository(GenericRepository[Category]):
    def __init__(self):
        super().__init__(Category)

    def list(self, **filters):  # type: ignore[override]
        return self.model.objects.filter(**filters).order_by("name")

    def get_by_slug(self, slug: str):
        return self.model.objects.filter(slug=slug).first()

    def products_for(self, category: Category):
        return (
            Product.objects.filter(category=category)
            .select_related("category")
            .prefetch_related("images")
            .order_by("-created_at", "-id")
        )


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def _base_queryset(self):
        """Products with category and images loaded to avoid N+1 during DTO mapping."""
        return self.model.objects.select_related("category").prefetch_related("images")

    def search(self, filters: ProductFilterCommand):
        qs = self._base_queryset()
        if filters.category_id is not None:
            qs = qs.filter(category_id=filters.category_id)
        if filters.category_slug:
            qs = qs.filter(category__slug=filters.category_slug)
        if filters.featured:
            qs = qs.filter(featured=True)
        if filters.search:
            qs = qs.filter(
                Q(name__icontains=filters.search)
                | Q(description__icontains=filters.search)
            )
        return qs.order_by("-created_at", "-id")
