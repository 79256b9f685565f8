import types
import unittest

from apps.catalog.commands import ProductFilterCommand
from apps.catalog.services import CACHE_VERSION_KEY, CategoryService, ProductService
from apps.catalog.tests.test_mappers import make_category, make_product


class FakeCache:
    def __init__(self):
        self.store = {}
        self.set_calls = []

    def get(self, key, default=None):
        return self.store.get(key, default)

    def set(self, key, value, timeout=None):
        self.set_calls.append(key)
        self.store[key] = value


class FakeProductRepository:
    def __init__(self, products):
        self.products = products
        self.search_calls = []

    def search(self, filters):
        self.search_calls.append(filters)
        return list(self.products)

    def get(self, **filters):
        for product in self.products:
            if product.id == filters.get("id"):
                return product
        return None


class FakeCategoryRepository:
    def __init__(self, categories, products):
        self.categories = categories
        self.products = products

    def list(self):
        return list(self.categories)

    def get_by_slug(self, slug):
        return next((c for c in self.categories if c.slug == slug), None)

    def products_for(self, category):
        return [p for p in self.products if p.category.slug == category.slug]


class ProductServiceTests(unittest.TestCase):
    def setUp(self):
        self.repo = FakeProductRepository([make_product()])
        self.cache = FakeCache()
        self.service = ProductService(products=self.repo, cache_backend=self.cache)

    def test_list_is_cached_per_filter(self):
        first = self.service.list_products()
        second = self.service.list_products()
        self.assertEqual(first, second)
        self.assertEqual(len(self.repo.search_calls), 1)
        self.service.list_products(ProductFilterCommand(featured=True))
        self.assertEqual(len(self.repo.search_calls), 2)

    def test_search_bypasses_cache(self):
        self.service.list_products(ProductFilterCommand(search="apple"))
        self.service.list_products(ProductFilterCommand(search="apple"))
        self.assertEqual(len(self.repo.search_calls), 2)
        self.assertEqual(self.cache.set_calls, [])

    def test_bump_version_invalidates_listing(self):
        self.service.list_products()
        self.assertEqual(self.service.bump_cache_version(), 2)
        self.assertEqual(self.cache.get(CACHE_VERSION_KEY), 2)
        self.service.list_products()
        self.assertEqual(len(self.repo.search_calls), 2)

    def test_disabled_cache_always_queries(self):
        service = ProductService(products=self.repo, cache_backend=self.cache, disable_cache=True)
        service.list_products()
        service.list_products()
        self.assertEqual(len(self.repo.search_calls), 2)
        self.assertEqual(self.cache.store, {})

    def test_get_product(self):
        self.assertEqual(self.service.get_product(10).name, "Fresh Apples")
        self.assertIsNone(self.service.get_product(999))

    def test_paginated_listing(self):
        from rest_framework.request import Request
        from rest_framework.test import APIRequestFactory

        from apps.catalog.pagination import ProductListPagination

        repo = FakeProductRepository([make_product(id=i, slug=f"p-{i}") for i in range(1, 16)])
        service = ProductService(products=repo, cache_backend=FakeCache())
        request = Request(APIRequestFactory().get("/api/products/", {"page": 2}))
        response = service.list_products_paginated(
            request, paginator_class=ProductListPagination
        )
        self.assertEqual(response.data["count"], 15)
        self.assertEqual(len(response.data["results"]), 3)
        self.assertEqual(response.data["results"][0]["id"], 13)


class CategoryServiceTests(unittest.TestCase):
    def setUp(self):
        fruits = make_category()
        veg = make_category(id=2, name="Vegetables", slug="vegetables")
        products = [
            make_product(),
            make_product(id=11, slug="spinach", category=veg),
        ]
        self.service = CategoryService(FakeCategoryRepository([fruits, veg], products))

    def test_list_categories(self):
        self.assertEqual(
            [c.slug for c in self.service.list_categories()], ["fresh-fruits", "vegetables"]
        )

    def test_get_category_with_products(self):
        detail = self.service.get_category("vegetables")
        self.assertEqual([p.id for p in detail.products], [11])

    def test_get_missing_category(self):
        self.assertIsNone(self.service.get_category("nope"))
