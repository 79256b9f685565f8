import types
import unittest
from unittest.mock import Mock, patch

from rest_framework.response import Response
from rest_framework.test import APIRequestFactory

from apps.catalog.commands import ProductFilterCommand
from apps.catalog.services import ProductService
from apps.catalog.tests.test_mappers import make_category, make_product
from apps.catalog.mappers import CategoryMapper, ProductMapper
from apps.catalog.views import (
    CategoryDetailView,
    CategoryListView,
    ProductDetailView,
    ProductListView,
)


class CatalogViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def test_product_list_passes_filters(self):
        service = Mock()
        service.list_products_paginated.return_value = Response({"count": 0, "results": []})
        request = self.factory.get("/api/products/", {"category": "vegetables", "q": "spin"})
        with patch.object(ProductListView, "service", service):
            response = ProductListView.as_view()(request)
        self.assertEqual(response.status_code, 200)
        _, kwargs = service.list_products_paginated.call_args
        self.assertEqual(
            kwargs["filters"],
            ProductFilterCommand(category_slug="vegetables", search="spin"),
        )

    def test_product_detail(self):
        service = Mock(spec=ProductService)
        service.get_product.return_value = ProductMapper.to_dto(make_product())
        request = self.factory.get("/api/products/10/")
        with patch.object(ProductDetailView, "service", service):
            response = ProductDetailView.as_view()(request, product_id=10)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["createdAt"], "2024-05-01T00:00:00+00:00")
        self.assertEqual(response.data["category"]["slug"], "fresh-fruits")

    def test_product_detail_not_found(self):
        service = Mock()
        service.get_product.return_value = None
        request = self.factory.get("/api/products/404/")
        with patch.object(ProductDetailView, "service", service):
            response = ProductDetailView.as_view()(request, product_id=404)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")

    def test_category_list(self):
        service = Mock()
        service.list_categories.return_value = [CategoryMapper.to_dto(make_category())]
        request = self.factory.get("/api/categories/")
        with patch.object(CategoryListView, "service", service):
            response = CategoryListView.as_view()(request)
        self.assertEqual(response.data[0]["imageUrl"], "")

    def test_category_detail_not_found(self):
        service = Mock()
        service.get_category.return_value = None
        request = self.factory.get("/api/categories/nope/")
        with patch.object(CategoryDetailView, "service", service):
            response = CategoryDetailView.as_view()(request, slug="nope")
        self.assertEqual(response.status_code, 404)
