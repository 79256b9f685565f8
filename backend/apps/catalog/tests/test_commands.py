import unittest

from apps.catalog.commands import ProductFilterCommand


class ProductFilterCommandTests(unittest.TestCase):
    def test_empty_params(self):
        cmd = ProductFilterCommand.from_raw(None)
        self.assertEqual(cmd, ProductFilterCommand())
        self.assertFalse(cmd.is_search)

    def test_parses_all_filters(self):
        cmd = ProductFilterCommand.from_raw(
            {"categoryId": "3", "category": " fresh-fruits ", "featured": "true", "q": " apple "}
        )
        self.assertEqual(cmd.category_id, 3)
        self.assertEqual(cmd.category_slug, "fresh-fruits")
        self.assertTrue(cmd.featured)
        self.assertEqual(cmd.search, "apple")
        self.assertTrue(cmd.is_search)

    def test_invalid_category_id_is_ignored(self):
        self.assertIsNone(ProductFilterCommand.from_raw({"categoryId": "abc"}).category_id)
        self.assertIsNone(ProductFilterCommand.from_raw({"categoryId": "0"}).category_id)

    def test_featured_false_does_not_filter(self):
        self.assertIsNone(ProductFilterCommand.from_raw({"featured": "false"}).featured)

    def test_blank_search_is_none(self):
        self.assertIsNone(ProductFilterCommand.from_raw({"q": "   "}).search)

    def test_cache_fragment_distinguishes_filters(self):
        plain = ProductFilterCommand().cache_fragment()
        featured = ProductFilterCommand(featured=True).cache_fragment()
        by_cat = ProductFilterCommand(category_id=2).cache_fragment()
        self.assertEqual(plain, "cat-all:slug-all:featured-all")
        self.assertEqual(len({plain, featured, by_cat}), 3)
