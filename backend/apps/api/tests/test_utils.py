import unittest
from rest_framework import status
from apps.api.utils import error_from_tuple, error_response, status_for_code


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "Cart item not found", {"itemId": "4"})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"itemId": "4"})

    def test_cart_empty_is_bad_request(self):
        self.assertEqual(status_for_code("CART_EMPTY"), status.HTTP_400_BAD_REQUEST)
        self.assertEqual(status_for_code(" forbidden "), status.HTTP_403_FORBIDDEN)

    def test_unknown_code_defaults_to_bad_request(self):
        resp = error_response("SOMETHING_ODD", "odd")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_error_response_supports_hint_and_extra(self):
        resp = error_response(
            "VALIDATION_ERROR",
            "Invalid value",
            hint="Use digits only",
            extra={"field": "postalCode"},
        )
        payload = resp.data["error"]
        self.assertEqual(payload["hint"], "Use digits only")
        self.assertEqual(payload["extra"], {"field": "postalCode"})

    def test_error_from_tuple(self):
        resp = error_from_tuple(("CONFLICT", "Product already in wishlist", {"productId": "2"}))
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["details"], {"productId": "2"})

    def test_rejects_blank_code(self):
        with self.assertRaises(ValueError):
            error_response("  ", "message")
