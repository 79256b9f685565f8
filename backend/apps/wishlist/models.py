from django.db import models
from apps.users.models import User
from apps.catalog.models import Product


class WishlistItem(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="wishlist_items")
    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="wishlist_items"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "product"], name="wishlist_item_unique_product"
            ),
        ]

    def __str__(self):
        return f"Wishlist {self.user_id}: {self.product_id}"
