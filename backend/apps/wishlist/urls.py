from django.urls import path

from .views import WishlistItemView, WishlistListView

urlpatterns = [
    path("", WishlistListView.as_view(), name="api-wishlist"),
    path("<int:product_id>/", WishlistItemView.as_view(), name="api-wishlist-item"),
]
