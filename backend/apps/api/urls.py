from django.urls import path, include

urlpatterns = [
    path("", include("apps.catalog.urls")),
    path("", include("apps.users.urls")),
    path("auth/", include("apps.auth.urls")),
    path("cart/", include("apps.carts.urls")),
    path("wishlist/", include("apps.wishlist.urls")),
    path("orders/", include("apps.orders.urls")),
]
