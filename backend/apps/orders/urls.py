from django.urls import path

from .views import OrderDetailView, OrderListView, OrderQuoteView

urlpatterns = [
    path("", OrderListView.as_view(), name="api-orders-list"),
    path("quote/", OrderQuoteView.as_view(), name="api-orders-quote"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="api-orders-detail"),
]
