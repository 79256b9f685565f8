from django.urls import path
from .views import AccountView, AddressDetailView, AddressListView

urlpatterns = [
    path("addresses/", AddressListView.as_view(), name="api-addresses-list"),
    path(
        "addresses/<int:address_id>/",
        AddressDetailView.as_view(),
        name="api-addresses-detail",
    ),
    path("account/", AccountView.as_view(), name="api-account"),
]
