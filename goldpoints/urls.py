from django.urls import path

from .views import ClaimView, CustomerPointsDetailView, CustomerPointsListView

app_name = "goldpoints"

urlpatterns = [
    path("claims/", ClaimView.as_view(), name="claim"),
    path("customers/", CustomerPointsListView.as_view(), name="customer-list"),
    path(
        "customers/<path:customer_code>/",
        CustomerPointsDetailView.as_view(),
        name="customer-detail",
    ),
]
