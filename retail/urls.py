from django.urls import include, path

urlpatterns = [
    path("api/", include("Inventory.urls")),
    path("api/", include("Orders.urls")),
    path("api/", include("Reports.urls")),
]
