from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import AlertListView, InventoryViewSet

router = SimpleRouter(trailing_slash=False)
router.register("inventory", InventoryViewSet, basename="inventory")

urlpatterns = [
    path("alerts", AlertListView.as_view(), name="alerts"),
] + router.urls
