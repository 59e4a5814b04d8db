from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import DashboardView, OrderViewSet

router = SimpleRouter(trailing_slash=False)
router.register("orders", OrderViewSet, basename="orders")

urlpatterns = [
    path("dashboard", DashboardView.as_view(), name="dashboard"),
] + router.urls
