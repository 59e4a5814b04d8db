from django.urls import re_path

from .views import csv_export

urlpatterns = [
    re_path(r"^data/(?P<name>[A-Za-z_]+)\.csv$", csv_export, name="csv-export"),
]
