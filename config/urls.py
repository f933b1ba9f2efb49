from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("accounts.urls")),  # oauth / sessions / me / logout
    path("api/", include("hospitals.urls")),  # registry + districts
    path("api/", include("blood.urls")),  # search, inventory, donations, requests
]
