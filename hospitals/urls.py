from django.urls import path
from . import views

urlpatterns = [
    path("hospitals", views.hospital_register, name="hospital_register"),
    path("hospitals/my", views.my_hospitals, name="my_hospitals"),
    path("hospitals/<int:hospital_id>", views.hospital_update, name="hospital_update"),
    path("districts", views.district_list, name="district_list"),
]
