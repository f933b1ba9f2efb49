from django.urls import path
from . import views

urlpatterns = [
    path("search", views.find_blood, name="find_blood"),
    path("donor-search", views.find_donation_centers, name="find_donation_centers"),
    path("hospitals/<int:hospital_id>/inventory", views.hospital_inventory, name="hospital_inventory"),
    path("hospitals/<int:hospital_id>/donations", views.hospital_donations, name="hospital_donations"),
    path("hospitals/<int:hospital_id>/requests", views.hospital_requests, name="hospital_requests"),
    path("blood-requests", views.blood_request_create, name="blood_request_create"),
    path("blood-requests/<int:request_id>/status", views.blood_request_status, name="blood_request_status"),
]
