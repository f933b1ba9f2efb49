from django.urls import path
from . import consumers

websocket_urlpatterns = [
    path("hospitals/<int:hospital_id>/", consumers.HospitalDashboardConsumer.as_asgi()),
]
