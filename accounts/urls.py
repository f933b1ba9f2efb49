from django.urls import path
from . import views

urlpatterns = [
    path("oauth/<str:provider>/redirect_url", views.oauth_redirect_url, name="oauth_redirect_url"),
    path("sessions", views.create_session, name="create_session"),
    path("users/me", views.me, name="users_me"),
    path("logout", views.logout_view, name="logout"),
]
