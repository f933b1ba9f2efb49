from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("username", "email", "display_name", "external_id", "is_staff", "is_active")
    search_fields = ("username", "email", "display_name", "external_id")
    fieldsets = UserAdmin.fieldsets + (
        ("Identity provider", {"fields": ("external_id", "display_name", "picture_url")}),
    )
    readonly_fields = ("external_id",)
