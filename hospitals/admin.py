from django.contrib import admin, messages

from blood.models import BloodStock
from .models import Hospital


class BloodStockInline(admin.TabularInline):
    model = BloodStock
    extra = 0
    can_delete = False
    fields = ("blood_type", "units_available", "last_updated_at")
    readonly_fields = ("last_updated_at",)
    ordering = ("blood_type",)


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "district", "owner", "is_active", "created_at")
    list_filter = ("is_active", "state", "district")
    search_fields = ("name", "email", "phone", "city", "district", "owner__username", "owner__email")
    readonly_fields = ("created_at", "updated_at")
    autocomplete_fields = ("owner",)
    inlines = [BloodStockInline]
    actions = ["activate_hospitals", "deactivate_hospitals"]

    fieldsets = (
        ("Hospital", {
            "fields": ("name", "owner", "is_active")
        }),
        ("Address", {
            "fields": ("address", "city", "state", "district", "zip_code", "latitude", "longitude")
        }),
        ("Contact", {
            "fields": ("phone", "email")
        }),
        ("Timestamps", {
            "fields": ("created_at", "updated_at")
        }),
    )

    def activate_hospitals(self, request, queryset):
        n = queryset.filter(is_active=False).update(is_active=True)
        self.message_user(request, f"{n} hospital(s) activated.", level=messages.SUCCESS)
    activate_hospitals.short_description = "Activate selected hospitals"

    def deactivate_hospitals(self, request, queryset):
        n = queryset.filter(is_active=True).update(is_active=False)
        self.message_user(request, f"{n} hospital(s) hidden from search.", level=messages.WARNING)
    deactivate_hospitals.short_description = "Deactivate selected hospitals"
