from django.contrib import admin

from .models import BloodStock, BloodDonation, BloodRequest


@admin.register(BloodStock)
class BloodStockAdmin(admin.ModelAdmin):
    list_display = ("hospital", "blood_type", "units_available", "last_updated_at")
    list_filter = ("blood_type",)
    search_fields = ("hospital__name", "hospital__district")
    ordering = ("hospital__name", "blood_type")
    autocomplete_fields = ("hospital",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(BloodDonation)
class BloodDonationAdmin(admin.ModelAdmin):
    list_display = ("id", "hospital", "blood_type", "units_donated", "donation_date", "donor_name", "created_at")
    list_filter = ("blood_type", "donation_date")
    search_fields = ("hospital__name", "donor_name", "donor_phone", "donor_email")
    ordering = ("-donation_date", "-created_at")
    autocomplete_fields = ("hospital",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "requester_name",
        "blood_type",
        "units_needed",
        "urgency",
        "hospital",
        "status",
        "created_at",
    )
    list_filter = ("status", "urgency", "blood_type", "created_at")
    search_fields = (
        "requester_name",
        "requester_phone",
        "requester_email",
        "hospital__name",
    )
    ordering = ("-created_at",)
    autocomplete_fields = ("hospital",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        ("Requester", {
            "fields": ("requester_name", "requester_phone", "requester_email")
        }),
        ("Need", {
            "fields": ("blood_type", "units_needed", "urgency", "hospital", "notes")
        }),
        ("State", {
            "fields": ("status", "created_at", "updated_at")
        }),
    )
