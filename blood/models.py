from django.db import models
from django.utils import timezone

BLOOD_TYPES = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]
BLOOD_TYPE_CHOICES = [(bt, bt) for bt in BLOOD_TYPES]


class BloodStock(models.Model):
    """
    One row per (hospital, blood type); all eight exist once a hospital is registered.
    """
    hospital = models.ForeignKey("hospitals.Hospital", on_delete=models.CASCADE, related_name="stocks")
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    units_available = models.PositiveIntegerField(default=0)

    last_updated_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ("hospital", "blood_type")
        ordering = ["hospital_id", "blood_type"]
        indexes = [
            models.Index(fields=["blood_type", "units_available"], name="stock_type_units_idx"),
        ]

    def __str__(self):
        return f"{self.hospital_id}:{self.blood_type} = {self.units_available}"

    def as_json(self):
        return {
            "id": self.id,
            "hospital_id": self.hospital_id,
            "blood_type": self.blood_type,
            "units_available": self.units_available,
            "last_updated_at": self.last_updated_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class BloodDonation(models.Model):
    hospital = models.ForeignKey("hospitals.Hospital", on_delete=models.CASCADE, related_name="donations")

    donor_name = models.CharField(max_length=150, blank=True)
    donor_phone = models.CharField(max_length=30, blank=True)
    donor_email = models.EmailField(blank=True)

    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    units_donated = models.PositiveIntegerField()
    donation_date = models.DateField()
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-donation_date", "-created_at"]
        indexes = [
            models.Index(fields=["hospital", "created_at"], name="donation_hosp_created_idx"),
        ]

    def __str__(self):
        return f"{self.units_donated}u {self.blood_type} -> {self.hospital_id}"

    def as_json(self):
        return {
            "id": self.id,
            "hospital_id": self.hospital_id,
            "donor_name": self.donor_name or None,
            "donor_phone": self.donor_phone or None,
            "donor_email": self.donor_email or None,
            "blood_type": self.blood_type,
            "units_donated": self.units_donated,
            "donation_date": self.donation_date,
            "notes": self.notes or None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class BloodRequest(models.Model):
    URGENCY = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("critical", "Critical"),
    ]
    STATUS = [
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("fulfilled", "Fulfilled"),
        ("cancelled", "Cancelled"),
    ]

    requester_name = models.CharField(max_length=150)
    requester_phone = models.CharField(max_length=30)
    requester_email = models.EmailField()

    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    units_needed = models.PositiveIntegerField()
    urgency = models.CharField(max_length=10, choices=URGENCY)  # display only

    hospital = models.ForeignKey("hospitals.Hospital", on_delete=models.CASCADE, related_name="blood_requests")
    status = models.CharField(max_length=10, choices=STATUS, default="pending")
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["hospital", "status", "updated_at"], name="request_hosp_status_idx"),
        ]

    def __str__(self):
        return f"Need {self.units_needed}u {self.blood_type} at {self.hospital_id} ({self.status})"

    def as_json(self):
        return {
            "id": self.id,
            "requester_name": self.requester_name,
            "requester_phone": self.requester_phone,
            "requester_email": self.requester_email,
            "blood_type": self.blood_type,
            "units_needed": self.units_needed,
            "urgency": self.urgency,
            "hospital_id": self.hospital_id,
            "status": self.status,
            "notes": self.notes or None,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
