from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Hospital(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="hospitals",
    )

    name = models.CharField(max_length=200)

    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    district = models.CharField(max_length=100, blank=True, db_index=True)
    zip_code = models.CharField(max_length=20)

    phone = models.CharField(max_length=30)
    email = models.EmailField()

    latitude = models.FloatField(
        null=True, blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
    )
    longitude = models.FloatField(
        null=True, blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["is_active", "name"], name="hospital_active_name_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.city})"

    @property
    def has_coordinates(self):
        # a half-filled coordinate is no coordinate
        return self.latitude is not None and self.longitude is not None

    def public_fields(self):
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "district": self.district or None,
            "zip_code": self.zip_code,
            "phone": self.phone,
            "email": self.email,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    def as_json(self):
        data = self.public_fields()
        data.update({
            "user_id": self.owner_id,
            "is_active": self.is_active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        })
        return data
