import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

BLOOD_TYPE_CHOICES = [
    ("A+", "A+"), ("A-", "A-"), ("B+", "B+"), ("B-", "B-"),
    ("AB+", "AB+"), ("AB-", "AB-"), ("O+", "O+"), ("O-", "O-"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("hospitals", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="BloodStock",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("blood_type", models.CharField(choices=BLOOD_TYPE_CHOICES, max_length=3)),
                ("units_available", models.PositiveIntegerField(default=0)),
                ("last_updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("hospital", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="stocks", to="hospitals.hospital")),
            ],
            options={
                "ordering": ["hospital_id", "blood_type"],
                "indexes": [models.Index(fields=["blood_type", "units_available"], name="stock_type_units_idx")],
                "unique_together": {("hospital", "blood_type")},
            },
        ),
        migrations.CreateModel(
            name="BloodDonation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("donor_name", models.CharField(blank=True, max_length=150)),
                ("donor_phone", models.CharField(blank=True, max_length=30)),
                ("donor_email", models.EmailField(blank=True, max_length=254)),
                ("blood_type", models.CharField(choices=BLOOD_TYPE_CHOICES, max_length=3)),
                ("units_donated", models.PositiveIntegerField()),
                ("donation_date", models.DateField()),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("hospital", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="donations", to="hospitals.hospital")),
            ],
            options={
                "ordering": ["-donation_date", "-created_at"],
                "indexes": [models.Index(fields=["hospital", "created_at"], name="donation_hosp_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="BloodRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("requester_name", models.CharField(max_length=150)),
                ("requester_phone", models.CharField(max_length=30)),
                ("requester_email", models.EmailField(max_length=254)),
                ("blood_type", models.CharField(choices=BLOOD_TYPE_CHOICES, max_length=3)),
                ("units_needed", models.PositiveIntegerField()),
                ("urgency", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("critical", "Critical")], max_length=10)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("approved", "Approved"), ("fulfilled", "Fulfilled"), ("cancelled", "Cancelled")], default="pending", max_length=10)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("hospital", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="blood_requests", to="hospitals.hospital")),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["hospital", "status", "updated_at"], name="request_hosp_status_idx")],
            },
        ),
    ]
