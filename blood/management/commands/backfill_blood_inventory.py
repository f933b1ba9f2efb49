from django.core.management.base import BaseCommand

from blood.inventory import initialize_inventory
from hospitals.models import Hospital


class Command(BaseCommand):
    help = "Create any missing zero-unit stock rows so every hospital has all eight blood types."

    def add_arguments(self, parser):
        parser.add_argument(
            "--hospital",
            type=int,
            action="append",
            dest="hospital_ids",
            help="Limit to these hospital ids (repeatable).",
        )

    def handle(self, *args, **options):
        qs = Hospital.objects.all().order_by("id")
        if options.get("hospital_ids"):
            qs = qs.filter(id__in=options["hospital_ids"])

        hospitals = 0
        created = 0
        for hospital in qs.iterator():
            n = initialize_inventory(hospital)
            if n:
                hospitals += 1
                created += n
                self.stdout.write(f"{hospital.name} (#{hospital.id}): +{n} stock row(s)")

        self.stdout.write(self.style.SUCCESS(
            f"Backfill complete. {created} row(s) created across {hospitals} hospital(s)."
        ))
