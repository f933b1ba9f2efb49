import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from .models import BLOOD_TYPES, BloodStock

logger = logging.getLogger(__name__)


class MissingStockError(Exception):
    """A hospital has no stock row for a blood type (registration should have created it)."""

    def __init__(self, hospital_id, blood_type):
        self.hospital_id = hospital_id
        self.blood_type = blood_type
        super().__init__(f"No {blood_type} stock record for hospital {hospital_id}")


def initialize_inventory(hospital):
    """
    Create a zero-unit row for every blood type the hospital is missing.
    Returns the number of rows created.
    """
    existing = set(
        BloodStock.objects.filter(hospital=hospital).values_list("blood_type", flat=True)
    )
    rows = [
        BloodStock(hospital=hospital, blood_type=bt, units_available=0)
        for bt in BLOOD_TYPES
        if bt not in existing
    ]
    if rows:
        BloodStock.objects.bulk_create(rows, ignore_conflicts=True)
    return len(rows)


def apply_inventory_update(hospital, items):
    """
    Set units for each (blood_type, units_available) item.

    Items are applied one UPDATE at a time with no batch transaction, so a
    failure midway leaves the earlier rows written.
    """
    updated = 0
    for item in items:
        now = timezone.now()
        n = (
            BloodStock.objects
            .filter(hospital=hospital, blood_type=item["blood_type"])
            .update(
                units_available=item["units_available"],
                last_updated_at=now,
                updated_at=now,
            )
        )
        if not n:
            logger.error(
                "Inventory update skipped: hospital %s has no %s stock row",
                hospital.pk, item["blood_type"],
            )
            continue
        updated += n

    logger.info("Inventory update for hospital %s: %s row(s)", hospital.pk, updated)
    return updated


@transaction.atomic
def record_donation(hospital, donation):
    """
    Save an (unsaved) BloodDonation for hospital and add its units to stock.
    Rolls back and raises MissingStockError if the stock row is absent.
    """
    donation.hospital = hospital
    donation.save()

    now = timezone.now()
    n = (
        BloodStock.objects
        .filter(hospital=hospital, blood_type=donation.blood_type)
        .update(
            units_available=F("units_available") + donation.units_donated,
            last_updated_at=now,
            updated_at=now,
        )
    )
    if not n:
        logger.error(
            "Donation %s not applied: hospital %s has no %s stock row",
            donation.pk, hospital.pk, donation.blood_type,
        )
        raise MissingStockError(hospital.pk, donation.blood_type)

    logger.info(
        "Donation %s recorded: +%s %s at hospital %s",
        donation.pk, donation.units_donated, donation.blood_type, hospital.pk,
    )
    return donation
