from django.db.models.signals import post_save
from django.dispatch import receiver

from hospitals.models import Hospital
from .inventory import initialize_inventory


@receiver(post_save, sender=Hospital)
def hospital_inventory_on_create(sender, instance, created, **kwargs):
    if created:
        initialize_inventory(instance)
