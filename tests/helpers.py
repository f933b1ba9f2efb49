import json

from django.conf import settings
from django.test import Client

from blood.models import BloodStock


def set_stock(hospital, blood_type, units, last_updated_at=None):
    fields = {"units_available": units}
    if last_updated_at is not None:
        fields["last_updated_at"] = last_updated_at
    BloodStock.objects.filter(hospital=hospital, blood_type=blood_type).update(**fields)


def units(hospital, blood_type):
    return BloodStock.objects.get(hospital=hospital, blood_type=blood_type).units_available


def send_json(client, method, url, payload, **extra):
    return getattr(client, method)(url, data=json.dumps(payload), content_type="application/json", **extra)


def csrf_client(user, token="a" * 32):
    """
    Client that enforces CSRF like a browser session, already holding a token cookie.
    Returns (client, headers) where headers carry the matching X-CSRFToken.
    """
    client = Client(enforce_csrf_checks=True)
    client.force_login(user)
    client.cookies[settings.CSRF_COOKIE_NAME] = token
    return client, {"HTTP_X_CSRFTOKEN": token}
