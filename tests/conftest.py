import itertools

import pytest

from accounts.models import CustomUser
from hospitals.models import Hospital
from tests.helpers import set_stock

_seq = itertools.count(1)


@pytest.fixture
def owner(db):
    return CustomUser.objects.create_user(username="owner", email="owner@example.com", password="pw")


@pytest.fixture
def other_user(db):
    return CustomUser.objects.create_user(username="intruder", email="intruder@example.com", password="pw")


@pytest.fixture
def owner_client(client, owner):
    client.force_login(owner)
    return client


@pytest.fixture
def make_hospital(db, owner):
    """
    make_hospital(name, stock={"O+": 3}, district=..., latitude=..., longitude=..., ...)
    """
    def _make(name="City Hospital", stock=None, **fields):
        n = next(_seq)
        data = {
            "owner": owner,
            "name": name,
            "address": f"{n} Main St",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
            "phone": "555-0100",
            "email": f"hospital{n}@example.com",
        }
        data.update(fields)
        hospital = Hospital.objects.create(**data)
        for blood_type, units in (stock or {}).items():
            set_stock(hospital, blood_type, units)
        return hospital
    return _make


@pytest.fixture
def hospital_payload():
    return {
        "name": "Riverside General",
        "address": "12 River Rd",
        "city": "Springfield",
        "state": "IL",
        "district": "Riverside",
        "zip_code": "62704",
        "phone": "+1 555 0101",
        "email": "contact@riverside.example.com",
        "latitude": 39.78,
        "longitude": -89.65,
    }
