import math
from datetime import timedelta

import pytest
from django.utils import timezone

from blood.matching import (
    distance_to, haversine_km, search_blood, search_donation_centers,
)
from blood.models import BloodDonation, BloodRequest
from tests.helpers import set_stock


# ---------- Distance ----------

def test_haversine_is_zero_for_identical_points():
    assert haversine_km(27.7, 85.3, 27.7, 85.3) == 0


def test_haversine_is_symmetric():
    a = (27.7172, 85.3240)
    b = (28.2096, 83.9856)
    assert haversine_km(*a, *b) == pytest.approx(haversine_km(*b, *a))


def test_haversine_antipodes_are_half_the_circumference():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(math.pi * 6371, rel=1e-9)
    assert haversine_km(90, 0, -90, 0) == pytest.approx(20015.09, abs=0.01)


def test_haversine_one_degree_of_longitude_at_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(111.19, abs=0.01)


def test_distance_to_needs_both_hospital_coordinates(make_hospital):
    half = make_hospital(latitude=10.0)
    full = make_hospital(latitude=0.0, longitude=0.0)

    assert half.has_coordinates is False
    assert distance_to(half, 10.0, 10.0) is None
    assert distance_to(full, None, 0.0) is None
    assert distance_to(full, 0.0, 0.45) == 50.0


# ---------- Find blood ----------

@pytest.mark.django_db
def test_empty_store_gives_empty_list():
    assert search_blood("O+") == []


def test_zero_units_are_excluded(make_hospital):
    empty = make_hospital("Empty", stock={"O+": 0})
    stocked = make_hospital("Stocked", stock={"O+": 2})

    ids = [r["id"] for r in search_blood("O+")]
    assert ids == [stocked.id]
    assert empty.id not in ids


def test_only_the_requested_type_matches(make_hospital):
    make_hospital("Only A", stock={"A+": 9})
    assert search_blood("O+") == []
    assert [r["blood_type"] for r in search_blood("A+")] == ["A+"]


def test_inactive_hospitals_are_excluded(make_hospital):
    make_hospital("Closed", stock={"O+": 5}, is_active=False)
    assert search_blood("O+") == []


def test_district_is_case_insensitive(make_hospital):
    h = make_hospital("River", stock={"O+": 3}, district="Riverside")
    results = search_blood("O+", district="riverside")
    assert [r["id"] for r in results] == [h.id]
    assert results[0]["units_available"] == 3


def test_district_is_exact(make_hospital):
    make_hospital("NE", stock={"O+": 3}, district="Northeast")
    north = make_hospital("N", stock={"O+": 3}, district="North")

    assert [r["id"] for r in search_blood("O+", district="North")] == [north.id]


def test_name_is_case_insensitive_substring(make_hospital):
    a = make_hospital("St. General Hospital", stock={"B-": 1})
    b = make_hospital("general clinic", stock={"B-": 1})
    make_hospital("Mercy", stock={"B-": 1})

    ids = {r["id"] for r in search_blood("B-", hospital_name="General")}
    assert ids == {a.id, b.id}


def test_radius_includes_near_and_excludes_far(make_hospital):
    h = make_hospital("Equator", stock={"O+": 4}, latitude=0.0, longitude=0.0)

    included = search_blood("O+", lat=0.0, lng=0.45, radius=50)
    assert [r["id"] for r in included] == [h.id]
    assert included[0]["distance"] == pytest.approx(50.0)

    assert search_blood("O+", lat=0.0, lng=0.45, radius=40) == []


def test_radius_boundary_is_inclusive(make_hospital):
    h = make_hospital("Edge", stock={"O+": 1}, latitude=27.70, longitude=85.30)
    d = distance_to(h, 27.70, 85.40)

    assert [r["id"] for r in search_blood("O+", lat=27.70, lng=85.40, radius=d)] == [h.id]
    assert search_blood("O+", lat=27.70, lng=85.40, radius=d - 0.1) == []


def test_radius_defaults_to_50_km_with_a_query_point(make_hospital):
    near = make_hospital("Near", stock={"O+": 1}, latitude=0.0, longitude=0.2)
    make_hospital("Far", stock={"O+": 1}, latitude=0.0, longitude=0.6)

    assert [r["id"] for r in search_blood("O+", lat=0.0, lng=0.0)] == [near.id]


def test_hospital_without_coordinates_dropped_only_when_query_has_point(make_hospital):
    h = make_hospital("Nowhere", stock={"O+": 1})

    no_point = search_blood("O+")
    assert [r["id"] for r in no_point] == [h.id]
    assert no_point[0]["distance"] is None

    assert search_blood("O+", lat=1.0, lng=1.0, radius=100) == []


def test_radius_without_point_is_ignored(make_hospital):
    h = make_hospital("Far away", stock={"O+": 1}, latitude=60.0, longitude=10.0)
    results = search_blood("O+", radius=1)
    assert [r["id"] for r in results] == [h.id]
    assert results[0]["distance"] is None


def test_ordering_is_recency_then_units_not_distance(make_hospital):
    now = timezone.now()
    older_big = make_hospital("Older", latitude=0.0, longitude=0.01)
    newer_small = make_hospital("Newer small", latitude=0.0, longitude=0.3)
    newer_big = make_hospital("Newer big", latitude=0.0, longitude=0.2)

    set_stock(older_big, "O+", 50, last_updated_at=now - timedelta(days=2))
    set_stock(newer_small, "O+", 2, last_updated_at=now)
    set_stock(newer_big, "O+", 8, last_updated_at=now)

    results = search_blood("O+", lat=0.0, lng=0.0, radius=100)
    assert [r["id"] for r in results] == [newer_big.id, newer_small.id, older_big.id]
    # nearest one ends up last
    assert results[-1]["distance"] < results[0]["distance"]


def test_filters_combine_with_and(make_hospital):
    hit = make_hospital("Central General", stock={"AB-": 2}, district="Central", latitude=0.0, longitude=0.1)
    make_hospital("Central General East", stock={"AB-": 2}, district="East", latitude=0.0, longitude=0.1)
    make_hospital("Central Clinic", stock={"AB-": 2}, district="Central", latitude=0.0, longitude=0.1)
    make_hospital("Central General Far", stock={"AB-": 2}, district="Central", latitude=5.0, longitude=5.0)
    make_hospital("Central General Dry", stock={"AB-": 0}, district="Central", latitude=0.0, longitude=0.1)

    results = search_blood("AB-", district="central", hospital_name="general", lat=0.0, lng=0.0, radius=20)
    assert [r["id"] for r in results] == [hit.id]


def test_result_shape(make_hospital):
    h = make_hospital("Shape", stock={"A-": 7}, district="West", latitude=1.0, longitude=1.0)
    row = search_blood("A-", lat=1.0, lng=1.0)[0]

    assert row["id"] == h.id
    assert row["name"] == "Shape"
    assert row["district"] == "West"
    assert row["blood_type"] == "A-"
    assert row["units_available"] == 7
    assert row["distance"] == 0
    assert row["last_updated_at"] is not None
    assert row["recent_donations"] == 0
    assert row["recent_fulfillments"] == 0


def test_recency_counters_use_trailing_30_days(make_hospital):
    h = make_hospital("Busy", stock={"O-": 5})
    today = timezone.localdate()

    BloodDonation.objects.create(hospital=h, blood_type="O-", units_donated=1, donation_date=today)
    BloodDonation.objects.create(hospital=h, blood_type="A+", units_donated=2, donation_date=today)
    old = BloodDonation.objects.create(hospital=h, blood_type="O-", units_donated=1, donation_date=today)
    BloodDonation.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=31))

    def _req(status):
        return BloodRequest.objects.create(
            requester_name="R", requester_phone="5550100", requester_email="r@example.com",
            blood_type="O-", units_needed=1, urgency="high", hospital=h, status=status,
        )

    _req("fulfilled")
    _req("fulfilled")
    _req("pending")
    stale = _req("fulfilled")
    BloodRequest.objects.filter(pk=stale.pk).update(updated_at=timezone.now() - timedelta(days=45))

    row = search_blood("O-")[0]
    assert row["recent_donations"] == 2
    assert row["recent_fulfillments"] == 2


# ---------- Find donation center ----------

def test_donation_centers_are_not_filtered_by_blood_type(make_hospital):
    dry = make_hospital("Bravo", stock={"O+": 0})
    wet = make_hospital("Alpha", stock={"O+": 6})

    results = search_donation_centers(blood_type="O+")
    assert [r["id"] for r in results] == [wet.id, dry.id]
    needs = {r["id"]: r["blood_needs"] for r in results}
    assert needs[dry.id] == [{"blood_type": "O+", "units_available": 0, "priority": "medium"}]
    assert needs[wet.id][0]["units_available"] == 6


def test_donation_centers_without_blood_type_have_no_needs(make_hospital):
    make_hospital("Alpha")
    assert search_donation_centers()[0]["blood_needs"] == []


def test_donation_centers_order_by_name(make_hospital):
    make_hospital("Charlie")
    make_hospital("Alpha")
    make_hospital("Bravo")
    assert [r["name"] for r in search_donation_centers()] == ["Alpha", "Bravo", "Charlie"]


def test_donation_centers_skip_inactive(make_hospital):
    make_hospital("Closed", is_active=False)
    assert search_donation_centers() == []


def test_donation_centers_point_without_radius_only_annotates(make_hospital):
    far = make_hospital("Far", latitude=10.0, longitude=10.0)
    blank = make_hospital("Blank")

    results = {r["id"]: r for r in search_donation_centers(lat=0.0, lng=0.0)}
    assert set(results) == {far.id, blank.id}
    assert results[far.id]["distance"] > 1000
    assert results[blank.id]["distance"] is None


def test_donation_centers_radius_filters_with_point(make_hospital):
    near = make_hospital("Near", latitude=0.0, longitude=0.1)
    make_hospital("Far", latitude=10.0, longitude=10.0)
    make_hospital("Blank")

    results = search_donation_centers(lat=0.0, lng=0.0, radius=25)
    assert [r["id"] for r in results] == [near.id]


def test_donation_centers_district_and_name(make_hospital):
    hit = make_hospital("Lakeside General", district="Lakeside")
    make_hospital("Lakeside Clinic", district="Lakeside")
    make_hospital("General West", district="Lakeside West")

    results = search_donation_centers(district="LAKESIDE", hospital_name="general")
    assert [r["id"] for r in results] == [hit.id]
    assert results[0]["last_updated_at"] == results[0]["updated_at"]
