import math
from datetime import timedelta

from django.conf import settings
from django.db.models import Count, Q
from django.utils import timezone

from hospitals.models import Hospital
from .models import BloodStock

EARTH_RADIUS_KM = 6371.0

# distances are reported (and compared against the radius) at this precision
DISTANCE_DECIMALS = 1

# donor-search annotation; per-type shortfall priority is not computed
DEFAULT_NEED_PRIORITY = "medium"


def haversine_km(lat1, lon1, lat2, lon2):
    R = EARTH_RADIUS_KM
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return R * c


def default_radius_km():
    return float(getattr(settings, "BB_SEARCH_DEFAULT_RADIUS_KM", 50))


def activity_window_start(now=None):
    days = int(getattr(settings, "BB_RECENT_ACTIVITY_DAYS", 30))
    return (now or timezone.now()) - timedelta(days=days)


def distance_to(hospital, lat, lng):
    """
    Rounded km from (lat, lng) to the hospital, or None when either side has no point.
    """
    if lat is None or lng is None or not hospital.has_coordinates:
        return None
    return round(haversine_km(lat, lng, hospital.latitude, hospital.longitude), DISTANCE_DECIMALS)


def within_radius(distance, radius_km):
    # distance is already rounded; 50.04 km reports as 50.0 and sits inside 50
    return distance is not None and distance <= radius_km


def _filter_facets(qs, prefix, district=None, hospital_name=None):
    # district: exact but case-insensitive ("North" must not match "Northeast")
    if district:
        qs = qs.filter(**{f"{prefix}district__iexact": district})
    if hospital_name:
        qs = qs.filter(**{f"{prefix}name__icontains": hospital_name})
    return qs


def _annotate_activity(qs, prefix, since):
    donations = f"{prefix}donations"
    requests = f"{prefix}blood_requests"
    return qs.annotate(
        recent_donations=Count(
            donations,
            filter=Q(**{f"{donations}__created_at__gte": since}),
            distinct=True,
        ),
        recent_fulfillments=Count(
            requests,
            filter=Q(**{
                f"{requests}__status": "fulfilled",
                f"{requests}__updated_at__gte": since,
            }),
            distinct=True,
        ),
    )


def search_blood(blood_type, lat=None, lng=None, radius=None, district=None, hospital_name=None):
    """
    "Find blood": active hospitals holding at least one unit of blood_type.

    With a query point the radius (default 50 km) is a hard filter and hospitals
    without coordinates drop out. Ordered by stock recency, then units; distance
    is attached but never sorts.
    """
    since = activity_window_start()

    qs = (
        BloodStock.objects
        .filter(
            hospital__is_active=True,
            blood_type=blood_type,
            units_available__gt=0,
        )
        .select_related("hospital")
    )
    qs = _filter_facets(qs, "hospital__", district=district, hospital_name=hospital_name)
    qs = _annotate_activity(qs, "hospital__", since).order_by(
        "-last_updated_at", "-units_available", "hospital_id"
    )

    has_point = lat is not None and lng is not None
    if has_point and radius is None:
        radius = default_radius_km()

    results = []
    for stock in qs:
        h = stock.hospital
        dist = distance_to(h, lat, lng)
        if has_point and not within_radius(dist, radius):
            continue

        row = h.public_fields()
        row.update({
            "blood_type": stock.blood_type,
            "units_available": stock.units_available,
            "last_updated_at": stock.last_updated_at,
            "recent_donations": stock.recent_donations,
            "recent_fulfillments": stock.recent_fulfillments,
            "distance": dist,
        })
        results.append(row)

    return results


def search_donation_centers(blood_type=None, lat=None, lng=None, radius=None, district=None, hospital_name=None):
    """
    "Find donation center": every active hospital, ordered by name.

    blood_type never excludes anyone; it only adds a blood_needs annotation.
    The radius filters only when the caller gives both a point and a radius.
    """
    since = activity_window_start()

    qs = Hospital.objects.filter(is_active=True)
    qs = _filter_facets(qs, "", district=district, hospital_name=hospital_name)
    qs = _annotate_activity(qs, "", since).order_by("name", "id")

    has_point = lat is not None and lng is not None
    radius_active = has_point and radius is not None

    hospitals = []
    for h in qs:
        dist = distance_to(h, lat, lng)
        if radius_active and not within_radius(dist, radius):
            continue
        hospitals.append((h, dist))

    units_by_hospital = {}
    if blood_type and hospitals:
        units_by_hospital = dict(
            BloodStock.objects
            .filter(blood_type=blood_type, hospital_id__in=[h.id for h, _ in hospitals])
            .values_list("hospital_id", "units_available")
        )

    results = []
    for h, dist in hospitals:
        blood_needs = []
        if blood_type:
            blood_needs.append({
                "blood_type": blood_type,
                "units_available": units_by_hospital.get(h.id),
                "priority": DEFAULT_NEED_PRIORITY,
            })

        row = h.public_fields()
        row.update({
            "updated_at": h.updated_at,
            "last_updated_at": h.updated_at,
            "recent_donations": h.recent_donations,
            "recent_fulfillments": h.recent_fulfillments,
            "distance": dist,
            "blood_needs": blood_needs,
        })
        results.append(row)

    return results
