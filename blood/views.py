import logging

from django.conf import settings
from django.db import transaction
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from accounts.permissions import api_login_required
from core.api import (
    MAX_DB_ID, api_view, error_response, form_errors, json_body, json_list, validation_error,
)
from hospitals.permissions import hospital_owner_required
from .forms import (
    BloodDonationForm, BloodRequestForm, DonationCenterSearchForm,
    FindBloodForm, InventoryItemForm, RequestStatusForm,
)
from .inventory import MissingStockError, apply_inventory_update, record_donation
from .matching import search_blood, search_donation_centers
from .models import BloodDonation, BloodRequest, BloodStock
from .realtime import inventory_updated_event, push_after_commit, request_created_event

logger = logging.getLogger(__name__)


# ---------- Public search ----------

@require_GET
def find_blood(request):
    form = FindBloodForm(request.GET)
    if not form.is_valid():
        return validation_error(form)
    return json_list(search_blood(**form.search_kwargs()))


@require_GET
def find_donation_centers(request):
    form = DonationCenterSearchForm(request.GET)
    if not form.is_valid():
        return validation_error(form)
    return json_list(search_donation_centers(**form.search_kwargs()))


# ---------- Inventory ----------

def _validated_inventory_items(data):
    """
    Validate every item up front; nothing is written if any item is bad.
    Returns (items, errors).
    """
    if not isinstance(data, list):
        return None, {"__all__": ["Expected a JSON array of inventory items."]}

    items = []
    errors = {}
    for i, raw in enumerate(data):
        if not isinstance(raw, dict):
            errors[str(i)] = ["Expected an object."]
            continue
        form = InventoryItemForm(data=raw)
        if form.is_valid():
            items.append(form.cleaned_data)
        else:
            errors[str(i)] = form_errors(form)
    return items, errors


@require_http_methods(["GET", "PUT"])
@hospital_owner_required
@api_view
def hospital_inventory(request, hospital_id):
    hospital = request.hospital

    if request.method == "GET":
        qs = BloodStock.objects.filter(hospital=hospital).order_by("blood_type")
        return json_list(s.as_json() for s in qs)

    items, errors = _validated_inventory_items(json_body(request, default=[]))
    if errors:
        return validation_error(errors)

    updated = apply_inventory_update(hospital, items)
    if items:
        push_after_commit(
            hospital.id,
            inventory_updated_event(hospital.id, [i["blood_type"] for i in items], "BULK_UPDATE"),
        )
    return JsonResponse({"success": True, "updated": updated})


# ---------- Donations ----------

@require_http_methods(["GET", "POST"])
@hospital_owner_required
@api_view
def hospital_donations(request, hospital_id):
    hospital = request.hospital

    if request.method == "GET":
        limit = int(getattr(settings, "BB_DONATION_HISTORY_LIMIT", 50))
        qs = (
            BloodDonation.objects
            .filter(hospital=hospital)
            .order_by("-donation_date", "-created_at", "-id")[:limit]
        )
        return json_list(d.as_json() for d in qs)

    data = json_body(request)
    if not isinstance(data, dict):
        return error_response("Expected a JSON object")

    form = BloodDonationForm(data=data)
    if not form.is_valid():
        return validation_error(form)

    try:
        donation = record_donation(hospital, form.save(commit=False))
    except MissingStockError as exc:
        return error_response(str(exc), status=409)

    push_after_commit(
        hospital.id,
        inventory_updated_event(hospital.id, [donation.blood_type], "DONATION"),
    )
    return JsonResponse(donation.as_json(), status=201)


# ---------- Blood requests ----------

@csrf_exempt
@require_http_methods(["POST"])
@api_view
@transaction.atomic
def blood_request_create(request):
    """
    Public: anyone can ask a hospital for blood it currently holds.
    """
    data = json_body(request)
    if not isinstance(data, dict):
        return error_response("Expected a JSON object")

    form = BloodRequestForm(data=data)
    if not form.is_valid():
        return validation_error(form)

    hospital_id = form.cleaned_data["hospital_id"]
    blood_type = form.cleaned_data["blood_type"]

    stock = (
        BloodStock.objects
        .filter(hospital_id=hospital_id, hospital__is_active=True, blood_type=blood_type)
        .select_related("hospital")
        .first()
    )
    if not stock:
        return error_response("Hospital or blood type not found", status=404)

    units_needed = form.cleaned_data["units_needed"]
    if stock.units_available < units_needed:
        return error_response(
            f"Insufficient blood units available. Only {stock.units_available} units available."
        )

    req = form.save(commit=False)
    req.hospital = stock.hospital
    req.status = "pending"
    req.save()

    push_after_commit(req.hospital_id, request_created_event(req))
    return JsonResponse(req.as_json(), status=201)


@require_GET
@hospital_owner_required
def hospital_requests(request, hospital_id):
    qs = BloodRequest.objects.filter(hospital=request.hospital).order_by("-created_at", "-id")
    return json_list(r.as_json() for r in qs)


@require_http_methods(["PUT"])
@api_login_required
@api_view
def blood_request_status(request, request_id):
    req = None
    if request_id <= MAX_DB_ID:
        req = BloodRequest.objects.filter(id=request_id, hospital__owner=request.user).first()
    if not req:
        return error_response("Request not found or unauthorized", status=404)

    data = json_body(request)
    if not isinstance(data, dict):
        return error_response("Expected a JSON object")

    form = RequestStatusForm(data=data)
    if not form.is_valid():
        return validation_error(form)

    req.status = form.cleaned_data["status"]
    req.save(update_fields=["status", "updated_at"])
    logger.info("Blood request %s -> %s", req.pk, req.status)
    return JsonResponse({"success": True})
