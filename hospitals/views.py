import logging

from django.db import transaction
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from accounts.permissions import api_login_required
from core.api import api_view, error_response, json_body, json_list, validation_error
from .forms import HospitalForm
from .models import Hospital
from .permissions import hospital_owner_required

logger = logging.getLogger(__name__)


def _object_body(request):
    data = json_body(request)
    if not isinstance(data, dict):
        return None
    return data


@require_GET
@api_login_required
def my_hospitals(request):
    qs = Hospital.objects.filter(owner=request.user).order_by("-created_at", "-id")
    return json_list(h.as_json() for h in qs)


@require_http_methods(["POST"])
@api_login_required
@api_view
@transaction.atomic
def hospital_register(request):
    """
    Logged-in user registers their hospital.
    One hospital per account; stock rows for all blood types are created by signal.
    """
    data = _object_body(request)
    if data is None:
        return error_response("Expected a JSON object")

    if Hospital.objects.filter(owner=request.user).exists():
        return error_response("User already has a registered hospital")

    form = HospitalForm(data=data)
    if not form.is_valid():
        return validation_error(form)

    hospital = form.save(commit=False)
    hospital.owner = request.user
    hospital.save()

    logger.info("Hospital %s registered by user %s", hospital.pk, request.user.pk)
    return JsonResponse(hospital.as_json(), status=201)


@require_http_methods(["PUT"])
@hospital_owner_required
@api_view
def hospital_update(request, hospital_id):
    data = _object_body(request)
    if data is None:
        return error_response("Expected a JSON object")

    form = HospitalForm(data=data, instance=request.hospital)
    if not form.is_valid():
        return validation_error(form)

    hospital = form.save()
    return JsonResponse(hospital.as_json())


@require_GET
def district_list(request):
    districts = (
        Hospital.objects
        .filter(is_active=True)
        .exclude(district="")
        .order_by("district")
        .values_list("district", flat=True)
        .distinct()
    )
    return json_list(districts)
