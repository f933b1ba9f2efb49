from functools import wraps

from core.api import MAX_DB_ID, error_response
from .models import Hospital


def hospital_owner_required(view_func):
    """
    Resolves the hospital_id URL kwarg to a hospital owned by request.user.
    Missing and foreign hospitals get the same 404 so ids are not leaked.
    """
    @wraps(view_func)
    def _wrapped(request, hospital_id, *args, **kwargs):
        if not request.user.is_authenticated:
            return error_response("Unauthorized", status=401)

        hospital = None
        if hospital_id <= MAX_DB_ID:
            hospital = Hospital.objects.filter(id=hospital_id, owner=request.user).first()
        if not hospital:
            return error_response("Hospital not found or unauthorized", status=404)

        request.hospital = hospital
        return view_func(request, hospital_id, *args, **kwargs)
    return _wrapped
