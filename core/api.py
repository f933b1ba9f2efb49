"""
Small helpers shared by the JSON API views.
"""
import json
from functools import wraps

from django.http import JsonResponse

# BigAutoField upper bound; larger ids cannot exist and overflow the db driver
MAX_DB_ID = 9223372036854775807


class BadRequest(Exception):
    """Raised when a request body cannot be parsed."""


def json_body(request, default=None):
    """
    Parse request.body as JSON.
    Empty body -> default (or {}).
    """
    raw = request.body or b""
    if not raw.strip():
        return {} if default is None else default
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("Invalid JSON body")


def error_response(message, status=400, **extra):
    payload = {"error": message}
    payload.update(extra)
    return JsonResponse(payload, status=status)


def form_errors(form):
    return {
        field: [e["message"] for e in errs]
        for field, errs in form.errors.get_json_data().items()
    }


def validation_error(form_or_errors):
    details = form_or_errors if isinstance(form_or_errors, dict) else form_errors(form_or_errors)
    return error_response("Validation failed", status=400, details=details)


def json_list(rows, status=200):
    # JsonResponse refuses non-dict payloads unless safe=False
    return JsonResponse(list(rows), status=status, safe=False)


def api_view(view_func):
    """
    Turns BadRequest raised while handling a request into a 400 JSON response.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except BadRequest as exc:
            return error_response(str(exc), status=400)
    return _wrapped
