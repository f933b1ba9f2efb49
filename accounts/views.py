import logging

from django.conf import settings
from django.contrib.auth import login, logout
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt, ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_POST

from core.api import api_view, error_response, json_body
from . import identity
from .permissions import api_login_required

logger = logging.getLogger(__name__)


def _cookie_name():
    return getattr(settings, "IDENTITY_SESSION_COOKIE_NAME", "bb_session_token")


@require_GET
def oauth_redirect_url(request, provider="google"):
    try:
        redirect_url = identity.oauth_redirect_url(provider)
    except identity.IdentityServiceError as exc:
        return error_response(str(exc), status=502)
    return JsonResponse({"redirectUrl": redirect_url})


@csrf_exempt
@require_POST
@api_view
def create_session(request):
    """
    Exchange the provider's OAuth code for a session token,
    mirror the provider user locally and log them in.
    """
    data = json_body(request)
    code = data.get("code") if isinstance(data, dict) else None
    if not isinstance(code, str) or not code.strip():
        return error_response("Validation failed", details={"code": ["This field is required."]})

    try:
        token = identity.exchange_code_for_session_token(code.strip())
        user = identity.sync_user(identity.fetch_current_user(token))
    except identity.IdentityServiceError as exc:
        return error_response(str(exc), status=502)

    login(request, user, backend="django.contrib.auth.backends.ModelBackend")

    resp = JsonResponse({"success": True})
    resp.set_cookie(
        _cookie_name(),
        token,
        max_age=getattr(settings, "IDENTITY_SESSION_MAX_AGE", 60 * 24 * 60 * 60),
        httponly=True,
        secure=True,
        samesite="None",
        path="/",
    )
    return resp


@require_GET
@ensure_csrf_cookie
@api_login_required
def me(request):
    return JsonResponse(request.user.as_json())


@require_GET
def logout_view(request):
    token = request.COOKIES.get(_cookie_name())
    if token:
        try:
            identity.delete_session(token)
        except identity.IdentityServiceError as exc:
            # local logout still goes ahead; the provider token expires on its own
            logger.warning("Provider logout failed: %s", exc)

    logout(request)
    resp = JsonResponse({"success": True})
    resp.delete_cookie(_cookie_name(), path="/", samesite="None")
    return resp
