import logging

import requests
from django.conf import settings

from .models import CustomUser

logger = logging.getLogger(__name__)


class IdentityServiceError(RuntimeError):
    pass


def _base_url():
    base = (getattr(settings, "IDENTITY_SERVICE_API_URL", "") or "").strip()
    if not base:
        raise IdentityServiceError("IDENTITY_SERVICE_API_URL missing")
    return base.rstrip("/")


def _headers(session_token=None):
    headers = {"x-api-key": getattr(settings, "IDENTITY_SERVICE_API_KEY", "") or ""}
    if session_token:
        headers["Authorization"] = f"Bearer {session_token}"
    return headers


def _safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        txt = (resp.text or "")[:600]
        raise IdentityServiceError(f"Non-JSON response. HTTP {resp.status_code}. Body: {txt}")


def _checked(resp, action):
    data = _safe_json(resp)
    if resp.status_code >= 400:
        logger.warning("Identity provider %s failed with HTTP %s", action, resp.status_code)
        raise IdentityServiceError(f"Identity {action} failed. HTTP {resp.status_code}. {data}")
    return data


def oauth_redirect_url(provider="google"):
    url = f"{_base_url()}/oauth/{provider}/redirect_url"
    resp = requests.get(url, headers=_headers(), timeout=25)
    data = _checked(resp, "redirect_url")
    redirect_url = data.get("redirect_url") or data.get("redirectUrl")
    if not redirect_url:
        raise IdentityServiceError("Identity redirect_url response has no URL")
    return redirect_url


def exchange_code_for_session_token(code):
    resp = requests.post(
        f"{_base_url()}/sessions",
        json={"code": code},
        headers=_headers(),
        timeout=25,
    )
    data = _checked(resp, "session exchange")
    token = data.get("session_token")
    if not token:
        raise IdentityServiceError("Identity session exchange returned no token")
    return token


def fetch_current_user(session_token):
    resp = requests.get(f"{_base_url()}/users/me", headers=_headers(session_token), timeout=25)
    return _checked(resp, "users/me")


def delete_session(session_token):
    resp = requests.delete(f"{_base_url()}/sessions", headers=_headers(session_token), timeout=25)
    if resp.status_code >= 400:
        logger.warning("Identity provider session delete failed with HTTP %s", resp.status_code)
        raise IdentityServiceError(f"Identity session delete failed. HTTP {resp.status_code}")


def sync_user(profile):
    """
    Upsert the local account that mirrors the provider's user record.
    """
    external_id = str(profile.get("id") or "").strip()
    if not external_id:
        raise IdentityServiceError("Identity user has no id")

    email = (profile.get("email") or "").strip()
    google = profile.get("google_user_data") or {}
    display_name = (profile.get("name") or google.get("name") or "").strip()
    picture = (profile.get("picture") or google.get("picture") or "").strip()

    user, created = CustomUser.objects.get_or_create(
        external_id=external_id,
        defaults={
            "username": f"idp_{external_id}"[:150],
            "email": email,
            "display_name": display_name[:150],
            "picture_url": picture[:500],
        },
    )
    if created:
        user.set_unusable_password()
        user.save(update_fields=["password"])
        logger.info("Created account %s for identity user %s", user.pk, external_id)
        return user

    changed = []
    if email and user.email != email:
        user.email = email
        changed.append("email")
    if display_name and user.display_name != display_name[:150]:
        user.display_name = display_name[:150]
        changed.append("display_name")
    if picture and user.picture_url != picture[:500]:
        user.picture_url = picture[:500]
        changed.append("picture_url")
    if changed:
        user.save(update_fields=changed)
    return user
