from functools import wraps

from core.api import error_response


def api_login_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return error_response("Unauthorized", status=401)
        return view_func(request, *args, **kwargs)
    return _wrapped
