"""Request authentication for the HTTP API."""

from functools import wraps

from flask import g, request

from bizledger.auth import TOKEN_COOKIE, extract_token
from bizledger.domain.entities import Principal
from bizledger.web import get_services


def login_required(view=None, *, require_company: bool = True):
    """Resolve the request credential into g.principal before the view runs.

    Unauthenticated requests get 401; with require_company, callers without a
    company get 404.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            token = extract_token(
                request.headers.get("Authorization"), request.cookies.get(TOKEN_COOKIE)
            )
            g.principal = get_services().authenticator.resolve_principal(
                token, require_company=require_company
            )
            return func(*args, **kwargs)

        return wrapper

    if view is not None:
        return decorator(view)
    return decorator


def current_principal() -> Principal:
    return g.principal
