from functools import wraps

from flask import current_app, g, request


def get_services():
    return current_app.extensions["taskboard"]


def current_proof():
    """The raw identity proof on this request, if any."""
    return get_services().proofs.extract(request)


def proof_required(view):
    """Resolve the caller's identity before the view runs.

    The user id lands in ``g.user_id``; a missing or invalid proof raises
    AuthError, which the app renders as a 401.
    """

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.user_id = get_services().auth.authenticate(current_proof())
        return view(*args, **kwargs)

    return wrapper
