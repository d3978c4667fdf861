from flask import Blueprint

from taskboard.utils.auth import current_proof, get_services, proof_required
from taskboard.utils.responses import json_body, success

auth_bp = Blueprint("auth", __name__)


def _with_proof(result, status):
    services = get_services()
    body = {"user": result.user, **services.proofs.body(result.proof)}
    response, status = success(body, status)
    services.proofs.attach(response, result.proof)
    return response, status


@auth_bp.post("/signup")
def signup():
    payload = json_body()
    result = get_services().auth.signup(
        payload.get("email"),
        payload.get("password"),
        payload.get("name"),
    )
    return _with_proof(result, 201)


@auth_bp.post("/login")
def login():
    payload = json_body()
    result = get_services().auth.login(payload.get("email"), payload.get("password"))
    return _with_proof(result, 200)


@auth_bp.post("/logout")
def logout():
    # Succeeds whether or not the proof is still valid
    services = get_services()
    services.auth.logout(current_proof())
    response, status = success({"message": "Logged out successfully"})
    services.proofs.detach(response)
    return response, status


@auth_bp.get("/profile")
@proof_required
def profile():
    user = get_services().auth.get_profile(current_proof())
    return success({"user": user})
