"""
Candidate session cookie.

Lets an anonymous browser find its applications again. The cookie is a
signed pointer to {tenant_id, candidate_id}; it grants nothing by itself and
is checked against the store each time it is read.
"""
from flask import current_app, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from hirelane.logger import get_logger

log = get_logger(__name__)

_SALT = "candidate-session"


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=_SALT)


def issue_token(tenant_id, candidate_id):
    return _serializer().dumps({"tenant_id": tenant_id, "candidate_id": candidate_id})


def read_token(token, max_age=None):
    """Payload of a token, or None when missing, tampered or expired."""
    if not token:
        return None
    if max_age is None:
        max_age = current_app.config["CANDIDATE_SESSION_MAX_AGE"]
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        log.info("Expired candidate session cookie")
        return None
    except BadSignature:
        log.warning("Rejected tampered candidate session cookie")
        return None

    if not isinstance(payload, dict) or not payload.get("tenant_id") or not payload.get("candidate_id"):
        return None
    return {"tenant_id": payload["tenant_id"], "candidate_id": payload["candidate_id"]}


def set_candidate_session(response, tenant_id, candidate_id):
    response.set_cookie(
        current_app.config["CANDIDATE_SESSION_COOKIE"],
        issue_token(tenant_id, candidate_id),
        max_age=current_app.config["CANDIDATE_SESSION_MAX_AGE"],
        httponly=True,
        secure=current_app.config.get("SESSION_COOKIE_SECURE", False),
        samesite="Lax",
        path="/",
    )
    return response


def clear_candidate_session(response):
    response.delete_cookie(current_app.config["CANDIDATE_SESSION_COOKIE"], path="/")
    return response


def load_candidate_session(store):
    """Candidate the request's cookie points to, if it still exists."""
    payload = read_token(request.cookies.get(current_app.config["CANDIDATE_SESSION_COOKIE"]))
    if payload is None:
        return None
    return store.get_candidate(payload["candidate_id"], payload["tenant_id"])
