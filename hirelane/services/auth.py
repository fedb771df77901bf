# hirelane/services/auth.py
import enum
from dataclasses import dataclass
from functools import wraps

from flask import g
from flask_jwt_extended import create_access_token, decode_token, get_jwt, get_jwt_identity, verify_jwt_in_request

from hirelane.errors import Forbidden
from hirelane.extensions import bcrypt
from hirelane.logger import get_logger

log = get_logger(__name__)

STAFF_ROLES = ("admin", "member")


class Permission(enum.Enum):
    MANAGE_JOBS = "manage_jobs"
    VIEW_APPLICATIONS = "view_applications"
    MANAGE_APPLICATIONS = "manage_applications"
    VIEW_TEAM = "view_team"
    MANAGE_TEAM = "manage_team"
    APPLY = "apply"


# role claim of the identity token -> what the holder may do
ROLE_PERMISSIONS = {
    "admin": {
        Permission.MANAGE_JOBS,
        Permission.VIEW_APPLICATIONS,
        Permission.MANAGE_APPLICATIONS,
        Permission.VIEW_TEAM,
        Permission.MANAGE_TEAM,
    },
    "member": {
        Permission.MANAGE_JOBS,
        Permission.VIEW_APPLICATIONS,
        Permission.MANAGE_APPLICATIONS,
        Permission.VIEW_TEAM,
    },
    "candidate": {Permission.APPLY},
}


@dataclass
class Principal:
    user_id: str
    tenant_id: str
    role: str

    @property
    def permissions(self):
        return ROLE_PERMISSIONS.get(self.role, set())


def _principal_from_jwt():
    claims = get_jwt()
    return Principal(
        user_id=get_jwt_identity(),
        tenant_id=claims.get("tenant_id"),
        role=claims.get("role"),
    )


def permission_required(*permissions):
    """
    Require a valid identity token granting every permission listed.

    A missing or invalid token is answered with 401 by the JWT loaders; a token
    without the permissions, or a staff permission without an organization,
    raises Forbidden before the view runs.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            principal = _principal_from_jwt()

            missing = set(permissions) - principal.permissions
            if missing:
                log.warning("User %s (%s) lacks %s", principal.user_id, principal.role,
                            sorted(p.value for p in missing))
                raise Forbidden("Insufficient permissions")
            if principal.role in STAFF_ROLES and not principal.tenant_id:
                raise Forbidden("No active organization")

            g.principal = principal
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def current_principal():
    return g.get("principal")


def optional_principal():
    """Principal of the request when a valid token is present, else None."""
    if verify_jwt_in_request(optional=True) is None:
        return None
    return _principal_from_jwt()


def applicant_principal():
    """Signed-in applicant of the request; staff tokens do not count."""
    principal = optional_principal()
    if principal is None or Permission.APPLY not in principal.permissions:
        return None
    return principal


def workspace_name(email):
    domain = email.split("@")[1] if "@" in email else ""
    return f"{domain.split('.')[0]} Workspace" if domain else "My Workspace"


class AuthService:
    @staticmethod
    def _issue_token(user):
        return create_access_token(
            identity=str(user.id),
            additional_claims={
                "role": user.role,
                "email": user.email,
                "tenant_id": user.tenant_id,
            },
        )

    @staticmethod
    def authenticate_user(store, email, password):
        """
        Check email & password using bcrypt.
        Return (JWT, None) if valid, else (None, error message).
        """
        user = store.find_user_by_email((email or "").strip().lower())

        if not user or not bcrypt.check_password_hash(user.password, password):
            log.warning("Failed login for %s", email)
            return None, "Invalid email or password"

        log.info("Login for %s (%s)", user.email, user.role)
        return AuthService._issue_token(user), None

    @staticmethod
    def verify_token(token):
        """Decode token (for debugging or manual verification)."""
        try:
            return decode_token(token)
        except Exception:
            return None

    @staticmethod
    def register(store, name, email, password, role=None, tenant_id=None):
        """
        Create a user and return (JWT, None), or (None, error message).

        Staff registering without a tenant get a fresh workspace named after
        their email domain and become its admin. Applicant accounts
        (``role="candidate"``) belong to no tenant.
        """
        email = (email or "").strip().lower()
        if not email or "@" not in email or not password:
            return None, "Valid email and password are required"
        if role not in (None, "admin", "member", "candidate"):
            return None, f"Unknown role: {role}"

        if store.find_user_by_email(email):
            return None, "Email already registered"

        hashed_password = bcrypt.generate_password_hash(password).decode("utf-8")

        with store.transaction():
            if role == "candidate":
                tenant_id = None
            elif tenant_id is None:
                tenant = store.add_tenant(workspace_name(email))
                store.flush()
                tenant_id = tenant.id
                role = "admin"
            user = store.add_user(
                name=name or email.split("@")[0],
                email=email,
                password=hashed_password,
                role=role or "member",
                tenant_id=tenant_id,
            )

        log.info("Registered %s as %s", email, user.role)
        return AuthService._issue_token(user), None

    @staticmethod
    def add_team_member(store, tenant_id, name, email, password, role="member"):
        """Create a staff user inside an existing tenant. Returns (user, error)."""
        email = (email or "").strip().lower()
        if not email or "@" not in email or not password:
            return None, "Valid email and password are required"
        if role not in STAFF_ROLES:
            return None, f"Unknown role: {role}"
        if store.find_user_by_email(email):
            return None, "Email already registered"

        with store.transaction():
            user = store.add_user(
                name=name or email.split("@")[0],
                email=email,
                password=bcrypt.generate_password_hash(password).decode("utf-8"),
                role=role,
                tenant_id=tenant_id,
            )
        log.info("Added %s to tenant %s as %s", email, tenant_id, role)
        return user, None
