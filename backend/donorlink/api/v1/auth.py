"""Authentication and provisioning endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from donorlink.api.deps import (
    current_account,
    json_response,
    provisioning_service,
    require_auth,
    session_service,
    timing,
    translate_service_errors,
)
from donorlink.schemas import (
    DonationCenterSignupSchema,
    LoginSchema,
    PhoneUpdateSchema,
    SignupQuerySchema,
    UserSignupSchema,
    WhoAmISchema,
    dump_account,
    dump_profile,
)
from donorlink.services import (
    AccountFieldsIn,
    CredentialsIn,
    PhoneUpdateIn,
    Role,
    SignupIn,
)

bp = Blueprint("auth", __name__, url_prefix="/auth")

signup_query_schema = SignupQuerySchema()
signup_schemas = {
    Role.USER: UserSignupSchema(),
    Role.DONATION_CENTER: DonationCenterSignupSchema(),
}
login_schema = LoginSchema()
phone_update_schema = PhoneUpdateSchema()
whoami_schema = WhoAmISchema()


def _json_body() -> dict:
    return request.get_json(silent=True) or {}


@bp.post("/signup")
@timing
@translate_service_errors
def signup():
    """Create a user, or queue a donation center for admin approval."""

    role = Role(signup_query_schema.load(request.args)["role"])
    data = signup_schemas[role].load(_json_body())
    result = provisioning_service().signup(
        SignupIn(role=role, account=AccountFieldsIn(**data["account"]), profile=data["profile"])
    )
    if result.is_pending:
        return json_response({"status": result.status})
    return json_response(
        {
            "account": dump_account(result.account),
            "profile": dump_profile(result.profile),
            "token": result.token,
        }
    )


@bp.get("/approve/<int:pending_id>")
@timing
@translate_service_errors
def approve(pending_id: int):
    """Promote a pending donation center (target of the admin email link)."""

    provisioning_service().approve(pending_id)
    return json_response({"status": "approved"})


@bp.get("/reject/<int:pending_id>")
@timing
@translate_service_errors
def reject(pending_id: int):
    """Discard a pending donation center (target of the admin email link)."""

    provisioning_service().reject(pending_id)
    return json_response({"status": "rejected"})


@bp.post("/login")
@timing
@translate_service_errors
def login():
    """Authenticate credentials and issue a role-bearing access token."""

    data = login_schema.load(_json_body())
    result = session_service().login(CredentialsIn(**data))
    return json_response(
        {"account": dump_account(result.account), "role": result.role.value, "token": result.token}
    )


@bp.patch("/")
@timing
@translate_service_errors
def update_account():
    """Change the phone number; the submitted password authorizes the change."""

    data = phone_update_schema.load(_json_body())
    account = session_service().update_phone(PhoneUpdateIn(**data))
    return json_response({"account": dump_account(account)})


@bp.delete("/")
@timing
@translate_service_errors
def delete_account():
    """Delete the account; the submitted password authorizes the deletion."""

    data = login_schema.load(_json_body())
    account = session_service().delete_account(CredentialsIn(**data))
    return json_response({"account": dump_account(account)})


@bp.get("/test")
@require_auth
@timing
@translate_service_errors
def test_token():
    """Probe a bearer token and return the holder's profile."""

    account_id, role = current_account()
    result = session_service().whoami(account_id, role)
    body = whoami_schema.dump(
        {"status": "Authorized", "role": result.role.value, "profile": dump_profile(result.profile)}
    )
    return json_response(body)
