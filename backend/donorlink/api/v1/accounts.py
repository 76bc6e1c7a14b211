"""Read-only account listing endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from donorlink.api.deps import (
    json_response,
    require_auth,
    session_service,
    timing,
    translate_service_errors,
)
from donorlink.schemas import AccountListQuerySchema, dump_account
from donorlink.services import AccountListIn

bp = Blueprint("accounts", __name__, url_prefix="/accounts")

list_query_schema = AccountListQuerySchema()


@bp.get("")
@require_auth
@timing
def list_accounts():
    """Return active accounts, optionally sorted and sliced."""

    params = list_query_schema.load(request.args)
    accounts = session_service().list_accounts(
        AccountListIn(sort=tuple(params["sort"]), limit=params["limit"], offset=params["offset"])
    )
    return json_response({"accounts": [dump_account(a) for a in accounts]})


@bp.get("/<int:account_id>")
@require_auth
@timing
@translate_service_errors
def get_account(account_id: int):
    """Return one active account or 404."""

    account = session_service().get_account(account_id)
    return json_response({"account": dump_account(account)})
