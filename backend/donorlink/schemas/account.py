"""Account and profile resource schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import SortQuerySchema


class AccountSchema(Schema):
    """Public representation of an account. The password digest is never dumped."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(required=True)
    phone_number = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)


class UserProfileSchema(Schema):
    id = fields.Integer(required=True)
    first_name = fields.String(allow_none=True)
    last_name = fields.String(allow_none=True)


class DonationCenterProfileSchema(Schema):
    id = fields.Integer(required=True)
    organization_name = fields.String(required=True)
    address = fields.String(allow_none=True)
    city = fields.String(allow_none=True)
    description = fields.String(allow_none=True)
    website = fields.String(allow_none=True)


class AccountListQuerySchema(SortQuerySchema):
    """Supported query parameters for listing accounts."""

    class Meta:
        unknown = EXCLUDE

    limit = fields.Integer(load_default=None, validate=validate.Range(min=1, max=200))
    offset = fields.Integer(load_default=None, validate=validate.Range(min=0))


_account_schema = AccountSchema()
_user_profile_schema = UserProfileSchema()
_donation_center_profile_schema = DonationCenterProfileSchema()


def dump_account(account: Any) -> dict[str, Any]:
    """Serialize an account DTO."""
    return _account_schema.dump(account)


def dump_profile(profile: Any) -> dict[str, Any] | None:
    """Serialize either profile DTO, picking the schema by its fields."""
    if profile is None:
        return None
    if hasattr(profile, "organization_name"):
        return _donation_center_profile_schema.dump(profile)
    return _user_profile_schema.dump(profile)
