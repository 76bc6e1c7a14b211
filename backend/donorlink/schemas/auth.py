"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from typing import Any

from marshmallow import EXCLUDE, Schema, fields, post_load, validate

ROLE_CHOICES = ("user", "donation_center")

_ACCOUNT_KEYS = ("email", "username", "password", "phone_number")


class SignupQuerySchema(Schema):
    """Query string of ``POST /auth/signup``."""

    class Meta:
        unknown = EXCLUDE

    role = fields.String(load_default="user", validate=validate.OneOf(ROLE_CHOICES))


class _SignupSchema(Schema):
    """Identity fields common to both signup kinds.

    ``load`` returns ``{"account": {...}, "profile": {...}}``.
    """

    email = fields.Email(required=True, validate=validate.Length(max=254))
    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    phone_number = fields.String(load_default=None, validate=validate.Length(max=32))

    @post_load
    def split_profile(self, data: dict[str, Any], **_: Any) -> dict[str, Any]:
        account = {key: data.pop(key) for key in _ACCOUNT_KEYS if key in data}
        return {"account": account, "profile": data}


class UserSignupSchema(_SignupSchema):
    """Input payload for a user signup."""

    first_name = fields.String(load_default=None, validate=validate.Length(max=100))
    last_name = fields.String(load_default=None, validate=validate.Length(max=100))


class DonationCenterSignupSchema(_SignupSchema):
    """Input payload for a donation-center signup."""

    organization_name = fields.String(
        required=True, validate=validate.Length(min=1, max=150)
    )
    address = fields.String(load_default=None, validate=validate.Length(max=255))
    city = fields.String(load_default=None, validate=validate.Length(max=100))
    description = fields.String(load_default=None)
    website = fields.URL(load_default=None, validate=validate.Length(max=255))


class LoginSchema(Schema):
    """Input payload for authenticating an account."""

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class PhoneUpdateSchema(LoginSchema):
    """Password-authorized phone number change."""

    phone_number = fields.String(
        required=True, allow_none=True, validate=validate.Length(max=32)
    )


class WhoAmISchema(Schema):
    """Response payload of the bearer-token check."""

    status = fields.String(required=True)
    role = fields.String(required=True)
    profile = fields.Dict(allow_none=True)
