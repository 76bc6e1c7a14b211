"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`donorlink.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``donorlink.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Credentials (from ``donorlink.services.credentials``)
    * :class:`CredentialService`

- Provisioning (from ``donorlink.services.provisioning``)
    * :class:`ProvisioningService`
    * DTOs: :class:`AccountFieldsIn`, :class:`SignupIn`, :class:`SignupOut`,
      :class:`ApprovalOut`, :class:`RejectionOut`

- Session (from ``donorlink.services.session``)
    * :class:`SessionService`
    * DTOs: :class:`CredentialsIn`, :class:`PhoneUpdateIn`,
      :class:`AccountListIn`, :class:`LoginOut`, :class:`WhoAmIOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext
from ._shared.roles import Role, resolve_role
from .credentials.service import CredentialService
from .provisioning.dto import (
    AccountFieldsIn,
    ApprovalOut,
    RejectionOut,
    SignupIn,
    SignupOut,
)
from .provisioning.messages import ReviewLinks
from .provisioning.service import ProvisioningService
from .session.dto import AccountListIn, CredentialsIn, LoginOut, PhoneUpdateIn, WhoAmIOut
from .session.service import SessionService

__all__ = [
    # base
    "BaseService",
    "ServiceContext",
    "Role",
    "resolve_role",
    # credentials
    "CredentialService",
    # provisioning
    "ProvisioningService",
    "ReviewLinks",
    "AccountFieldsIn",
    "SignupIn",
    "SignupOut",
    "ApprovalOut",
    "RejectionOut",
    # session
    "SessionService",
    "CredentialsIn",
    "PhoneUpdateIn",
    "AccountListIn",
    "LoginOut",
    "WhoAmIOut",
]
