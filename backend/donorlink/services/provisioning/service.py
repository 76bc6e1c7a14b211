"""
ProvisioningService
===================

Process-level service that brings accounts into existence:

- ``signup``: users become active immediately; donation centers land in the
  pending tables and an administrator is emailed approve/reject links.
- ``approve``: promotes a pending pair into an active account and profile in
  one transaction.
- ``reject``: discards a pending pair.

Notifications are sent strictly after commit and never undo it.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from donorlink.models.account import Account, DonationCenterProfile, UserProfile
from donorlink.models.pending import PendingAccount, PendingDonationCenterProfile
from donorlink.services._shared.base import BaseService, ServiceContext
from donorlink.services._shared.dto import to_account_out, to_profile_out
from donorlink.services._shared.duplicates import (
    DuplicateConflictError,
    DuplicateKind,
    classify_duplicate,
    duplicate_from_row,
)
from donorlink.services._shared.errors import NotFoundError, StoreFailureError
from donorlink.services._shared.ports.notifier import Notifier
from donorlink.services._shared.roles import Role
from donorlink.services.credentials.service import CredentialService
from donorlink.services.provisioning.dto import (
    SIGNUP_ACTIVE,
    SIGNUP_PENDING,
    AccountFieldsIn,
    ApprovalOut,
    RejectionOut,
    SignupIn,
    SignupOut,
)
from donorlink.services.provisioning.messages import (
    ReviewLinks,
    approved_message,
    pending_signup_message,
    rejected_message,
)
from donorlink.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

log = logging.getLogger(__name__)


class ProvisioningService(BaseService):
    """
    Orchestrates signup, approval and rejection.
    """

    def __init__(
        self,
        *,
        credentials: CredentialService,
        notifier: Notifier,
        admin_email: str | None,
        links: ReviewLinks,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param credentials: Hashing and token issuance.
        :param notifier: Outbound mail collaborator, shared for the process lifetime.
        :param admin_email: Recipient of pending-signup reviews.
        :param links: Builder for the approve/reject URLs.
        """
        super().__init__(ctx=ctx)
        self.credentials = credentials
        self.notifier = notifier
        self.admin_email = admin_email
        self.links = links

    # ------------------------------------------------------------------ #
    # Signup
    # ------------------------------------------------------------------ #

    def signup(self, dto: SignupIn) -> SignupOut:
        """
        Create an active user or a pending donation center.

        :param dto: Validated signup input.
        :returns: Active account with token, or the pending marker.
        :raises DuplicateConflictError: When email or username is taken, whether
            found by the pre-check or reported by the store at insert.
        """
        if Role(dto.role) is Role.DONATION_CENTER:
            return self._signup_pending(dto)
        return self._signup_user(dto)

    def _signup_user(self, dto: SignupIn) -> SignupOut:
        fields = dto.account
        digest = self.credentials.hash(fields.password)
        try:
            with self.rw_uow() as uow:
                self._raise_if_taken(uow, fields, include_pending=False)

                account = uow.accounts.add(
                    Account(
                        email=fields.email,
                        username=fields.username,
                        password_hash=digest,
                        phone_number=fields.phone_number,
                    )
                )
                profile = uow.user_profiles.add(UserProfile(id=account.id, **dto.profile))
                account_out = to_account_out(account)
                profile_out = to_profile_out(profile)
        except IntegrityError as exc:
            conflict = self._as_duplicate(exc)
            if conflict is None:
                raise
            raise conflict from exc

        token = self.credentials.issue_token(account_out.id, Role.USER)
        log.info(
            "signup.active", extra={"account_id": account_out.id, "role": Role.USER.value}
        )
        return SignupOut(
            status=SIGNUP_ACTIVE, account=account_out, profile=profile_out, token=token
        )

    def _signup_pending(self, dto: SignupIn) -> SignupOut:
        fields = dto.account
        digest = self.credentials.hash(fields.password)
        try:
            with self.rw_uow() as uow:
                self._raise_if_taken(uow, fields, include_pending=True)

                pending = uow.pending_accounts.add(
                    PendingAccount(
                        email=fields.email,
                        username=fields.username,
                        password_hash=digest,
                        phone_number=fields.phone_number,
                    )
                )
                details = uow.pending_profiles.add(
                    PendingDonationCenterProfile(id=pending.id, **dto.profile)
                )
                pending_id = pending.id
                email = pending.email
                organization_name = details.organization_name
        except IntegrityError as exc:
            conflict = self._as_duplicate(exc)
            if conflict is None:
                raise
            raise conflict from exc

        log.info("signup.pending", extra={"pending_id": pending_id})

        if self.admin_email:
            self.notify_best_effort(
                self.notifier,
                pending_signup_message(
                    admin_email=self.admin_email,
                    pending_id=pending_id,
                    email=email,
                    organization_name=organization_name,
                    links=self.links,
                ),
            )
        else:
            log.warning("signup.pending.no_admin_email", extra={"pending_id": pending_id})

        return SignupOut(status=SIGNUP_PENDING, pending_id=pending_id)

    # ------------------------------------------------------------------ #
    # Approve / Reject
    # ------------------------------------------------------------------ #

    def approve(self, pending_id: int) -> ApprovalOut:
        """
        Promote a pending pair into an active account and profile.

        Runs, in this order and in one transaction: delete pending account,
        delete pending profile, insert the account under the pending id, insert
        the profile keyed by that same id.

        :param pending_id: Pending pair identifier.
        :raises NotFoundError: When either pending row is missing.
        :raises StoreFailureError: On any other store failure; nothing is applied.
        """
        try:
            with self.rw_uow() as uow:
                pending = uow.pending_accounts.pop(pending_id)
                if pending is None:
                    raise NotFoundError("PendingAccount", pending_id)
                identity = pending.identity_fields()

                pending_profile = uow.pending_profiles.pop(pending_id)
                if pending_profile is None:
                    raise NotFoundError("PendingDonationCenterProfile", pending_id)
                details = pending_profile.profile_fields()

                account = uow.accounts.add(Account(id=pending_id, **identity))
                uow.donation_center_profiles.add(DonationCenterProfile(id=account.id, **details))
                account_out = to_account_out(account)
        except SQLAlchemyError as exc:
            log.error("approve.failed", extra={"pending_id": pending_id}, exc_info=True)
            raise StoreFailureError("The pending account could not be approved") from exc

        log.info(
            "approve.committed",
            extra={"pending_id": pending_id, "account_id": account_out.id},
        )
        notified = self.notify_best_effort(
            self.notifier,
            approved_message(email=account_out.email, username=account_out.username),
        )
        return ApprovalOut(pending_id=pending_id, account=account_out, notified=notified)

    def reject(self, pending_id: int) -> RejectionOut:
        """
        Discard a pending pair and tell the applicant.

        Both pending rows are removed in one transaction.

        :param pending_id: Pending pair identifier.
        :raises NotFoundError: When no pending account has this id.
        """
        with self.rw_uow() as uow:
            pending = uow.pending_accounts.pop(pending_id)
            if pending is None:
                raise NotFoundError("PendingAccount", pending_id)
            email = pending.email
            uow.pending_profiles.pop(pending_id)

        log.info("reject.committed", extra={"pending_id": pending_id})
        notified = self.notify_best_effort(self.notifier, rejected_message(email=email))
        return RejectionOut(pending_id=pending_id, email=email, notified=notified)

    # ------------------------------------------------------------------ #
    # Duplicates
    # ------------------------------------------------------------------ #

    def _raise_if_taken(
        self,
        uow: SQLAlchemyRepositoryContainer,
        fields: AccountFieldsIn,
        *,
        include_pending: bool,
    ) -> None:
        """Pre-check both unique columns; an email clash wins over a username clash."""
        repos = [uow.accounts]
        if include_pending:
            repos.append(uow.pending_accounts)

        clashes = [
            row
            for row in (repo.find_duplicate(fields.email, fields.username) for repo in repos)
            if row is not None
        ]
        if not clashes:
            return
        errors = [duplicate_from_row(row, fields.email) for row in clashes]
        for error in errors:
            if error.kind.is_email:
                raise error
        raise errors[0]

    @staticmethod
    def _as_duplicate(exc: IntegrityError) -> DuplicateConflictError | None:
        """Classify an insert-time violation; ``None`` means re-raise unchanged."""
        kind: DuplicateKind | None = classify_duplicate(exc)
        if kind is None:
            return None
        log.info("signup.duplicate_race column=%s", kind.column)
        return DuplicateConflictError(kind)
