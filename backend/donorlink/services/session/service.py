# donorlink/services/session/service.py
from __future__ import annotations

import logging

from donorlink.models.account import Account
from donorlink.repositories.account import AccountRepository
from donorlink.services._shared.base import BaseService, ServiceContext
from donorlink.services._shared.dto import AccountOut, to_account_out, to_profile_out
from donorlink.services._shared.errors import InvalidCredentialsError, NotFoundError
from donorlink.services._shared.roles import Role, resolve_role
from donorlink.services.credentials.service import CredentialService
from donorlink.services.session.dto import (
    AccountListIn,
    CredentialsIn,
    LoginOut,
    PhoneUpdateIn,
    WhoAmIOut,
)

log = logging.getLogger(__name__)


class SessionService(BaseService):
    """
    Login and password-authorized self-service on active accounts.

    Update and delete re-run the login credential check inside their own
    read-write transaction; the password is the authorization, no token is
    required.
    """

    def __init__(
        self, *, credentials: CredentialService, ctx: ServiceContext | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.credentials = credentials

    # ------------------------------------------------------------------ #
    # Credential check
    # ------------------------------------------------------------------ #

    def _authenticate(self, repo: AccountRepository, email: str, password: str) -> Account:
        """
        Locate the account by email and verify the password.

        :raises InvalidCredentialsError: For an unknown email and for a wrong
            password alike.
        """
        account = repo.get_by_email(email)
        if account is None:
            raise InvalidCredentialsError()
        if not self.credentials.verify(password, account.password_hash):
            raise InvalidCredentialsError()
        return account

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: CredentialsIn) -> LoginOut:
        """
        Authenticate credentials and issue a role-bearing token.

        :param dto: Login input.
        :returns: Account, resolved role and token.
        :raises InvalidCredentialsError: If credentials are invalid.
        """
        with self.ro_uow() as uow:
            account = self._authenticate(uow.accounts, dto.email, dto.password)
            role = resolve_role(uow.user_profiles, account.id)
            account_out = to_account_out(account)

        token = self.credentials.issue_token(account_out.id, role)
        log.info("login.succeeded", extra={"account_id": account_out.id, "role": role.value})
        return LoginOut(account=account_out, role=role, token=token)

    # ------------------------------------------------------------------ #
    # Self-service
    # ------------------------------------------------------------------ #

    def update_phone(self, dto: PhoneUpdateIn) -> AccountOut:
        """
        Re-verify credentials, then change only the phone number.

        :raises InvalidCredentialsError: If credentials are invalid; nothing is written.
        """
        with self.rw_uow() as uow:
            account = self._authenticate(uow.accounts, dto.email, dto.password)
            uow.accounts.update(account, phone_number=dto.phone_number)
            account_out = to_account_out(account)

        log.info("account.phone_updated", extra={"account_id": account_out.id})
        return account_out

    def delete_account(self, dto: CredentialsIn) -> AccountOut:
        """
        Re-verify credentials, then delete the account.

        The profile row goes with it through the store's ``ON DELETE CASCADE``.

        :returns: Snapshot of the deleted account.
        :raises InvalidCredentialsError: If credentials are invalid; nothing is deleted.
        """
        with self.rw_uow() as uow:
            account = self._authenticate(uow.accounts, dto.email, dto.password)
            account_out = to_account_out(account)
            uow.accounts.delete(account)

        log.info("account.deleted", extra={"account_id": account_out.id})
        return account_out

    # ------------------------------------------------------------------ #
    # Bearer-token reads
    # ------------------------------------------------------------------ #

    def whoami(self, account_id: int, role: Role | str) -> WhoAmIOut:
        """
        Return the role-specific profile of a token holder.

        :param account_id: Token subject.
        :param role: Role claim from the token; selects the profile table.
        :returns: Profile payload, with ``profile=None`` when no row exists.
        """
        role = Role(role)
        with self.ro_uow() as uow:
            repo = uow.user_profiles if role is Role.USER else uow.donation_center_profiles
            profile = repo.get(account_id)
            profile_out = to_profile_out(profile) if profile is not None else None
        return WhoAmIOut(account_id=account_id, role=role, profile=profile_out)

    def list_accounts(self, dto: AccountListIn | None = None) -> list[AccountOut]:
        """List active accounts with whitelisted sorting."""
        dto = dto or AccountListIn()
        with self.ro_uow() as uow:
            rows = uow.accounts.list(sort=dto.sort, limit=dto.limit, offset=dto.offset)
            return [to_account_out(row) for row in rows]

    def get_account(self, account_id: int) -> AccountOut:
        """
        :raises NotFoundError: When no active account has this id.
        """
        with self.ro_uow() as uow:
            account = uow.accounts.get(account_id)
            if account is None:
                raise NotFoundError("Account", account_id)
            return to_account_out(account)
