"""Email bodies for the donation-center approval lifecycle."""

from __future__ import annotations

from dataclasses import dataclass

from donorlink.services._shared.ports.notifier import EmailMessageOut


@dataclass(frozen=True, slots=True)
class ReviewLinks:
    """
    Build the admin approve/reject URLs for a pending signup.

    :param base_url: Public origin, e.g. ``"https://api.donorlink.org"``.
    :param api_prefix: Mount point of the versioned API, e.g. ``"/api/v1"``.
    """

    base_url: str
    api_prefix: str = "/api/v1"

    def _url(self, action: str, pending_id: int) -> str:
        prefix = "/" + self.api_prefix.strip("/") if self.api_prefix.strip("/") else ""
        return f"{self.base_url.rstrip('/')}{prefix}/auth/{action}/{pending_id}"

    def approve(self, pending_id: int) -> str:
        return self._url("approve", pending_id)

    def reject(self, pending_id: int) -> str:
        return self._url("reject", pending_id)


def pending_signup_message(
    *,
    admin_email: str,
    pending_id: int,
    email: str,
    organization_name: str,
    links: ReviewLinks,
) -> EmailMessageOut:
    body = (
        f"A new donation center is waiting for approval.\n\n"
        f"Organization: {organization_name}\n"
        f"Email: {email}\n\n"
        f"Approve: {links.approve(pending_id)}\n"
        f"Reject: {links.reject(pending_id)}\n"
    )
    return EmailMessageOut(
        to=admin_email,
        subject=f"Donation center pending approval: {organization_name}",
        body=body,
    )


def approved_message(*, email: str, username: str) -> EmailMessageOut:
    return EmailMessageOut(
        to=email,
        subject="Your DonorLink account has been approved",
        body=(
            f"Hello {username},\n\n"
            "Your donation center account is now active. You can log in with the "
            "email and password you signed up with.\n"
        ),
    )


def rejected_message(*, email: str) -> EmailMessageOut:
    return EmailMessageOut(
        to=email,
        subject="Your DonorLink signup was not approved",
        body=(
            "Hello,\n\n"
            "An administrator reviewed your donation center signup and did not "
            "approve it. Contact us if you believe this is a mistake.\n"
        ),
    )
