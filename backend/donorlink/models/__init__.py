from donorlink.models.account import Account, DonationCenterProfile, UserProfile
from donorlink.models.identity import AccountId
from donorlink.models.pending import PendingAccount, PendingDonationCenterProfile

__all__ = [
    "Account",
    "AccountId",
    "DonationCenterProfile",
    "PendingAccount",
    "PendingDonationCenterProfile",
    "UserProfile",
]
