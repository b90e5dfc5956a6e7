"""
Ledger authorization policy

Owner plus admin set. The owner is an admin from construction and can never
leave the set. Predicates are pure; the ``require_*`` helpers raise the
matching authorization error.
"""

from typing import FrozenSet

from .models import Campaign
from .protocols import (
    CallerNotAdminError,
    CallerNotOwnerError,
    InvalidAccountError,
    OwnerCannotBeRevokedError,
    WithdrawForbiddenError,
)


class AuthorizationPolicy:
    """Role checks for ledger operations"""

    def __init__(self, owner: str):
        if not owner:
            raise InvalidAccountError("Ledger owner must be a non-empty account")
        self._owner = owner
        self._admins = {owner}

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def admins(self) -> FrozenSet[str]:
        return frozenset(self._admins)

    # Predicates

    def is_owner(self, account: str) -> bool:
        return account == self._owner

    def is_admin(self, account: str) -> bool:
        return account in self._admins

    def is_campaign_manager(self, account: str, campaign: Campaign) -> bool:
        return account == campaign.campaign_manager

    # Guards

    def require_owner(self, caller: str) -> None:
        if not self.is_owner(caller):
            raise CallerNotOwnerError(f"Caller {caller} is not the ledger owner")

    def require_admin(self, caller: str) -> None:
        if not self.is_admin(caller):
            raise CallerNotAdminError(f"Caller {caller} is not an admin")

    def require_campaign_manager(self, caller: str, campaign: Campaign) -> None:
        if not self.is_campaign_manager(caller, campaign):
            raise WithdrawForbiddenError(
                f"Caller {caller} is not the manager of campaign {campaign.campaign_id}"
            )

    # Mutations

    def grant_admin(self, account: str) -> bool:
        """Add an admin; returns False when the account already was one"""
        if not account:
            raise InvalidAccountError("Admin account must be non-empty")
        if account in self._admins:
            return False
        self._admins.add(account)
        return True

    def revoke_admin(self, account: str) -> bool:
        """Remove an admin; returns False when the account was not one"""
        if account == self._owner:
            raise OwnerCannotBeRevokedError("Owner must be admin")
        if account not in self._admins:
            return False
        self._admins.discard(account)
        return True

    # Unit of work participation

    def snapshot(self):
        return frozenset(self._admins)

    def restore(self, state) -> None:
        self._admins = set(state)
