"""
Donation Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from decimal import Decimal
from typing import Any, List, Optional, Protocol, runtime_checkable

from .models import ArchivedCampaign, Campaign, CampaignStatus, HighestDonation


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class DonationServiceError(Exception):
    """Base exception for donation ledger errors"""
    error_code = "DonationServiceError"


# Authorization

class AuthorizationError(DonationServiceError):
    """Caller lacks the required role"""
    error_code = "Unauthorized"


class CallerNotOwnerError(AuthorizationError):
    """Operation restricted to the ledger owner"""
    error_code = "CallerNotOwner"


class CallerNotAdminError(AuthorizationError):
    """Operation restricted to admins"""
    error_code = "CallerNotAdmin"


class WithdrawForbiddenError(AuthorizationError):
    """Only the campaign manager may withdraw"""
    error_code = "WithdrawForbidden"


# Validation

class InvalidInputError(DonationServiceError):
    """Input rejected"""
    error_code = "InvalidInput"


class EmptyStringError(InvalidInputError):
    """Required text field is empty"""
    error_code = "EmptyString"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidTimeGoalError(InvalidInputError):
    """Time goal is not in the future"""
    error_code = "InvalidTimeGoal"


class InvalidMoneyGoalError(InvalidInputError):
    """Money goal is not positive"""
    error_code = "InvalidMoneyGoal"


class InsufficientDonationError(InvalidInputError):
    """Donation amount is not positive"""
    error_code = "InsufficientDonation"


class InvalidAccountError(InvalidInputError):
    """Empty account where one is required"""
    error_code = "InvalidAccount"


# State

class StateError(DonationServiceError):
    """Operation not allowed in the current state"""
    error_code = "InvalidState"


class CampaignNotFoundError(StateError):
    """Campaign id is not in the live table"""
    error_code = "CampaignNotFound"

    def __init__(self, message: str, campaign_id: Optional[int] = None):
        super().__init__(message)
        self.campaign_id = campaign_id


class CampaignCompletedError(StateError):
    """Campaign no longer accepts donations"""
    error_code = "CampaignCompleted"


class CampaignInProgressError(StateError):
    """Campaign has not reached a goal yet"""
    error_code = "CampaignInProgress"


class OwnerCannotBeRevokedError(StateError):
    """The owner is always an admin"""
    error_code = "OwnerMustBeAdmin"


class FundsTransferError(DonationServiceError):
    """Payout to the recipient failed"""
    error_code = "FundsTransferFailed"

    def __init__(self, message: str, recipient: Optional[str] = None, amount: Optional[Decimal] = None):
        super().__init__(message)
        self.recipient = recipient
        self.amount = amount


# ============================================================================
# Repository Protocols
# ============================================================================

@runtime_checkable
class DonationRepositoryProtocol(Protocol):
    """
    Interface for the campaign ledger repository.

    Holds live campaigns, archived campaigns and the highest-donation
    record. Must support snapshot/restore.
    """

    async def next_campaign_id(self) -> int:
        ...

    async def current_campaign_id(self) -> int:
        ...

    async def save_campaign(self, campaign: Campaign) -> Campaign:
        ...

    async def get_campaign(self, campaign_id: int) -> Optional[Campaign]:
        ...

    async def delete_campaign(self, campaign_id: int) -> bool:
        ...

    async def list_campaigns(self, status: Optional[CampaignStatus] = None) -> List[Campaign]:
        ...

    async def next_archive_id(self) -> int:
        ...

    async def current_archive_id(self) -> int:
        ...

    async def save_archived_campaign(self, campaign: ArchivedCampaign) -> ArchivedCampaign:
        ...

    async def get_archived_campaign(self, archive_id: int) -> Optional[ArchivedCampaign]:
        ...

    async def get_highest_donation(self) -> HighestDonation:
        ...

    async def set_highest_donation(self, record: HighestDonation) -> None:
        ...

    def snapshot(self) -> Any:
        ...

    def restore(self, state: Any) -> None:
        ...


@runtime_checkable
class TreasuryProtocol(Protocol):
    """Interface for fund custody"""

    async def receive(self, campaign_id: int, donor: str, amount: Decimal) -> None:
        """Take custody of a donation"""
        ...

    async def pay_out(self, campaign_id: int, recipient: str, amount: Decimal) -> None:
        """Release funds to a recipient; raises FundsTransferError on failure"""
        ...

    async def custody_balance(self) -> Decimal:
        ...

    def snapshot(self) -> Any:
        ...

    def restore(self, state: Any) -> None:
        ...


@runtime_checkable
class AwardRegistryProtocol(Protocol):
    """Interface for the award registry the ledger mints through"""

    address: str

    async def mint(self, caller: str, to_account: str, token_uri: str) -> int:
        """Mint an award token; caller must be the registry owner"""
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for the event bus"""

    async def publish_event(self, event: Any) -> bool:
        """Publish an event"""
        ...


__all__ = [
    # Exceptions
    "DonationServiceError",
    "AuthorizationError",
    "CallerNotOwnerError",
    "CallerNotAdminError",
    "WithdrawForbiddenError",
    "InvalidInputError",
    "EmptyStringError",
    "InvalidTimeGoalError",
    "InvalidMoneyGoalError",
    "InsufficientDonationError",
    "InvalidAccountError",
    "StateError",
    "CampaignNotFoundError",
    "CampaignCompletedError",
    "CampaignInProgressError",
    "OwnerCannotBeRevokedError",
    "FundsTransferError",
    # Protocols
    "DonationRepositoryProtocol",
    "TreasuryProtocol",
    "AwardRegistryProtocol",
    "EventBusProtocol",
]
