"""
Donation Service Business Logic

Campaign ledger: admin management, campaign creation, donations with
automatic completion, withdrawal with archival, and highest-donor awards
minted through the award registry.

Every mutating operation runs in the shared unit of work, so a failure at
any step (including the nested mint) leaves the ledger, the treasury and the
registry exactly as they were and publishes no events.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Optional

from core.unit_of_work import UnitOfWork

from .authorization import AuthorizationPolicy
from .events.publishers import DonationEventPublisher
from .models import (
    AMOUNT_DECIMAL_PLACES,
    ArchivedCampaign,
    Campaign,
    CampaignStatus,
    DonationReceipt,
    HighestDonation,
    LedgerInfo,
)
from .protocols import (
    AwardRegistryProtocol,
    CampaignCompletedError,
    CampaignInProgressError,
    CampaignNotFoundError,
    DonationRepositoryProtocol,
    EmptyStringError,
    EventBusProtocol,
    InsufficientDonationError,
    InvalidAccountError,
    InvalidMoneyGoalError,
    InvalidTimeGoalError,
    TreasuryProtocol,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return Decimal("NaN")


def _positive(value: Decimal) -> bool:
    return value.is_finite() and value > 0


def _canonical(value: Decimal) -> Decimal:
    """Strip trailing fractional zeros without rounding"""
    sign, digits, exponent = value.as_tuple()
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits, exponent = digits[:-1], exponent + 1
    return Decimal((sign, digits, exponent))


def _fits_precision(value: Decimal) -> bool:
    return _canonical(value).as_tuple().exponent >= -AMOUNT_DECIMAL_PLACES


class DonationService:
    """Donation ledger business logic layer"""

    def __init__(
        self,
        repository: DonationRepositoryProtocol,
        treasury: TreasuryProtocol,
        award_registry: AwardRegistryProtocol,
        owner: str,
        unit_of_work: Optional[UnitOfWork] = None,
        event_bus: Optional[EventBusProtocol] = None,
        address: str = "donation-ledger",
        clock: Optional[Callable[[], datetime]] = None,
        withdraw_checks_time_goal: bool = True,
        currency: str = "ETH",
    ):
        self.repository = repository
        self.treasury = treasury
        self._award_registry = award_registry
        self.policy = AuthorizationPolicy(owner)
        self.unit_of_work = (
            unit_of_work or getattr(award_registry, "unit_of_work", None) or UnitOfWork()
        )
        self.event_bus = event_bus
        self.address = address
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.withdraw_checks_time_goal = withdraw_checks_time_goal
        self.currency = currency
        self.events = DonationEventPublisher(self.unit_of_work, event_bus)

        for participant in (repository, treasury, self.policy):
            self.unit_of_work.enlist(participant)

    @property
    def owner(self) -> str:
        return self.policy.owner

    @property
    def award_registry(self) -> AwardRegistryProtocol:
        return self._award_registry

    @property
    def donation_award_address(self) -> str:
        return self._award_registry.address

    def _now(self) -> datetime:
        return _as_utc(self.clock())

    # ====================
    # Admin Management
    # ====================

    async def assign_admin(self, caller: str, account: str) -> None:
        """
        Grant campaign-creation rights to ``account``.

        Assigning an existing admin is accepted and announced again.

        Raises:
            CallerNotOwnerError: caller is not the owner
            InvalidAccountError: empty account
        """
        async with self.unit_of_work.transaction():
            self.policy.require_owner(caller)
            added = self.policy.grant_admin(account)
            self.events.publish_admin_assigned(account)

        if added:
            logger.info(f"Admin assigned: {account}")
        else:
            logger.info(f"Admin already assigned: {account}")

    async def revoke_admin(self, caller: str, account: str) -> None:
        """
        Withdraw campaign-creation rights from ``account``.

        Raises:
            CallerNotOwnerError: caller is not the owner
            OwnerCannotBeRevokedError: account is the owner
        """
        async with self.unit_of_work.transaction():
            self.policy.require_owner(caller)
            removed = self.policy.revoke_admin(account)
            self.events.publish_admin_revoked(account)

        if removed:
            logger.info(f"Admin revoked: {account}")
        else:
            logger.info(f"Revoke for non-admin account: {account}")

    def is_admin(self, account: str) -> bool:
        return self.policy.is_admin(account)

    # ====================
    # Campaign Creation
    # ====================

    async def create_campaign(
        self,
        caller: str,
        name: str,
        description: str,
        time_goal: datetime,
        money_goal: Any,
        token_uri: str,
        campaign_manager: str,
    ) -> int:
        """
        Register a new campaign.

        Checks run in order: admin, name, description, time goal, money goal.

        Args:
            caller: Creating account; must be an admin
            name: Campaign name, non-empty
            description: Campaign description, non-empty
            time_goal: Deadline, strictly in the future
            money_goal: Target amount, strictly positive
            token_uri: Metadata reference for award tokens minted from this campaign
            campaign_manager: Account allowed to withdraw

        Returns:
            New campaign id
        """
        async with self.unit_of_work.transaction():
            self.policy.require_admin(caller)
            if not name:
                raise EmptyStringError("Campaign name is empty", field="name")
            if not description:
                raise EmptyStringError("Campaign description is empty", field="description")

            now = self._now()
            deadline = _as_utc(time_goal)
            if deadline <= now:
                raise InvalidTimeGoalError(f"Time goal {deadline.isoformat()} is not in the future")

            goal = _as_decimal(money_goal)
            if not _positive(goal):
                raise InvalidMoneyGoalError(f"Money goal must be positive, got {money_goal}")
            if not _fits_precision(goal):
                raise InvalidMoneyGoalError(
                    f"Money goal {money_goal} has more than {AMOUNT_DECIMAL_PLACES} decimal places"
                )
            goal = _canonical(goal)
            if not campaign_manager:
                raise InvalidAccountError("Campaign manager must be a non-empty account")

            campaign_id = await self.repository.next_campaign_id()
            campaign = Campaign(
                campaign_id=campaign_id,
                name=name,
                description=description,
                time_goal=deadline,
                money_goal=goal,
                balance=Decimal("0"),
                campaign_manager=campaign_manager,
                token_uri=token_uri or "",
                status=CampaignStatus.IN_PROGRESS,
                created_by=caller,
                created_at=now,
                updated_at=now,
            )
            await self.repository.save_campaign(campaign)
            self.events.publish_campaign_created(caller, campaign_manager, campaign_id, name)

        logger.info(f"Campaign created: {campaign_id} by {caller}, manager {campaign_manager}")
        return campaign_id

    # ====================
    # Donations
    # ====================

    async def donate(self, caller: str, campaign_id: int, amount: Any) -> DonationReceipt:
        """
        Donate ``amount`` to a campaign.

        Completion is detected lazily here: a campaign whose deadline passed
        stays IN_PROGRESS until the next donation (or withdrawal) looks at it.

        Raises:
            CampaignNotFoundError: no live campaign with this id
            CampaignCompletedError: campaign is no longer in progress
            InsufficientDonationError: amount is not positive
        """
        value = _as_decimal(amount)
        awarded_token_id = None

        async with self.unit_of_work.transaction():
            campaign = await self._get_live_campaign(campaign_id)
            if campaign.status != CampaignStatus.IN_PROGRESS:
                raise CampaignCompletedError(f"Campaign {campaign_id} is {campaign.status.value}")
            if not _positive(value):
                raise InsufficientDonationError(f"Donation must be positive, got {amount}")
            if not _fits_precision(value):
                raise InsufficientDonationError(
                    f"Donation {amount} has more than {AMOUNT_DECIMAL_PLACES} decimal places"
                )
            value = _canonical(value)

            now = self._now()
            await self.treasury.receive(campaign_id, caller, value)
            campaign.balance += value
            campaign.updated_at = now
            self.events.publish_donation_created(caller, value, campaign_id)

            money_reached = campaign.balance >= campaign.money_goal
            time_reached = now >= campaign.time_goal
            if money_reached or time_reached:
                campaign.status = CampaignStatus.COMPLETED
                if time_reached:
                    self.events.publish_time_goal_reached(campaign_id)
            await self.repository.save_campaign(campaign)

            highest = await self.repository.get_highest_donation()
            if value > highest.amount:
                await self.repository.set_highest_donation(
                    HighestDonation(donor=caller, amount=value, campaign_id=campaign_id)
                )
                awarded_token_id = await self._award_registry.mint(
                    self.address, caller, campaign.token_uri
                )
                self.events.publish_donator_awarded(caller, campaign_id, awarded_token_id)

        logger.info(f"Donation of {value} {self.currency} to campaign {campaign_id} from {caller}")
        if campaign.status == CampaignStatus.COMPLETED:
            logger.info(f"Campaign {campaign_id} completed with balance {campaign.balance}")
        if awarded_token_id is not None:
            logger.info(f"Donor {caller} awarded token #{awarded_token_id}")

        return DonationReceipt(
            campaign_id=campaign_id,
            donor=caller,
            amount=value,
            balance=campaign.balance,
            status=campaign.status,
            awarded_token_id=awarded_token_id,
        )

    # ====================
    # Withdrawal & Archival
    # ====================

    async def withdraw_funds(self, caller: str, campaign_id: int) -> ArchivedCampaign:
        """
        Pay the whole balance to the campaign manager and archive the campaign.

        Raises:
            CampaignNotFoundError: no live campaign with this id
            CampaignInProgressError: campaign has not completed
            WithdrawForbiddenError: caller is not the campaign manager
            FundsTransferError: payout failed; nothing is changed
        """
        async with self.unit_of_work.transaction():
            campaign = await self._get_live_campaign(campaign_id)
            now = self._now()

            if (
                self.withdraw_checks_time_goal
                and campaign.status == CampaignStatus.IN_PROGRESS
                and now >= campaign.time_goal
            ):
                campaign.status = CampaignStatus.COMPLETED
                campaign.updated_at = now
                await self.repository.save_campaign(campaign)
                self.events.publish_time_goal_reached(campaign_id)

            if campaign.status != CampaignStatus.COMPLETED:
                raise CampaignInProgressError(f"Campaign {campaign_id} is still in progress")
            self.policy.require_campaign_manager(caller, campaign)

            amount = campaign.balance
            await self.treasury.pay_out(campaign_id, campaign.campaign_manager, amount)
            self.events.publish_funds_withdrawed(campaign_id, campaign.campaign_manager, amount)

            archive_id = await self.repository.next_archive_id()
            archived = ArchivedCampaign(
                **campaign.model_dump(exclude={"status", "updated_at"}),
                status=CampaignStatus.ARCHIVED,
                updated_at=now,
                archive_id=archive_id,
                withdrawn_amount=amount,
                archived_at=now,
            )
            await self.repository.save_archived_campaign(archived)
            await self.repository.delete_campaign(campaign_id)
            self.events.publish_campaign_archived(archive_id, campaign_id)

        logger.info(
            f"Campaign {campaign_id} withdrawn ({amount} {self.currency} to "
            f"{campaign.campaign_manager}) and archived as {archive_id}"
        )
        return archived

    # ====================
    # Queries
    # ====================

    async def _get_live_campaign(self, campaign_id: int) -> Campaign:
        campaign = await self.repository.get_campaign(campaign_id)
        if not campaign:
            raise CampaignNotFoundError(f"Campaign not found: {campaign_id}", campaign_id=campaign_id)
        return campaign

    async def get_campaign(self, campaign_id: int) -> Campaign:
        return await self._get_live_campaign(campaign_id)

    async def get_campaign_status(self, campaign_id: int) -> CampaignStatus:
        campaign = await self.repository.get_campaign(campaign_id)
        return campaign.status if campaign else CampaignStatus.NOT_FOUND

    async def list_campaigns(self, status: Optional[CampaignStatus] = None) -> List[Campaign]:
        return await self.repository.list_campaigns(status)

    async def get_archived_campaign(self, archive_id: int) -> ArchivedCampaign:
        campaign = await self.repository.get_archived_campaign(archive_id)
        if not campaign:
            raise CampaignNotFoundError(f"Archived campaign not found: {archive_id}")
        return campaign

    async def campaign_identifier(self) -> int:
        """Last assigned campaign id, 0 before the first campaign"""
        return await self.repository.current_campaign_id()

    async def archived_campaign_identifier(self) -> int:
        """Last assigned archive id, 0 before the first archival"""
        return await self.repository.current_archive_id()

    async def get_highest_donation(self) -> HighestDonation:
        return await self.repository.get_highest_donation()

    async def get_info(self) -> LedgerInfo:
        return LedgerInfo(
            address=self.address,
            owner=self.owner,
            donation_award_address=self.donation_award_address,
            campaign_identifier=await self.repository.current_campaign_id(),
            archived_campaign_identifier=await self.repository.current_archive_id(),
            custody_balance=await self.treasury.custody_balance(),
            currency=self.currency,
        )
