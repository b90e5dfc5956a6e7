"""
Component Tests for Campaign Creation

Covers the admin gate, input checks in their documented order, id
allocation and the CampaignCreated event.
"""

import os
import sys
from datetime import timedelta
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.donation_service.models import CampaignStatus
from microservices.donation_service.protocols import (
    CallerNotAdminError,
    EmptyStringError,
    InvalidAccountError,
    InvalidMoneyGoalError,
    InvalidTimeGoalError,
)
from tests.contracts.donation.data_contract import (
    ADMIN,
    DEFAULT_CAMPAIGN_DESCRIPTION,
    DEFAULT_CAMPAIGN_NAME,
    DEFAULT_TOKEN_URI,
    MANAGER,
    OWNER,
    STRANGER,
)

pytestmark = [pytest.mark.component, pytest.mark.asyncio]


class TestCreateCampaignSuccess:
    """Successful creation"""

    async def test_first_campaign_gets_id_one(self, ledger, clock, factory, mock_event_bus):
        """
        Given: a fresh ledger
        When: the owner creates a campaign
        Then: it gets id 1, starts IN_PROGRESS with zero balance and is announced
        """
        assert await ledger.campaign_identifier() == 0

        kwargs = factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
        campaign_id = await ledger.create_campaign(OWNER, **kwargs)

        assert campaign_id == 1
        assert await ledger.campaign_identifier() == 1

        campaign = await ledger.get_campaign(campaign_id)
        assert campaign.name == DEFAULT_CAMPAIGN_NAME
        assert campaign.description == DEFAULT_CAMPAIGN_DESCRIPTION
        assert campaign.money_goal == Decimal("3")
        assert campaign.balance == Decimal("0")
        assert campaign.campaign_manager == MANAGER
        assert campaign.token_uri == DEFAULT_TOKEN_URI
        assert campaign.time_goal == kwargs["time_goal"]
        assert campaign.status == CampaignStatus.IN_PROGRESS
        assert campaign.created_by == OWNER

        mock_event_bus.assert_event_published(
            "ledger.campaign.created",
            {
                "creator": OWNER,
                "campaign_manager": MANAGER,
                "campaign_id": 1,
                "name": DEFAULT_CAMPAIGN_NAME,
            },
        )

    async def test_ids_are_sequential(self, ledger, clock, factory):
        ids = [
            await ledger.create_campaign(
                OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
            )
            for _ in range(3)
        ]

        assert ids == [1, 2, 3]
        assert await ledger.campaign_identifier() == 3

    async def test_assigned_admin_can_create(self, ledger, clock, factory, mock_event_bus):
        await ledger.assign_admin(OWNER, ADMIN)

        campaign_id = await ledger.create_campaign(
            ADMIN, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
        )

        mock_event_bus.assert_event_published(
            "ledger.campaign.created", {"creator": ADMIN, "campaign_id": campaign_id}
        )

    async def test_naive_time_goal_is_treated_as_utc(self, ledger, clock, factory):
        naive_deadline = (clock() + timedelta(minutes=5)).replace(tzinfo=None)

        campaign_id = await ledger.create_campaign(
            OWNER,
            **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, time_goal=naive_deadline),
        )

        campaign = await ledger.get_campaign(campaign_id)
        assert campaign.time_goal == clock() + timedelta(minutes=5)

    async def test_money_goal_accepts_strings_and_ints(self, ledger, clock, factory):
        cid_str = await ledger.create_campaign(
            OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, money_goal="10")
        )
        cid_int = await ledger.create_campaign(
            OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, money_goal=10)
        )

        assert (await ledger.get_campaign(cid_str)).money_goal == Decimal("10")
        assert (await ledger.get_campaign(cid_int)).money_goal == Decimal("10")


class TestCreateCampaignRejections:
    """Rejections, in check order"""

    async def test_non_admin_rejected(self, ledger, clock, factory, mock_event_bus):
        with pytest.raises(CallerNotAdminError):
            await ledger.create_campaign(
                STRANGER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
            )

        assert await ledger.campaign_identifier() == 0
        mock_event_bus.assert_no_events_published()

    async def test_admin_check_precedes_input_checks(self, ledger, clock, factory):
        with pytest.raises(CallerNotAdminError):
            await ledger.create_campaign(
                STRANGER,
                **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, name="", money_goal=0),
            )

    async def test_empty_name(self, ledger, clock, factory):
        with pytest.raises(EmptyStringError) as exc_info:
            await ledger.create_campaign(
                OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, name="")
            )

        assert exc_info.value.field == "name"
        assert exc_info.value.error_code == "EmptyString"

    async def test_empty_description(self, ledger, clock, factory):
        with pytest.raises(EmptyStringError) as exc_info:
            await ledger.create_campaign(
                OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, description="")
            )

        assert exc_info.value.field == "description"

    async def test_name_checked_before_description(self, ledger, clock, factory):
        with pytest.raises(EmptyStringError) as exc_info:
            await ledger.create_campaign(
                OWNER,
                **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, name="", description=""),
            )

        assert exc_info.value.field == "name"

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(seconds=-1), timedelta(days=-30)])
    async def test_time_goal_must_be_in_the_future(self, ledger, clock, factory, offset):
        with pytest.raises(InvalidTimeGoalError):
            await ledger.create_campaign(
                OWNER,
                **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, time_goal=clock() + offset),
            )

    async def test_empty_string_checked_before_time_goal(self, ledger, clock, factory):
        with pytest.raises(EmptyStringError):
            await ledger.create_campaign(
                OWNER,
                **factory.make_campaign_kwargs(
                    clock(), campaign_manager=MANAGER, description="", time_goal=clock()
                ),
            )

    @pytest.mark.parametrize("money_goal", [0, Decimal("0"), Decimal("-1"), "-0.5", "NaN"])
    async def test_money_goal_must_be_positive(self, ledger, clock, factory, money_goal):
        with pytest.raises(InvalidMoneyGoalError):
            await ledger.create_campaign(
                OWNER,
                **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, money_goal=money_goal),
            )

    @pytest.mark.parametrize("money_goal", [Decimal("1E-19"), "0.0000000000000000001", "1.0000000000000000001"])
    async def test_money_goal_beyond_wei_precision(self, ledger, clock, factory, mock_event_bus, money_goal):
        with pytest.raises(InvalidMoneyGoalError):
            await ledger.create_campaign(
                OWNER,
                **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, money_goal=money_goal),
            )

        assert await ledger.campaign_identifier() == 0
        mock_event_bus.assert_no_events_published()

    async def test_money_goal_trailing_zeros_are_not_precision(self, ledger, clock, factory):
        campaign_id = await ledger.create_campaign(
            OWNER,
            **factory.make_campaign_kwargs(
                clock(), campaign_manager=MANAGER, money_goal="0.000000000000000001000"
            ),
        )

        campaign = await ledger.get_campaign(campaign_id)
        assert campaign.money_goal == Decimal("1E-18")

    async def test_time_goal_checked_before_money_goal(self, ledger, clock, factory):
        with pytest.raises(InvalidTimeGoalError):
            await ledger.create_campaign(
                OWNER,
                **factory.make_campaign_kwargs(
                    clock(), campaign_manager=MANAGER, time_goal=clock(), money_goal=0
                ),
            )

    async def test_empty_campaign_manager(self, ledger, clock, factory):
        with pytest.raises(InvalidAccountError):
            await ledger.create_campaign(
                OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager="")
            )

    async def test_rejected_creation_does_not_consume_an_id(self, ledger, clock, factory):
        with pytest.raises(InvalidMoneyGoalError):
            await ledger.create_campaign(
                OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER, money_goal=0)
            )

        campaign_id = await ledger.create_campaign(
            OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
        )
        assert campaign_id == 1


class TestCampaignQueries:
    """Status and listing queries"""

    @pytest.mark.parametrize("campaign_id", [0, 1, 99])
    async def test_unknown_id_reports_not_found(self, ledger, campaign_id):
        assert await ledger.get_campaign_status(campaign_id) == CampaignStatus.NOT_FOUND

    async def test_status_of_live_campaign(self, ledger, campaign_id):
        assert await ledger.get_campaign_status(campaign_id) == CampaignStatus.IN_PROGRESS

    async def test_list_by_status(self, ledger, clock, factory, completed_campaign_id):
        second = await ledger.create_campaign(
            OWNER, **factory.make_campaign_kwargs(clock(), campaign_manager=MANAGER)
        )

        in_progress = await ledger.list_campaigns(CampaignStatus.IN_PROGRESS)
        completed = await ledger.list_campaigns(CampaignStatus.COMPLETED)

        assert [c.campaign_id for c in in_progress] == [second]
        assert [c.campaign_id for c in completed] == [completed_campaign_id]
        assert len(await ledger.list_campaigns()) == 2
