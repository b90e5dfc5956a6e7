"""
Donation Repository

In-memory campaign ledger: live campaigns, the archive and the
highest-donation record. Live and archived campaigns use separate id counters.
"""

import logging
from typing import Dict, List, Optional

from .models import ArchivedCampaign, Campaign, CampaignStatus, HighestDonation

logger = logging.getLogger(__name__)


class DonationRepository:
    """Campaign ledger storage"""

    def __init__(self):
        self._campaigns: Dict[int, Campaign] = {}
        self._archived: Dict[int, ArchivedCampaign] = {}
        self._campaign_counter = 0
        self._archive_counter = 0
        self._highest = HighestDonation()

    # Live campaigns

    async def next_campaign_id(self) -> int:
        self._campaign_counter += 1
        return self._campaign_counter

    async def current_campaign_id(self) -> int:
        return self._campaign_counter

    async def save_campaign(self, campaign: Campaign) -> Campaign:
        self._campaigns[campaign.campaign_id] = campaign.model_copy()
        return campaign

    async def get_campaign(self, campaign_id: int) -> Optional[Campaign]:
        campaign = self._campaigns.get(campaign_id)
        return campaign.model_copy() if campaign else None

    async def delete_campaign(self, campaign_id: int) -> bool:
        return self._campaigns.pop(campaign_id, None) is not None

    async def list_campaigns(self, status: Optional[CampaignStatus] = None) -> List[Campaign]:
        campaigns = [self._campaigns[i] for i in sorted(self._campaigns)]
        if status:
            campaigns = [c for c in campaigns if c.status == status]
        return [c.model_copy() for c in campaigns]

    # Archive

    async def next_archive_id(self) -> int:
        self._archive_counter += 1
        return self._archive_counter

    async def current_archive_id(self) -> int:
        return self._archive_counter

    async def save_archived_campaign(self, campaign: ArchivedCampaign) -> ArchivedCampaign:
        self._archived[campaign.archive_id] = campaign.model_copy()
        return campaign

    async def get_archived_campaign(self, archive_id: int) -> Optional[ArchivedCampaign]:
        campaign = self._archived.get(archive_id)
        return campaign.model_copy() if campaign else None

    # Highest donation

    async def get_highest_donation(self) -> HighestDonation:
        return self._highest.model_copy()

    async def set_highest_donation(self, record: HighestDonation) -> None:
        self._highest = record

    # Unit of work participation

    def snapshot(self):
        return (
            dict(self._campaigns),
            dict(self._archived),
            self._campaign_counter,
            self._archive_counter,
            self._highest,
        )

    def restore(self, state) -> None:
        campaigns, archived, self._campaign_counter, self._archive_counter, self._highest = state
        self._campaigns = dict(campaigns)
        self._archived = dict(archived)
        logger.debug("Donation repository restored from snapshot")
