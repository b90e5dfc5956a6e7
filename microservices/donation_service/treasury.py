"""
Treasury

Fund custody for the ledger. Donations are received into custody per
campaign; withdrawals pay the whole campaign balance out to one recipient.
Recipients registered as rejecting make ``pay_out`` fail.
"""

import logging
from decimal import Decimal
from typing import Dict, Set

from .protocols import FundsTransferError

logger = logging.getLogger(__name__)


class Treasury:
    """In-memory custody ledger"""

    def __init__(self):
        self._held: Dict[int, Decimal] = {}
        self._paid_out: Dict[str, Decimal] = {}
        self._rejecting: Set[str] = set()

    async def receive(self, campaign_id: int, donor: str, amount: Decimal) -> None:
        self._held[campaign_id] = self._held.get(campaign_id, Decimal("0")) + amount
        logger.debug(f"Custody +{amount} for campaign {campaign_id} from {donor}")

    async def pay_out(self, campaign_id: int, recipient: str, amount: Decimal) -> None:
        held = self._held.get(campaign_id, Decimal("0"))
        if amount > held:
            raise FundsTransferError(
                f"Campaign {campaign_id} holds {held}, cannot pay {amount}",
                recipient=recipient,
                amount=amount,
            )
        if recipient in self._rejecting:
            raise FundsTransferError(
                f"Recipient {recipient} rejected transfer of {amount}",
                recipient=recipient,
                amount=amount,
            )

        remaining = held - amount
        if remaining:
            self._held[campaign_id] = remaining
        else:
            self._held.pop(campaign_id, None)
        self._paid_out[recipient] = self._paid_out.get(recipient, Decimal("0")) + amount
        logger.debug(f"Paid {amount} from campaign {campaign_id} to {recipient}")

    async def custody_balance(self) -> Decimal:
        return sum(self._held.values(), Decimal("0"))

    async def paid_out_to(self, account: str) -> Decimal:
        return self._paid_out.get(account, Decimal("0"))

    def reject_transfers_to(self, account: str) -> None:
        """Make future payouts to ``account`` fail"""
        self._rejecting.add(account)

    def accept_transfers_to(self, account: str) -> None:
        self._rejecting.discard(account)

    # Unit of work participation

    def snapshot(self):
        return (dict(self._held), dict(self._paid_out))

    def restore(self, state) -> None:
        held, paid_out = state
        self._held = dict(held)
        self._paid_out = dict(paid_out)
