"""
Donation Award Service Business Logic

Mints award tokens on behalf of the registry owner and answers token queries.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from core.unit_of_work import UnitOfWork

from .events.publishers import AwardEventPublisher
from .models import AwardRegistryInfo, AwardToken
from .protocols import (
    AwardRepositoryProtocol,
    CallerNotOwnerError,
    EventBusProtocol,
    InvalidAccountError,
    MintUnauthorizedError,
    TokenNotFoundError,
)

logger = logging.getLogger(__name__)


class AwardService:
    """Award token registry with a single authorized minter"""

    DEFAULT_NAME = "DonationAwardContract"
    DEFAULT_SYMBOL = "DWNFT"

    def __init__(
        self,
        repository: AwardRepositoryProtocol,
        unit_of_work: Optional[UnitOfWork] = None,
        event_bus: Optional[EventBusProtocol] = None,
        address: str = "donation-award-registry",
        name: str = DEFAULT_NAME,
        symbol: str = DEFAULT_SYMBOL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repository = repository
        self.unit_of_work = unit_of_work or UnitOfWork()
        self.event_bus = event_bus
        self.address = address
        self.name = name
        self.symbol = symbol
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.events = AwardEventPublisher(self.unit_of_work, event_bus)

        self.unit_of_work.enlist(repository)

    # ====================
    # Minting
    # ====================

    async def mint(self, caller: str, to_account: str, token_uri: str) -> int:
        """
        Mint a new award token.

        Args:
            caller: Account requesting the mint; must be the registry owner
            to_account: Account that receives the token
            token_uri: Metadata reference stored with the token

        Returns:
            The new token id

        Raises:
            MintUnauthorizedError: caller is not the owner
            InvalidAccountError: empty recipient
        """
        async with self.unit_of_work.transaction():
            owner = await self.repository.get_owner()
            if caller != owner:
                raise MintUnauthorizedError(
                    f"Caller {caller} is not the award registry owner", caller=caller
                )
            if not to_account:
                raise InvalidAccountError("Cannot mint to an empty account")

            token_id = await self.repository.next_token_id()
            token = AwardToken(
                token_id=token_id,
                owner=to_account,
                token_uri=token_uri,
                minted_at=self.clock(),
            )
            await self.repository.save_token(token)
            self.events.publish_nft_minted(to_account, token_id, token_uri)

        logger.info(f"Award token #{token_id} minted to {to_account}")
        return token_id

    # ====================
    # Ownership
    # ====================

    async def get_owner(self) -> str:
        return await self.repository.get_owner()

    async def transfer_ownership(self, caller: str, new_owner: str) -> None:
        """Hand the minting right to another account"""
        async with self.unit_of_work.transaction():
            previous_owner = await self.repository.get_owner()
            if caller != previous_owner:
                raise CallerNotOwnerError(f"Caller {caller} is not the award registry owner")
            if not new_owner:
                raise InvalidAccountError("New owner is the empty account")

            await self.repository.set_owner(new_owner)
            self.events.publish_ownership_transferred(previous_owner, new_owner)

        logger.info(f"Award registry ownership transferred: {previous_owner} -> {new_owner}")

    # ====================
    # Queries
    # ====================

    async def get_token(self, token_id: int) -> AwardToken:
        token = await self.repository.get_token(token_id)
        if not token:
            raise TokenNotFoundError(f"Award token not found: {token_id}")
        return token

    async def owner_of(self, token_id: int) -> str:
        return (await self.get_token(token_id)).owner

    async def token_uri(self, token_id: int) -> str:
        return (await self.get_token(token_id)).token_uri

    async def balance_of(self, account: str) -> int:
        if not account:
            raise InvalidAccountError("Balance query for the empty account")
        return await self.repository.count_tokens_owned_by(account)

    async def tokens_of(self, account: str) -> List[AwardToken]:
        return await self.repository.list_tokens_owned_by(account)

    async def token_count(self) -> int:
        return await self.repository.count_tokens()

    async def get_info(self) -> AwardRegistryInfo:
        return AwardRegistryInfo(
            name=self.name,
            symbol=self.symbol,
            address=self.address,
            owner=await self.repository.get_owner(),
            token_count=await self.repository.count_tokens(),
        )
