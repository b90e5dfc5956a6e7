"""
Donation Award Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .models import AwardToken


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class AwardServiceError(Exception):
    """Base exception for award registry errors"""
    error_code = "AwardServiceError"


class CallerNotOwnerError(AwardServiceError):
    """Caller is not the registry owner"""
    error_code = "CallerNotOwner"


class MintUnauthorizedError(CallerNotOwnerError):
    """Mint attempted by an account other than the authorized minter"""

    def __init__(self, message: str, caller: Optional[str] = None):
        super().__init__(message)
        self.caller = caller


class TokenNotFoundError(AwardServiceError):
    """Token id has never been minted"""
    error_code = "TokenNotFound"


class InvalidAccountError(AwardServiceError):
    """Empty account where one is required"""
    error_code = "InvalidAccount"


# ============================================================================
# Repository Protocols
# ============================================================================

@runtime_checkable
class AwardRepositoryProtocol(Protocol):
    """
    Interface for the award token repository.

    Implementations must also support snapshot/restore so they can take part
    in a unit of work.
    """

    async def get_owner(self) -> str:
        """Current registry owner"""
        ...

    async def set_owner(self, owner: str) -> None:
        """Replace the registry owner"""
        ...

    async def next_token_id(self) -> int:
        """Allocate the next token id"""
        ...

    async def save_token(self, token: AwardToken) -> AwardToken:
        """Store a minted token"""
        ...

    async def get_token(self, token_id: int) -> Optional[AwardToken]:
        """Get token by id"""
        ...

    async def count_tokens(self) -> int:
        """Number of tokens minted so far"""
        ...

    async def count_tokens_owned_by(self, account: str) -> int:
        """Number of tokens held by one account"""
        ...

    async def list_tokens_owned_by(self, account: str) -> List[AwardToken]:
        """Tokens held by one account, ordered by id"""
        ...

    def snapshot(self) -> Any:
        ...

    def restore(self, state: Any) -> None:
        ...


@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for the event bus"""

    async def publish_event(self, event: Any) -> bool:
        """Publish an event"""
        ...


__all__ = [
    # Exceptions
    "AwardServiceError",
    "CallerNotOwnerError",
    "MintUnauthorizedError",
    "TokenNotFoundError",
    "InvalidAccountError",
    # Protocols
    "AwardRepositoryProtocol",
    "EventBusProtocol",
]
