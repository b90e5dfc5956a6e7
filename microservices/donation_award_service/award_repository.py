"""
Award Repository

In-memory storage for award tokens and the registry owner.
"""

import logging
from typing import Dict, List, Optional

from .models import AwardToken

logger = logging.getLogger(__name__)


class AwardRepository:
    """Token table with a monotonically increasing id counter"""

    def __init__(self, owner: str):
        self._owner = owner
        self._tokens: Dict[int, AwardToken] = {}
        self._last_token_id = 0

    async def get_owner(self) -> str:
        return self._owner

    async def set_owner(self, owner: str) -> None:
        self._owner = owner

    async def next_token_id(self) -> int:
        self._last_token_id += 1
        return self._last_token_id

    async def save_token(self, token: AwardToken) -> AwardToken:
        self._tokens[token.token_id] = token
        return token

    async def get_token(self, token_id: int) -> Optional[AwardToken]:
        return self._tokens.get(token_id)

    async def count_tokens(self) -> int:
        return len(self._tokens)

    async def count_tokens_owned_by(self, account: str) -> int:
        return sum(1 for t in self._tokens.values() if t.owner == account)

    async def list_tokens_owned_by(self, account: str) -> List[AwardToken]:
        return [self._tokens[i] for i in sorted(self._tokens) if self._tokens[i].owner == account]

    # Unit of work participation

    def snapshot(self):
        return (self._owner, dict(self._tokens), self._last_token_id)

    def restore(self, state) -> None:
        self._owner, tokens, self._last_token_id = state
        self._tokens = dict(tokens)
        logger.debug(f"Award repository restored to token #{self._last_token_id}")
