"""
Donation Service Client

Client for other services to call donation_service.
"""

import logging
import os
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class DonationClientError(Exception):
    """Ledger rejected a request"""

    def __init__(self, message: str, status_code: int, error_code: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class DonationClient:
    """Client for donation_service"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if base_url is None:
            host = os.getenv("DONATION_SERVICE_HOST", "localhost")
            port = os.getenv("DONATION_SERVICE_PORT", "8260")
            base_url = f"http://{host}:{port}"
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = {"detail": response.text}
        detail = body.get("detail", response.text)
        logger.error(f"Donation service returned {response.status_code}: {detail}")
        raise DonationClientError(str(detail), response.status_code, body.get("error_code"))

    async def _send(
        self,
        method: str,
        path: str,
        caller: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {"X-Account-ID": caller} if caller else {}
        async with self._client() as client:
            response = await client.request(method, path, headers=headers, json=json, params=params)
        self._raise_for_error(response)
        return response.json()

    # ====================
    # Admins
    # ====================

    async def assign_admin(self, caller: str, account: str) -> Dict[str, Any]:
        return await self._send("POST", f"/api/v1/ledger/admins/{account}", caller=caller)

    async def revoke_admin(self, caller: str, account: str) -> Dict[str, Any]:
        return await self._send("DELETE", f"/api/v1/ledger/admins/{account}", caller=caller)

    async def is_admin(self, account: str) -> bool:
        data = await self._send("GET", f"/api/v1/ledger/admins/{account}")
        return data["is_admin"]

    # ====================
    # Campaigns
    # ====================

    async def create_campaign(
        self,
        caller: str,
        name: str,
        description: str,
        time_goal: datetime,
        money_goal: Decimal,
        campaign_manager: str,
        token_uri: str = "",
    ) -> int:
        """
        Create a campaign.

        Returns:
            New campaign id
        """
        data = await self._send(
            "POST",
            "/api/v1/ledger/campaigns",
            caller=caller,
            json={
                "name": name,
                "description": description,
                "time_goal": time_goal.isoformat(),
                "money_goal": str(money_goal),
                "token_uri": token_uri,
                "campaign_manager": campaign_manager,
            },
        )
        return data["campaign_id"]

    async def get_campaign(self, campaign_id: int) -> Optional[Dict[str, Any]]:
        """
        Get a live campaign.

        Returns:
            Campaign data or None if not found
        """
        try:
            return await self._send("GET", f"/api/v1/ledger/campaigns/{campaign_id}")
        except DonationClientError as e:
            if e.status_code == 404:
                return None
            raise

    async def get_campaign_status(self, campaign_id: int) -> str:
        data = await self._send("GET", f"/api/v1/ledger/campaigns/{campaign_id}/status")
        return data["status"]

    async def donate(self, caller: str, campaign_id: int, amount: Decimal) -> Dict[str, Any]:
        return await self._send(
            "POST",
            f"/api/v1/ledger/campaigns/{campaign_id}/donations",
            caller=caller,
            json={"amount": str(amount)},
        )

    async def withdraw_funds(self, caller: str, campaign_id: int) -> Dict[str, Any]:
        return await self._send(
            "POST",
            f"/api/v1/ledger/campaigns/{campaign_id}/withdrawals",
            caller=caller,
        )

    async def get_archived_campaign(self, archive_id: int) -> Optional[Dict[str, Any]]:
        try:
            return await self._send("GET", f"/api/v1/ledger/archived-campaigns/{archive_id}")
        except DonationClientError as e:
            if e.status_code == 404:
                return None
            raise

    # ====================
    # Ledger state
    # ====================

    async def get_ledger_info(self) -> Dict[str, Any]:
        return await self._send("GET", "/api/v1/ledger")

    async def get_highest_donation(self) -> Dict[str, Any]:
        return await self._send("GET", "/api/v1/ledger/highest-donation")

    # ====================
    # Awards
    # ====================

    async def get_award_token(self, token_id: int) -> Optional[Dict[str, Any]]:
        try:
            return await self._send("GET", f"/api/v1/awards/tokens/{token_id}")
        except DonationClientError as e:
            if e.status_code == 404:
                return None
            raise

    async def get_award_balance(self, account: str) -> int:
        data = await self._send("GET", f"/api/v1/awards/balances/{account}")
        return data["balance"]

    async def health_check(self) -> bool:
        try:
            async with self._client() as client:
                response = await client.get("/health")
                return response.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"Donation service health check failed: {e}")
            return False
