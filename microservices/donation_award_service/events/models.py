"""
Donation Award Event Data Models

Event type definitions and payloads for award registry events.
"""

from enum import Enum

from pydantic import BaseModel, Field


class AwardEventType(str, Enum):
    """
    Events published by donation_award_service.

    Other services should reference these when subscribing.
    """
    NFT_MINTED = "award.nft.minted"
    OWNERSHIP_TRANSFERRED = "award.ownership.transferred"


class AwardStreamConfig:
    """Subject layout for award registry events"""
    STREAM_NAME = "award-stream"
    SUBJECTS = ["award.>"]


class NFTMintedEventData(BaseModel):
    """Payload of award.nft.minted"""
    owner: str = Field(..., description="Account that received the token")
    token_id: int = Field(..., ge=1)
    token_uri: str = ""


class OwnershipTransferredEventData(BaseModel):
    """Payload of award.ownership.transferred"""
    previous_owner: str
    new_owner: str
