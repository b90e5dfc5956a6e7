"""
Donation Service Main Application

FastAPI application for the crowdfunding ledger and its award registry.
Port: 8260
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from core.config import get_settings
from core.logger import setup_service_logger

from microservices.donation_award_service.award_service import AwardService
from microservices.donation_award_service.models import (
    AwardBalanceResponse,
    AwardRegistryInfo,
    AwardToken,
)
from microservices.donation_award_service.protocols import (
    AwardServiceError,
    CallerNotOwnerError as AwardCallerNotOwnerError,
    InvalidAccountError as AwardInvalidAccountError,
    TokenNotFoundError,
)

from .donation_service import DonationService
from .factory import DonationServiceFactory
from .models import (
    AdminResponse,
    ArchivedCampaign,
    Campaign,
    CampaignCreateRequest,
    CampaignCreatedResponse,
    CampaignListResponse,
    CampaignStatus,
    CampaignStatusResponse,
    DonationReceipt,
    DonationRequest,
    HealthResponse,
    HighestDonation,
    LedgerInfo,
)
from .protocols import (
    AuthorizationError,
    CampaignNotFoundError,
    DonationServiceError,
    FundsTransferError,
    InvalidInputError,
    StateError,
)
from .routes_registry import SERVICE_METADATA, get_route_summary

config = get_settings()

# Configure logger
logger = setup_service_logger("donation_service", level=config.logging.log_level, config=config.logging)

# Service configuration
SERVICE_NAME = config.service_name
SERVICE_PORT = config.service_port
SERVICE_VERSION = SERVICE_METADATA["version"]

# Track startup time for uptime calculation
startup_time = time.time()

# Global factory instance
factory: Optional[DonationServiceFactory] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    global factory

    logger.info(f"Starting {SERVICE_NAME} on port {SERVICE_PORT}")

    factory = DonationServiceFactory(config)
    await factory.initialize()

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    await factory.close()


# Create FastAPI application
app = FastAPI(
    title="Donation Service",
    description="Crowdfunding ledger with campaign lifecycle, withdrawals and donor awards",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# ====================
# Exception Handlers
# ====================


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": str(exc),
            "error_code": getattr(exc, "error_code", type(exc).__name__),
        },
    )


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_403_FORBIDDEN, exc)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(CampaignNotFoundError)
async def campaign_not_found_handler(request: Request, exc: CampaignNotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(StateError)
async def state_error_handler(request: Request, exc: StateError):
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(FundsTransferError)
async def funds_transfer_handler(request: Request, exc: FundsTransferError):
    logger.error(f"Funds transfer failed on {request.url.path}: {exc}")
    return _error_response(status.HTTP_502_BAD_GATEWAY, exc)


@app.exception_handler(DonationServiceError)
async def donation_error_handler(request: Request, exc: DonationServiceError):
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(AwardCallerNotOwnerError)
async def award_unauthorized_handler(request: Request, exc: AwardCallerNotOwnerError):
    return _error_response(status.HTTP_403_FORBIDDEN, exc)


@app.exception_handler(TokenNotFoundError)
async def token_not_found_handler(request: Request, exc: TokenNotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(AwardInvalidAccountError)
async def award_invalid_account_handler(request: Request, exc: AwardInvalidAccountError):
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(AwardServiceError)
async def award_error_handler(request: Request, exc: AwardServiceError):
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


# ====================
# Dependencies
# ====================


def get_service() -> DonationService:
    """Get donation service from factory"""
    if not factory:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return factory.service


def get_award_service(service: DonationService = Depends(get_service)) -> AwardService:
    """Get the award registry the ledger mints through"""
    return service.award_registry


def get_caller(request: Request) -> str:
    """Extract the calling account from request headers"""
    account = request.headers.get("X-Account-ID")
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Account-ID header required",
        )
    return account


# ====================
# Health Endpoints
# ====================


@app.get("/api/v1/ledger/health")
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        port=SERVICE_PORT,
        version=SERVICE_VERSION,
    )


@app.get("/health/ready", tags=["Health"])
async def readiness_check():
    """Readiness check endpoint"""
    ready = factory is not None
    checks = {"factory": ready}
    if factory and factory.event_bus:
        checks["event_bus"] = factory.event_bus.is_connected
    return {"ready": ready and all(checks.values()), "checks": checks}


@app.get("/health/live", tags=["Health"])
async def liveness_check():
    """Liveness check endpoint"""
    return {"alive": True, "uptime_seconds": time.time() - startup_time}


# ====================
# Ledger Endpoints
# ====================


@app.get("/api/v1/ledger", response_model=LedgerInfo, tags=["Ledger"])
async def get_ledger_info(service: DonationService = Depends(get_service)):
    """Ledger address, owner, award registry address and id counters"""
    return await service.get_info()


@app.get("/api/v1/ledger/routes", tags=["Ledger"])
async def get_routes():
    return {**SERVICE_METADATA, **get_route_summary()}


@app.get("/api/v1/ledger/highest-donation", response_model=HighestDonation, tags=["Ledger"])
async def get_highest_donation(service: DonationService = Depends(get_service)):
    return await service.get_highest_donation()


# ====================
# Admin Endpoints
# ====================


@app.get("/api/v1/ledger/admins/{account}", response_model=AdminResponse, tags=["Admins"])
async def get_admin(account: str, service: DonationService = Depends(get_service)):
    return AdminResponse(account=account, is_admin=service.is_admin(account))


@app.post("/api/v1/ledger/admins/{account}", response_model=AdminResponse, tags=["Admins"])
async def assign_admin(
    account: str,
    service: DonationService = Depends(get_service),
    caller: str = Depends(get_caller),
):
    """Grant campaign-creation rights (owner only)"""
    await service.assign_admin(caller, account)
    return AdminResponse(account=account, is_admin=True)


@app.delete("/api/v1/ledger/admins/{account}", response_model=AdminResponse, tags=["Admins"])
async def revoke_admin(
    account: str,
    service: DonationService = Depends(get_service),
    caller: str = Depends(get_caller),
):
    """Withdraw campaign-creation rights (owner only)"""
    await service.revoke_admin(caller, account)
    return AdminResponse(account=account, is_admin=False)


# ====================
# Campaign Endpoints
# ====================


@app.post(
    "/api/v1/ledger/campaigns",
    response_model=CampaignCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Campaigns"],
)
async def create_campaign(
    request: CampaignCreateRequest,
    service: DonationService = Depends(get_service),
    caller: str = Depends(get_caller),
):
    """Create a campaign (admins only)"""
    campaign_id = await service.create_campaign(
        caller,
        name=request.name,
        description=request.description,
        time_goal=request.time_goal,
        money_goal=request.money_goal,
        token_uri=request.token_uri,
        campaign_manager=request.campaign_manager,
    )
    campaign = await service.get_campaign(campaign_id)
    return CampaignCreatedResponse(campaign_id=campaign_id, campaign=campaign)


@app.get("/api/v1/ledger/campaigns", response_model=CampaignListResponse, tags=["Campaigns"])
async def list_campaigns(
    status_filter: Optional[CampaignStatus] = Query(None, alias="status"),
    service: DonationService = Depends(get_service),
):
    campaigns = await service.list_campaigns(status_filter)
    return CampaignListResponse(campaigns=campaigns, total=len(campaigns))


@app.get("/api/v1/ledger/campaigns/{campaign_id}", response_model=Campaign, tags=["Campaigns"])
async def get_campaign(campaign_id: int, service: DonationService = Depends(get_service)):
    return await service.get_campaign(campaign_id)


@app.get(
    "/api/v1/ledger/campaigns/{campaign_id}/status",
    response_model=CampaignStatusResponse,
    tags=["Campaigns"],
)
async def get_campaign_status(campaign_id: int, service: DonationService = Depends(get_service)):
    campaign_status = await service.get_campaign_status(campaign_id)
    return CampaignStatusResponse(campaign_id=campaign_id, status=campaign_status)


@app.post(
    "/api/v1/ledger/campaigns/{campaign_id}/donations",
    response_model=DonationReceipt,
    tags=["Campaigns"],
)
async def donate(
    campaign_id: int,
    request: DonationRequest,
    service: DonationService = Depends(get_service),
    caller: str = Depends(get_caller),
):
    """Donate to a campaign in progress"""
    return await service.donate(caller, campaign_id, request.amount)


@app.post(
    "/api/v1/ledger/campaigns/{campaign_id}/withdrawals",
    response_model=ArchivedCampaign,
    tags=["Campaigns"],
)
async def withdraw_funds(
    campaign_id: int,
    service: DonationService = Depends(get_service),
    caller: str = Depends(get_caller),
):
    """Withdraw the full balance of a completed campaign and archive it"""
    return await service.withdraw_funds(caller, campaign_id)


@app.get(
    "/api/v1/ledger/archived-campaigns/{archive_id}",
    response_model=ArchivedCampaign,
    tags=["Campaigns"],
)
async def get_archived_campaign(archive_id: int, service: DonationService = Depends(get_service)):
    return await service.get_archived_campaign(archive_id)


# ====================
# Award Registry Endpoints
# ====================


@app.get("/api/v1/awards", response_model=AwardRegistryInfo, tags=["Awards"])
async def get_award_registry(awards: AwardService = Depends(get_award_service)):
    return await awards.get_info()


@app.get("/api/v1/awards/tokens/{token_id}", response_model=AwardToken, tags=["Awards"])
async def get_award_token(token_id: int, awards: AwardService = Depends(get_award_service)):
    return await awards.get_token(token_id)


@app.get("/api/v1/awards/balances/{account}", response_model=AwardBalanceResponse, tags=["Awards"])
async def get_award_balance(account: str, awards: AwardService = Depends(get_award_service)):
    return AwardBalanceResponse(account=account, balance=await awards.balance_of(account))


def main():
    """Run the service"""
    import uvicorn

    uvicorn.run(
        "microservices.donation_service.main:app",
        host=config.service_host,
        port=SERVICE_PORT,
        reload=config.debug,
        log_level=config.logging.log_level.lower(),
    )


if __name__ == "__main__":
    main()
