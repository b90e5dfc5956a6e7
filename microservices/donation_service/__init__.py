"""
Donation Service

Crowdfunding ledger microservice providing:
- Admin management (owner assigns and revokes campaign creators)
- Campaign lifecycle (IN_PROGRESS -> COMPLETED -> ARCHIVED)
- Donation acceptance with automatic completion on money or time goal
- Withdrawal of the full balance by the campaign manager, with archival
- Highest-donation tracking and award token minting for record donors

Port: 8260
"""

__version__ = "1.0.0"
__service__ = "donation_service"
