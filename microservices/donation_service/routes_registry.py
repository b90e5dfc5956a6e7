"""
Donation Service Routes Registry

Defines service metadata and the HTTP route table.
"""

SERVICE_METADATA = {
    "service_name": "donation_service",
    "version": "1.0.0",
    "tags": ['donation', 'crowdfunding', 'ledger', 'v1'],
    "capabilities": [
        'campaign_management',
        'donations',
        'withdrawals',
        'admin_management',
        'donor_awards',
    ],
}

ROUTES = [
    {"path": "/health", "methods": ["GET"], "description": "Health check"},
    {"path": "/health/ready", "methods": ["GET"], "description": "Readiness check"},
    {"path": "/health/live", "methods": ["GET"], "description": "Liveness check"},
    {"path": "/api/v1/ledger", "methods": ["GET"], "description": "Ledger identity and counters"},
    {"path": "/api/v1/ledger/admins/{account}", "methods": ["GET", "POST", "DELETE"], "description": "Admin management"},
    {"path": "/api/v1/ledger/campaigns", "methods": ["GET", "POST"], "description": "List or create campaigns"},
    {"path": "/api/v1/ledger/campaigns/{campaign_id}", "methods": ["GET"], "description": "Get live campaign"},
    {"path": "/api/v1/ledger/campaigns/{campaign_id}/status", "methods": ["GET"], "description": "Campaign status"},
    {"path": "/api/v1/ledger/campaigns/{campaign_id}/donations", "methods": ["POST"], "description": "Donate to campaign"},
    {"path": "/api/v1/ledger/campaigns/{campaign_id}/withdrawals", "methods": ["POST"], "description": "Withdraw and archive"},
    {"path": "/api/v1/ledger/archived-campaigns/{archive_id}", "methods": ["GET"], "description": "Get archived campaign"},
    {"path": "/api/v1/ledger/highest-donation", "methods": ["GET"], "description": "Highest donation record"},
    {"path": "/api/v1/awards", "methods": ["GET"], "description": "Award registry identity"},
    {"path": "/api/v1/awards/tokens/{token_id}", "methods": ["GET"], "description": "Award token"},
    {"path": "/api/v1/awards/balances/{account}", "methods": ["GET"], "description": "Award token balance"},
]


def get_route_summary():
    """Route metadata for the service info endpoint"""
    return {
        "route_count": str(len(ROUTES)),
        "routes": ",".join([r["path"] for r in ROUTES]),
        "api_version": "v1",
        "base_path": "/api/v1/ledger",
    }


__all__ = ["SERVICE_METADATA", "ROUTES", "get_route_summary"]
