"""
Donation Award Service

Registry of collectible award tokens handed to record-breaking donors:
- Sequential token ids starting at 1, never reused
- Single authorized minter (the registry owner, normally the donation ledger)
- Ownership transfer for the bootstrap hand-over
- Token owner, metadata URI and per-account balance queries
"""

__version__ = "1.0.0"
__service__ = "donation_award_service"
