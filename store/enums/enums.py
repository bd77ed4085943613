"""
Centralized enumerations for the ledger.
"""
from enum import Enum


# ============================================================================
# TRANSACTION ENUMS
# ============================================================================

class TxnStatus(str, Enum):
    """Modelled transaction states. The column itself is an open string."""
    SUCCESS = "SUCCESS"
    PENDING = "PENDING"
    FAILED = "FAILED"


class TxnType(str, Enum):
    """Direction/kind of a ledger entry"""
    PAYMENT = "PAYMENT"
    REFUND = "REFUND"
    PAYOUT = "PAYOUT"
    TRANSFER = "TRANSFER"
