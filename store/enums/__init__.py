"""
Enums package for system-wide enumerations.
"""
from .enums import (
    TxnStatus,
    TxnType,
)

__all__ = [
    "TxnStatus",
    "TxnType",
]
