"""
Transaction status as a closed tagged variant.

Raw status strings come straight from SQL, so anything outside the three
modelled states is carried as ``UNKNOWN`` with its raw value instead of
falling through a string switch. Matching is exact, the same comparison the
SQL conditional counts make, so both query shapes agree.
"""
from dataclasses import dataclass
from enum import Enum

from store.enums import TxnStatus


class StatusKind(str, Enum):
    SUCCESS = "SUCCESS"
    PENDING = "PENDING"
    FAILED = "FAILED"
    UNKNOWN = "UNKNOWN"


_KNOWN = {
    TxnStatus.SUCCESS.value: StatusKind.SUCCESS,
    TxnStatus.PENDING.value: StatusKind.PENDING,
    TxnStatus.FAILED.value: StatusKind.FAILED,
}


@dataclass(frozen=True)
class ClassifiedStatus:
    kind: StatusKind
    raw: str


def classify_status(value) -> ClassifiedStatus:
    if isinstance(value, Enum):
        value = value.value
    raw = "" if value is None else str(value)
    kind = _KNOWN.get(raw, StatusKind.UNKNOWN)
    return ClassifiedStatus(kind=kind, raw=raw)
