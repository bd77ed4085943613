import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from database.postgres import Base
from store.enums import TxnStatus, TxnType


class Transaction(Base):
    """
    Ledger entry. ``status`` and ``payment_method`` are plain strings so values
    written by other systems (e.g. ``REFUNDED``) survive untouched.
    """
    __tablename__ = "transactions"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(19, 4), nullable=False)
    currency = Column(String(3), nullable=False)
    type = Column(String(20), nullable=False, default=TxnType.PAYMENT.value)
    status = Column(String(20), nullable=False, default=TxnStatus.PENDING.value, index=True)
    payment_method = Column(String(30), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    user = relationship("User", back_populates="transactions")
