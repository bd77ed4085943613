from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from database.postgres import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    email = Column(String(255), unique=True, nullable=False)
    full_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    transactions = relationship("Transaction", back_populates="user")
