"""
Transaction model for household and personal spending.
"""
from sqlalchemy import Column, String, Date, DateTime, Enum as SQLEnum, ForeignKey, Integer, BigInteger, Text
from sqlalchemy.orm import relationship
from household_ledger.db.base import BaseModel
import enum


class TransactionType(str, enum.Enum):
    """Transaction type enumeration."""
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"


class TransactionScope(str, enum.Enum):
    """Who bears the cost of a transaction."""
    HOUSEHOLD = "HOUSEHOLD"  # Shared, split by income weight
    PERSONAL = "PERSONAL"    # Owed 1:1 by the beneficiary


class Transaction(BaseModel):
    """Transaction model representing a single ledger entry."""
    __tablename__ = "transactions"

    household_id = Column(Integer, ForeignKey("households.id"), nullable=False, index=True)
    type = Column(SQLEnum(TransactionType), default=TransactionType.EXPENSE, nullable=False)
    scope = Column(SQLEnum(TransactionScope), default=TransactionScope.HOUSEHOLD, nullable=False)
    amount = Column(BigInteger, nullable=False)  # Minor units, expenses negative
    occurred_on = Column(Date, nullable=False, index=True)
    payer_member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    beneficiary_member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)  # Equals payer for HOUSEHOLD
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    # Relationships
    payer = relationship("Member", foreign_keys=[payer_member_id])
    beneficiary = relationship("Member", foreign_keys=[beneficiary_member_id])
