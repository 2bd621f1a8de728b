"""
Settlement models for month-end household settlement.
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, ForeignKey, Integer, BigInteger, UniqueConstraint
from sqlalchemy.orm import relationship
from household_ledger.db.base import BaseModel
import enum


class SettlementStatus(str, enum.Enum):
    """Settlement status enumeration."""
    DRAFT = "DRAFT"
    FINALIZED = "FINALIZED"


class Settlement(BaseModel):
    """Settlement of one household for one calendar month."""
    __tablename__ = "settlements"
    __table_args__ = (
        UniqueConstraint("household_id", "year", "month", name="uq_settlements_household_period"),
    )

    household_id = Column(Integer, ForeignKey("households.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    status = Column(SQLEnum(SettlementStatus), default=SettlementStatus.DRAFT, nullable=False)
    finalized_by = Column(Integer, ForeignKey("members.id"), nullable=True)
    finalized_at = Column(DateTime, nullable=True)

    # Relationships
    household = relationship("Household", back_populates="settlements")
    lines = relationship(
        "SettlementLine",
        back_populates="settlement",
        cascade="all, delete-orphan",
        order_by="SettlementLine.id",
    )


class SettlementLine(BaseModel):
    """A single transfer from one member to another."""
    __tablename__ = "settlement_lines"

    settlement_id = Column(Integer, ForeignKey("settlements.id", ondelete="CASCADE"), nullable=False, index=True)
    from_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    to_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    amount = Column(BigInteger, nullable=False)
    description = Column(String(200), nullable=True)

    # Relationships
    settlement = relationship("Settlement", back_populates="lines")
