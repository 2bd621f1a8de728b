"""
Monthly income model used for apportionment weights.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, BigInteger, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from household_ledger.db.base import BaseModel


class Income(BaseModel):
    """A member's allocatable income for one calendar month."""
    __tablename__ = "incomes"
    __table_args__ = (
        UniqueConstraint("member_id", "year", "month", name="uq_incomes_member_period"),
        CheckConstraint("allocatable_amount >= 0", name="ck_incomes_allocatable_non_negative"),
    )

    household_id = Column(Integer, ForeignKey("households.id"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    allocatable_amount = Column(BigInteger, nullable=False, default=0)
    deleted_at = Column(DateTime, nullable=True)

    # Relationships
    member = relationship("Member")
