"""
Household apportionment policy model.
"""
from sqlalchemy import Column, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from household_ledger.db.base import BaseModel
import enum


class ZeroIncomePolicy(str, enum.Enum):
    """How to split shared expenses when nobody reported income."""
    EXCLUDE = "EXCLUDE"      # No apportionment for the month
    MIN_SHARE = "MIN_SHARE"  # Equal split across members with an income record


class RoundingPolicy(str, enum.Enum):
    """Rounding applied to each (expense, member) share."""
    ROUND = "ROUND"
    CEILING = "CEILING"
    FLOOR = "FLOOR"


class Policy(BaseModel):
    """At most one policy row per household."""
    __tablename__ = "policies"

    household_id = Column(Integer, ForeignKey("households.id"), nullable=False, unique=True, index=True)
    zero_income_policy = Column(SQLEnum(ZeroIncomePolicy), default=ZeroIncomePolicy.EXCLUDE, nullable=False)
    rounding_policy = Column(SQLEnum(RoundingPolicy), default=RoundingPolicy.ROUND, nullable=False)

    # Relationships
    household = relationship("Household", back_populates="policy")
