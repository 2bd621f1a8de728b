"""
Household and member models.
"""
from sqlalchemy import Column, String, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from household_ledger.db.base import BaseModel
import enum


class MemberRole(str, enum.Enum):
    """Member role enumeration."""
    ADMIN = "admin"
    MEMBER = "member"


class Household(BaseModel):
    """Household model; the tenant boundary for all ledger data."""
    __tablename__ = "households"

    name = Column(String(200), nullable=False)

    # Relationships
    members = relationship("Member", back_populates="household", cascade="all, delete-orphan")
    policy = relationship("Policy", back_populates="household", uselist=False, cascade="all, delete-orphan")
    settlements = relationship("Settlement", back_populates="household", cascade="all, delete-orphan")


class Member(BaseModel):
    """Household member; payer, beneficiary and income earner in the ledger."""
    __tablename__ = "members"

    household_id = Column(Integer, ForeignKey("households.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    role = Column(SQLEnum(MemberRole), default=MemberRole.MEMBER, nullable=False)

    # Relationships
    household = relationship("Household", back_populates="members")
