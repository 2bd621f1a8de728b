"""Models package - Import all models for SQLAlchemy registration."""
from household_ledger.models.household import Household, Member, MemberRole
from household_ledger.models.transaction import Transaction, TransactionType, TransactionScope
from household_ledger.models.income import Income
from household_ledger.models.policy import Policy, ZeroIncomePolicy, RoundingPolicy
from household_ledger.models.settlement import Settlement, SettlementLine, SettlementStatus

__all__ = [
    "Household",
    "Member",
    "MemberRole",
    "Transaction",
    "TransactionType",
    "TransactionScope",
    "Income",
    "Policy",
    "ZeroIncomePolicy",
    "RoundingPolicy",
    "Settlement",
    "SettlementLine",
    "SettlementStatus",
]
