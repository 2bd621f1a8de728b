"""
Settlement service for month-end household settlement.

Loads a household's month of transactions and incomes, apportions shared
expenses by income, nets personal reimbursements, and persists the result
as a DRAFT settlement that an admin can finalize once.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from sqlalchemy.orm import Session, selectinload
from household_ledger.core.config import settings
from household_ledger.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from household_ledger.db.session import household_scope, lock_period
from household_ledger.models.income import Income
from household_ledger.models.policy import Policy
from household_ledger.models.settlement import Settlement, SettlementLine, SettlementStatus
from household_ledger.models.transaction import Transaction, TransactionType, TransactionScope
from household_ledger.schemas.context import CallerContext
from household_ledger.schemas.settlement import YearMonth
from household_ledger.services.apportionment import (
    compute_income_weights,
    apportion_expenses,
    calculate_actual_payments,
    compute_deltas,
    build_reimbursement_matrix,
    merge_balances,
)
from household_ledger.services.netting import Transfer, greedy_netting

logger = logging.getLogger(__name__)


def load_month_transactions(db: Session, household_id: int, period: YearMonth) -> List[Transaction]:
    """Load the household's non-deleted transactions that occurred in the period."""
    start, end = period.bounds()
    return db.query(Transaction).filter(
        Transaction.household_id == household_id,
        Transaction.occurred_on >= start,
        Transaction.occurred_on <= end,
        Transaction.deleted_at.is_(None)
    ).order_by(Transaction.id).all()


def load_month_incomes(db: Session, household_id: int, period: YearMonth) -> List[Income]:
    """Load the household's non-deleted income records for the period."""
    return db.query(Income).filter(
        Income.household_id == household_id,
        Income.year == period.year,
        Income.month == period.month,
        Income.deleted_at.is_(None)
    ).order_by(Income.member_id).all()


def get_household_policy(db: Session, household_id: int) -> Policy:
    """Return the household's policy, or an unsaved one holding the configured defaults."""
    policy = db.query(Policy).filter(Policy.household_id == household_id).first()
    if policy:
        return policy

    return Policy(
        household_id=household_id,
        zero_income_policy=settings.DEFAULT_ZERO_INCOME_POLICY,
        rounding_policy=settings.DEFAULT_ROUNDING_POLICY
    )


def calculate_balances(transactions: Iterable, incomes: Iterable, policy) -> Dict[int, int]:
    """
    Compute each member's net balance for a month.

    Positive = the member is owed money, negative = the member owes money.
    """
    expenses = [t for t in transactions if t.type == TransactionType.EXPENSE]
    household_expenses = [t for t in expenses if t.scope == TransactionScope.HOUSEHOLD]
    personal_expenses = [t for t in expenses if t.scope == TransactionScope.PERSONAL]

    weights = compute_income_weights(incomes, policy.zero_income_policy)
    shares = apportion_expenses(household_expenses, weights, policy.rounding_policy)
    actual_payments = calculate_actual_payments(household_expenses)
    household_deltas = compute_deltas(actual_payments, shares)

    reimbursements = build_reimbursement_matrix(personal_expenses)
    balances = merge_balances(household_deltas, reimbursements)

    drift = sum(balances.values())
    if drift:
        logger.debug(f"Rounding drift of {drift} across {len(household_expenses)} household expenses")

    return balances


def calculate_transfers(transactions: Iterable, incomes: Iterable, policy) -> List[Transfer]:
    """Compute the settlement transfers for a month of records."""
    return greedy_netting(calculate_balances(transactions, incomes, policy))


def compute_settlement(household_id: int, period: YearMonth, caller: CallerContext, db: Session) -> Settlement:
    """
    Calculate the period's settlement and store it as the household's DRAFT.

    Any earlier DRAFT for the period is replaced. Raises ConflictError if the
    period is already finalized.
    """
    if household_id != caller.household_id:
        logger.warning(f"Member {caller.member_id} tried to settle household {household_id}")
        raise ForbiddenError(
            "Cannot compute a settlement for another household",
            {"household_id": household_id}
        )

    with household_scope(db, caller):
        lock_period(db, household_id, period.year, period.month)

        existing = _find_for_period(db, household_id, period)
        if existing and existing.status == SettlementStatus.FINALIZED:
            logger.warning(f"Refusing to recompute finalized settlement {existing.id} for {period}")
            raise ConflictError(
                f"Settlement for {period} is already finalized",
                {"settlement_id": existing.id}
            )

        transactions = load_month_transactions(db, household_id, period)
        incomes = load_month_incomes(db, household_id, period)
        policy = get_household_policy(db, household_id)

        transfers = calculate_transfers(transactions, incomes, policy)

        # Delete old drafts first so the unique (household, period) row is free
        if existing:
            db.delete(existing)
            db.flush()

        settlement = Settlement(
            household_id=household_id,
            year=period.year,
            month=period.month,
            status=SettlementStatus.DRAFT,
            lines=[
                SettlementLine(
                    from_member_id=t.from_member_id,
                    to_member_id=t.to_member_id,
                    amount=t.amount,
                    description=t.description
                )
                for t in transfers
            ]
        )
        db.add(settlement)
        db.flush()

        # Reload inside the scope; server defaults are expired by the flush
        settlement = _settlements(db).filter(Settlement.id == settlement.id).one()

        logger.info(
            f"Computed draft settlement {settlement.id} for household {household_id} {period}: "
            f"{len(transactions)} transactions, {len(incomes)} incomes, {len(transfers)} transfers"
        )

    return settlement


def finalize_settlement(settlement_id: int, caller: CallerContext, db: Session) -> Settlement:
    """Mark a DRAFT settlement FINALIZED. Irreversible; admin only."""
    if not caller.is_admin:
        logger.warning(f"Member {caller.member_id} without admin role tried to finalize settlement {settlement_id}")
        raise ForbiddenError("Only admin members can finalize settlements")

    with household_scope(db, caller):
        settlement = _settlements(db).filter(
            Settlement.id == settlement_id,
            Settlement.household_id == caller.household_id
        ).with_for_update().first()

        if not settlement:
            raise NotFoundError("Settlement not found", {"settlement_id": settlement_id})

        if settlement.status == SettlementStatus.FINALIZED:
            raise ConflictError("Settlement is already finalized", {"settlement_id": settlement_id})

        settlement.status = SettlementStatus.FINALIZED
        settlement.finalized_by = caller.member_id
        settlement.finalized_at = datetime.now(timezone.utc)
        db.flush()

        settlement = _settlements(db).filter(Settlement.id == settlement_id).one()

        logger.info(f"Settlement {settlement_id} finalized by member {caller.member_id}")

    return settlement


def list_settlements(caller: CallerContext, db: Session) -> List[Settlement]:
    """List the caller household's settlements, newest period first."""
    with household_scope(db, caller):
        settlements = _settlements(db).filter(
            Settlement.household_id == caller.household_id
        ).order_by(Settlement.year.desc(), Settlement.month.desc()).all()
    return settlements


def get_settlement(settlement_id: int, caller: CallerContext, db: Session) -> Settlement:
    """Get a settlement visible in the caller's household."""
    with household_scope(db, caller):
        settlement = _settlements(db).filter(
            Settlement.id == settlement_id,
            Settlement.household_id == caller.household_id
        ).first()

        if not settlement:
            raise NotFoundError("Settlement not found", {"settlement_id": settlement_id})

    return settlement


def get_settlement_for_period(period: YearMonth, caller: CallerContext, db: Session) -> Optional[Settlement]:
    """Get the caller household's settlement for a month, if one exists."""
    with household_scope(db, caller):
        settlement = _find_for_period(db, caller.household_id, period)
    return settlement


def _settlements(db: Session):
    """
    Settlement query that loads lines eagerly and overwrites stale identity-map rows.

    Everything returned is fully loaded before the scope commits, so callers
    never trigger a lazy load outside the household transaction.
    """
    return db.query(Settlement).options(selectinload(Settlement.lines)).populate_existing()


def _find_for_period(db: Session, household_id: int, period: YearMonth) -> Optional[Settlement]:
    return _settlements(db).filter(
        Settlement.household_id == household_id,
        Settlement.year == period.year,
        Settlement.month == period.month
    ).first()
