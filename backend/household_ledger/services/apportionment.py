"""
Household expense apportionment.

Pure functions over in-memory records: income weights, per-member fair
shares of household expenses, what each member actually paid, and the
reimbursements owed for personal expenses paid on someone else's behalf.
Records are duck-typed; ORM rows and plain objects with the same attribute
names both work.

All money is integer minor units. Weights are exact fractions so that
they sum to exactly 1.
"""
import math
from fractions import Fraction
from typing import Dict, Iterable
from household_ledger.models.policy import ZeroIncomePolicy, RoundingPolicy

WeightMap = Dict[int, Fraction]
AmountMap = Dict[int, int]


def compute_income_weights(incomes: Iterable, zero_income_policy: ZeroIncomePolicy) -> WeightMap:
    """
    Weight each member by their share of the month's allocatable income.

    Members without an income record for the month get no weight at all.
    When the total is zero, EXCLUDE yields no weights (nothing is
    apportioned) and MIN_SHARE splits equally across the recorded members.
    """
    incomes = list(incomes)
    total_allocatable = sum(income.allocatable_amount for income in incomes)

    if total_allocatable > 0:
        return {
            income.member_id: Fraction(income.allocatable_amount, total_allocatable)
            for income in incomes
        }

    if zero_income_policy == ZeroIncomePolicy.MIN_SHARE and incomes:
        equal_weight = Fraction(1, len(incomes))
        return {income.member_id: equal_weight for income in incomes}

    return {}


def apply_rounding(amount: Fraction, rounding_policy: RoundingPolicy) -> int:
    """Round a non-negative share to whole minor units."""
    if rounding_policy == RoundingPolicy.CEILING:
        return math.ceil(amount)
    if rounding_policy == RoundingPolicy.FLOOR:
        return math.floor(amount)
    # Half up
    return math.floor(amount + Fraction(1, 2))


def apportion_expenses(expenses: Iterable, weights: WeightMap, rounding_policy: RoundingPolicy) -> AmountMap:
    """
    Compute what each weighted member should have paid.

    Each (expense, member) share is rounded on its own before it is added to
    the member's total, so totals may drift from the expense sum by up to one
    unit per expense.
    """
    shares: AmountMap = {member_id: 0 for member_id in weights}

    for expense in expenses:
        magnitude = abs(expense.amount)
        for member_id, weight in weights.items():
            shares[member_id] += apply_rounding(magnitude * weight, rounding_policy)

    return shares


def calculate_actual_payments(expenses: Iterable) -> AmountMap:
    """Sum what each member actually paid towards household expenses."""
    payments: AmountMap = {}
    for expense in expenses:
        payer_id = expense.payer_member_id
        payments[payer_id] = payments.get(payer_id, 0) + abs(expense.amount)
    return payments


def compute_deltas(actual_payments: AmountMap, shares: AmountMap) -> AmountMap:
    """Positive delta = overpaid (is owed), negative = underpaid (owes)."""
    member_ids = list(actual_payments) + [m for m in shares if m not in actual_payments]
    return {
        member_id: actual_payments.get(member_id, 0) - shares.get(member_id, 0)
        for member_id in member_ids
    }


def build_reimbursement_matrix(personal_expenses: Iterable) -> AmountMap:
    """Credit the payer and debit the beneficiary of each personal expense."""
    reimbursements: AmountMap = {}

    for expense in personal_expenses:
        payer_id = expense.payer_member_id
        beneficiary_id = expense.beneficiary_member_id
        if payer_id == beneficiary_id:
            continue

        magnitude = abs(expense.amount)
        reimbursements[payer_id] = reimbursements.get(payer_id, 0) + magnitude
        reimbursements[beneficiary_id] = reimbursements.get(beneficiary_id, 0) - magnitude

    return reimbursements


def merge_balances(household_deltas: AmountMap, reimbursements: AmountMap) -> AmountMap:
    """Add household deltas and reimbursement deltas per member."""
    member_ids = list(household_deltas) + [m for m in reimbursements if m not in household_deltas]
    return {
        member_id: household_deltas.get(member_id, 0) + reimbursements.get(member_id, 0)
        for member_id in member_ids
    }
