"""
Shared fixtures: an in-memory database seeded with one household.
"""
from datetime import date, datetime
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from household_ledger.db.base import Base
from household_ledger.models import (
    Household, Member, MemberRole, Transaction, TransactionType, TransactionScope, Income
)
from household_ledger.schemas.context import CallerContext
from household_ledger.schemas.settlement import YearMonth

PERIOD = YearMonth(year=2024, month=3)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        isolation_level="SERIALIZABLE",
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def household(db):
    """Household with an admin (alice) and two members (bob, carol)."""
    household = Household(name="Home")
    household.members = [
        Member(name="alice", role=MemberRole.ADMIN),
        Member(name="bob", role=MemberRole.MEMBER),
        Member(name="carol", role=MemberRole.MEMBER),
    ]
    db.add(household)
    db.commit()
    db.refresh(household)
    return household


@pytest.fixture
def members(household):
    return {m.name: m for m in household.members}


@pytest.fixture
def other_household(db):
    household = Household(name="Next door")
    household.members = [Member(name="dave", role=MemberRole.ADMIN)]
    db.add(household)
    db.commit()
    db.refresh(household)
    return household


@pytest.fixture
def admin(household, members):
    return CallerContext(member_id=members["alice"].id, household_id=household.id, role=MemberRole.ADMIN)


@pytest.fixture
def member(household, members):
    return CallerContext(member_id=members["bob"].id, household_id=household.id, role=MemberRole.MEMBER)


@pytest.fixture
def add_income(db, household):
    def _add(member, amount, period=PERIOD, deleted=False):
        income = Income(
            household_id=household.id,
            member_id=member.id,
            year=period.year,
            month=period.month,
            allocatable_amount=amount,
            deleted_at=datetime(2024, 4, 1) if deleted else None,
        )
        db.add(income)
        db.commit()
        return income
    return _add


@pytest.fixture
def add_expense(db, household):
    def _add(payer, amount, scope=TransactionScope.HOUSEHOLD, beneficiary=None,
             occurred_on=date(2024, 3, 15), type=TransactionType.EXPENSE, deleted=False):
        transaction = Transaction(
            household_id=household.id,
            type=type,
            scope=scope,
            amount=-amount if type == TransactionType.EXPENSE else amount,
            occurred_on=occurred_on,
            payer_member_id=payer.id,
            beneficiary_member_id=(beneficiary or payer).id,
            deleted_at=datetime(2024, 4, 1) if deleted else None,
        )
        db.add(transaction)
        db.commit()
        return transaction
    return _add
