"""
Database session management.
"""
import logging
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from household_ledger.core.config import settings
from household_ledger.db.base import Base

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    isolation_level=settings.DB_ISOLATION_LEVEL,
    connect_args=connect_args,
    pool_pre_ping=True,
    pool_recycle=3600
)

# Lifecycle results stay loaded after commit; nothing may lazy-load outside household_scope
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)


def is_postgresql(db: Session) -> bool:
    return db.get_bind().dialect.name == "postgresql"


@contextmanager
def household_scope(db: Session, caller) -> Iterator[Session]:
    """
    Run a unit of work as one transaction scoped to the caller's household.

    On PostgreSQL the caller's household, member and role are published as
    transaction-local settings for row-level security policies. Queries still
    filter on household_id explicitly. Commits on success; any exception
    rolls the transaction back and propagates unchanged.
    """
    try:
        if is_postgresql(db):
            db.execute(
                text(
                    "SELECT set_config('app.household_id', :household_id, true), "
                    "set_config('app.member_id', :member_id, true), "
                    "set_config('app.role', :role, true)"
                ),
                {
                    "household_id": str(caller.household_id),
                    "member_id": str(caller.member_id),
                    "role": caller.role.value,
                },
            )
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def lock_period(db: Session, household_id: int, year: int, month: int) -> None:
    """
    Serialize settlement writers for one household month.

    Takes a transaction-scoped advisory lock on PostgreSQL. Other backends
    rely on the engine isolation level and the settlement unique constraint.
    """
    if not is_postgresql(db):
        return
    logger.debug(f"Acquiring settlement lock for household {household_id} {year}-{month:02d}")
    db.execute(
        text("SELECT pg_advisory_xact_lock(:household_id, :period_key)"),
        {"household_id": household_id, "period_key": year * 100 + month},
    )
