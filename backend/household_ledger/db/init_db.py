"""
Database initialization script.
"""
from household_ledger.db.session import init_db

# Import all models so SQLAlchemy can register them
from household_ledger.models import (  # noqa: F401
    Household, Member, Transaction, Income, Policy, Settlement, SettlementLine
)

if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Database initialized successfully!")
