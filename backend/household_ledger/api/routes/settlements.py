"""
Settlement management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
from typing import List
from household_ledger.db.session import get_db
from household_ledger.schemas.context import CallerContext
from household_ledger.schemas.settlement import SettlementResponse, SettlementRunRequest, YearMonth
from household_ledger.api.dependencies import get_caller_context
from household_ledger.services import settlement_service

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.get("", response_model=List[SettlementResponse])
async def list_settlements(
    caller: CallerContext = Depends(get_caller_context),
    db: Session = Depends(get_db)
):
    """List settlements for the caller's household, newest first."""
    return settlement_service.list_settlements(caller, db)


@router.post("/run", response_model=SettlementResponse)
async def run_settlement(
    request: SettlementRunRequest,
    caller: CallerContext = Depends(get_caller_context),
    db: Session = Depends(get_db)
):
    """Calculate the month's settlement as a draft."""
    period = YearMonth(year=request.year, month=request.month)
    return settlement_service.compute_settlement(caller.household_id, period, caller, db)


@router.get("/month/{year}/{month}", response_model=SettlementResponse)
async def get_settlement_for_month(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    caller: CallerContext = Depends(get_caller_context),
    db: Session = Depends(get_db)
):
    """Get the settlement for a specific month."""
    settlement = settlement_service.get_settlement_for_period(YearMonth(year=year, month=month), caller, db)
    if not settlement:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Settlement not found"
        )
    return settlement


@router.get("/{settlement_id}", response_model=SettlementResponse)
async def get_settlement(
    settlement_id: int,
    caller: CallerContext = Depends(get_caller_context),
    db: Session = Depends(get_db)
):
    """Get a settlement by id."""
    return settlement_service.get_settlement(settlement_id, caller, db)


@router.post("/{settlement_id}/finalize", response_model=SettlementResponse)
async def finalize_settlement(
    settlement_id: int,
    caller: CallerContext = Depends(get_caller_context),
    db: Session = Depends(get_db)
):
    """Finalize a draft settlement. Admin only."""
    return settlement_service.finalize_settlement(settlement_id, caller, db)
