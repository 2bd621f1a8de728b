"""
Pydantic schemas for Settlement entity.
"""
import calendar
from pydantic import BaseModel, Field
from typing import List, Optional, Tuple
from datetime import date, datetime
from household_ledger.models.settlement import SettlementStatus


class YearMonth(BaseModel):
    """A settlement period: one calendar month."""
    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)

    model_config = {"frozen": True}

    def bounds(self) -> Tuple[date, date]:
        """Return (first day, last day) of the month, both inclusive."""
        _, last_day = calendar.monthrange(self.year, self.month)
        return date(self.year, self.month, 1), date(self.year, self.month, last_day)

    def __str__(self):
        return f"{self.year}-{self.month:02d}"


class SettlementRunRequest(YearMonth):
    """Schema for triggering a settlement calculation."""
    pass


class SettlementLineResponse(BaseModel):
    """Schema for a single transfer in settlement."""
    id: int
    from_member_id: int
    to_member_id: int
    amount: int  # Minor units
    description: Optional[str] = None

    class Config:
        from_attributes = True


class SettlementResponse(BaseModel):
    """Schema for settlement response."""
    id: int
    household_id: int
    year: int
    month: int
    status: SettlementStatus
    finalized_by: Optional[int] = None
    finalized_at: Optional[datetime] = None
    created_at: datetime
    lines: List[SettlementLineResponse] = []

    class Config:
        from_attributes = True
