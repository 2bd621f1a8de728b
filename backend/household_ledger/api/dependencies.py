"""
Request dependencies.
"""
from typing import Optional
from fastapi import Header, HTTPException, status
from pydantic import ValidationError
from household_ledger.schemas.context import CallerContext


async def get_caller_context(
    x_member_id: Optional[str] = Header(None),
    x_household_id: Optional[str] = Header(None),
    x_member_role: Optional[str] = Header(None),
) -> CallerContext:
    """
    Build the caller context from identity headers.

    The headers are set by the authenticating gateway in front of this
    service; requests without them are rejected.
    """
    if not x_member_id or not x_household_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing caller identity"
        )

    try:
        return CallerContext(
            member_id=x_member_id,
            household_id=x_household_id,
            role=x_member_role or "member"
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid caller identity"
        )
