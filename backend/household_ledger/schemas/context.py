"""
Pydantic schema for the authenticated caller.
"""
from pydantic import BaseModel
from household_ledger.models.household import MemberRole


class CallerContext(BaseModel):
    """Identity, household and role of the member making a request."""
    member_id: int
    household_id: int
    role: MemberRole = MemberRole.MEMBER

    model_config = {"frozen": True}

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN
