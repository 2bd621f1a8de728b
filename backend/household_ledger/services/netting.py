"""
Greedy netting of member balances into transfers.
"""
from typing import Dict, List

TRANSFER_DESCRIPTION = "Settlement transfer"


class Transfer:
    """Represents a single transfer between members."""
    def __init__(self, from_member_id: int, to_member_id: int, amount: int, description: str = TRANSFER_DESCRIPTION):
        self.from_member_id = from_member_id
        self.to_member_id = to_member_id
        self.amount = amount
        self.description = description

    def __eq__(self, other):
        if not isinstance(other, Transfer):
            return NotImplemented
        return (self.from_member_id, self.to_member_id, self.amount) == (
            other.from_member_id, other.to_member_id, other.amount
        )

    def __repr__(self):
        return f"Transfer({self.from_member_id} -> {self.to_member_id}: {self.amount})"


def greedy_netting(balances: Dict[int, int]) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle balances.

    Payers (negative balance) are visited most-indebted first; each pays the
    receivers (positive balance) in order of largest credit until their debt
    is cleared. Ties are broken by member id so that identical balances
    always produce identical transfers. At most payers + receivers - 1 lines
    are emitted. If the balances do not sum to zero (rounding drift), the
    surplus side is left partly unsettled: transfers stop once either all
    debt or all credit is used up.
    """
    payers = sorted(
        ((member_id, -balance) for member_id, balance in balances.items() if balance < 0),
        key=lambda x: (-x[1], x[0]),
    )
    receivers = sorted(
        ((member_id, balance) for member_id, balance in balances.items() if balance > 0),
        key=lambda x: (-x[1], x[0]),
    )
    remaining_credit = [credit for _, credit in receivers]

    transfers = []
    recv_idx = 0

    for payer_id, debt in payers:
        remaining = debt
        while remaining > 0 and recv_idx < len(receivers):
            if remaining_credit[recv_idx] == 0:
                recv_idx += 1
                continue

            receiver_id = receivers[recv_idx][0]
            # Transfer the minimum of what's owed and what's needed
            transfer_amount = min(remaining, remaining_credit[recv_idx])
            transfers.append(Transfer(payer_id, receiver_id, transfer_amount))

            remaining -= transfer_amount
            remaining_credit[recv_idx] -= transfer_amount

    return transfers
