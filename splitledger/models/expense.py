"""
Expense model - one append-only record of a shared expense.

Design principles:
- ids are sequential from 0, equal to the record count at creation
- Immutable once created, never deleted
- participants keep the caller's order, repeats included
- paid/owed hold one amount per distinct participant (last occurrence wins)
- Amounts are unsigned integers; paid and owed totals need not match
"""

from typing import Dict, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from splitledger.models.base import Amount, Identity


class ExpenseRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    label: str
    created_at: datetime
    participants: List[Identity]
    paid: Dict[Identity, Amount]
    owed: Dict[Identity, Amount]

    def amount_paid(self, identity: Identity) -> int:
        """Absent participants paid 0."""
        return self.paid.get(identity, 0)

    def amount_owed(self, identity: Identity) -> int:
        return self.owed.get(identity, 0)

    def net_for(self, identity: Identity) -> int:
        """This record's contribution to an identity's net balance."""
        return self.amount_paid(identity) - self.amount_owed(identity)
