from datetime import datetime
from typing import Dict, List
from pydantic import BaseModel, Field


class ExpenseCreate(BaseModel):
    """
    Parallel lists: paid_amounts[i] and owed_amounts[i] belong to participants[i].

    Lengths, identities and amount ranges are checked by the ledger so
    that each failure reports its own message with a 400.
    """
    label: str
    participants: List[str]
    paid_amounts: List[int]
    owed_amounts: List[int]


class ExpenseCreated(BaseModel):
    id: int


class ExpenseInfoResponse(BaseModel):
    id: int
    label: str
    created_at: datetime


class ExpenseParticipantsResponse(BaseModel):
    id: int
    participants: List[str]


class ExpenseAmountResponse(BaseModel):
    id: int
    identity: str
    amount: int


class ExpenseCountResponse(BaseModel):
    count: int


class ExpenseDetailResponse(BaseModel):
    id: int
    label: str
    created_at: datetime
    participants: List[str]
    paid: Dict[str, int]
    owed: Dict[str, int]

    model_config = {"from_attributes": True}


class ExpenseListResponse(BaseModel):
    count: int
    offset: int
    items: List[ExpenseDetailResponse] = Field(default_factory=list)
