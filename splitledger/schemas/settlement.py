from pydantic import BaseModel
from datetime import datetime

class SettlementCreate(BaseModel):
    to_identity: str
    amount: int

class SettlementResponse(BaseModel):
    from_identity: str
    to_identity: str
    amount: int
    created_at: datetime

    model_config = {"from_attributes": True}
