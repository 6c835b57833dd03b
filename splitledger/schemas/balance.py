from typing import Dict
from pydantic import BaseModel


class NetBalanceResponse(BaseModel):
    """net > 0: the identity is owed money. net < 0: the identity owes money."""
    identity: str
    net: int


class BalancesResponse(BaseModel):
    balances: Dict[str, int]
