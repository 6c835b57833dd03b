from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from splitledger.core.identity import get_caller_identity
from splitledger.db.session import get_ledger_service
from splitledger.schemas.balance import BalancesResponse, NetBalanceResponse
from splitledger.services.ledger_service import LedgerService

router = APIRouter()

@router.get("", response_model=BalancesResponse)
async def get_balances(
    identity: Optional[List[str]] = Query(None),
    service: LedgerService = Depends(get_ledger_service)
):
    """Balances for the given identities, or for every registered identity"""
    return BalancesResponse(balances=await service.balances(identity))

@router.get("/me", response_model=NetBalanceResponse)
async def get_my_balance(
    caller: str = Depends(get_caller_identity),
    service: LedgerService = Depends(get_ledger_service)
):
    """Get the caller's net balance"""
    return NetBalanceResponse(identity=caller, net=await service.net_balance(caller))

@router.get("/{identity}", response_model=NetBalanceResponse)
async def get_balance(identity: str, service: LedgerService = Depends(get_ledger_service)):
    """Net balance for any identity, registered or not"""
    return NetBalanceResponse(identity=identity, net=await service.net_balance(identity))
