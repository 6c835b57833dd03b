from fastapi import APIRouter, Depends, HTTPException, status

from splitledger.core.identity import get_caller_identity
from splitledger.db.session import get_ledger_service
from splitledger.schemas.settlement import SettlementCreate, SettlementResponse
from splitledger.services.ledger_service import LedgerService
from splitledger.utils.ledger_validation import InvalidInput

router = APIRouter()

@router.post("", response_model=SettlementResponse, status_code=status.HTTP_201_CREATED)
async def create_settlement(
    settlement_in: SettlementCreate,
    caller: str = Depends(get_caller_identity),
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Attest that the caller paid amount to to_identity.

    The transfer itself happens outside the ledger and balances are not changed.
    """
    try:
        event = await service.settle(caller, settlement_in.to_identity, settlement_in.amount)
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return SettlementResponse.model_validate(event)
